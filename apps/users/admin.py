"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Personal info"),
            {"fields": ("username", "first_name", "last_name", "phone", "department")},
        ),
        (
            _("Role"),
            {"fields": ("role",)},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "role", "department", "password1", "password2"),
            },
        ),
    )
    list_display = ("email", "first_name", "last_name", "role", "department", "is_active")
    list_filter = ("role", "department", "is_active", "is_staff")
    search_fields = ("email", "first_name", "last_name", "department")
    ordering = ("email",)
