"""Role-based permission classes shared by the HallBook APIs."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_admin_user(user) -> bool:  # type: ignore
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsAdmin(permissions.BasePermission):
    """Only administrators (role=admin or Django staff)."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_admin_user(request.user)


class IsFaculty(permissions.BasePermission):
    """Only faculty members may submit booking requests."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_faculty") and user.is_faculty()


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Allow admins to write, but anyone authenticated can read.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False

        if request.method in permissions.SAFE_METHODS:
            return True

        return is_admin_user(user)


class IsReservationOwnerOrAdmin(permissions.BasePermission):
    """Object-level: the requester of a reservation or an admin."""

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if is_admin_user(user):
            return True
        return getattr(obj, "requester_id", None) == user.id
