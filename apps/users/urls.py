"""URL routing for user endpoints."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import MeView

urlpatterns = [
    path("me/", MeView.as_view(), name="user-me"),
]
