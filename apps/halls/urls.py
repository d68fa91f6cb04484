"""URL routing for halls and system handlers."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import HallViewSet, SystemHandlerViewSet

router = SimpleRouter()
# Registered before the catch-all hall routes
router.register(r"handlers", SystemHandlerViewSet, basename="system-handler")
router.register(r"", HallViewSet, basename="hall")

urlpatterns = [
    path("", include(router.urls)),
]
