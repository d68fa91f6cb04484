"""DRF exception handler rendering domain errors as ``{"error": {...}}``."""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError, StoreError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    """Render DomainError subclasses; defer everything else to DRF.

    Views may expose ``render_conflict(obj) -> dict`` so that conflicting
    reservations are serialized the same way as regular responses.
    """

    if not isinstance(exc, DomainError):
        return drf_exception_handler(exc, context)

    if isinstance(exc, StoreError):
        logger.error(f"Store failure: {exc.message}", exc_info=exc.__cause__ or exc)

    view = context.get("view")
    render_conflict = getattr(view, "render_conflict", None)
    return Response(exc.to_dict(render_conflict=render_conflict), status=exc.http_status)
