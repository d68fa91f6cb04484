"""
Domain Error Taxonomy

Every failure of a booking operation is reported as one of these errors,
with enough structure for the API layer to render a specific message:

- ValidationError: missing/out-of-range fields, start >= end, bad transitions
- ConflictError: overlapping reservation detected (carries the conflicts)
- NotFoundError: hall or reservation absent
- StoreError: underlying persistence failure, never retried
"""

from typing import Any, Callable, Iterable


class DomainError(Exception):
    """Base class for errors reported to API callers."""

    kind = 'error'
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self, **_: Any) -> dict:
        return {'error': {'kind': self.kind, 'message': self.message}}


class ValidationError(DomainError):
    kind = 'validation'
    http_status = 400

    def __init__(self, message: str, fields: dict | None = None):
        super().__init__(message)
        self.fields = fields or {}

    def to_dict(self, **_: Any) -> dict:
        payload = super().to_dict()
        if self.fields:
            payload['error']['fields'] = self.fields
        return payload


class ConflictError(DomainError):
    """Raised when a hall is already reserved for an overlapping slot."""

    kind = 'conflict'
    http_status = 409

    def __init__(self, conflicts: Iterable[Any], message: str = 'Time slot conflict detected'):
        super().__init__(message)
        self.conflicts = list(conflicts)

    def to_dict(self, render_conflict: Callable[[Any], Any] | None = None, **_: Any) -> dict:
        payload = super().to_dict()
        render = render_conflict or (lambda conflict: conflict.pk)
        payload['error']['conflicts'] = [render(conflict) for conflict in self.conflicts]
        return payload


class NotFoundError(DomainError):
    kind = 'not_found'
    http_status = 404


class StoreError(DomainError):
    kind = 'store'
    http_status = 500
