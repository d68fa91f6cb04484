"""Notifications app package.

Composes and delivers reservation emails (requester confirmations,
rejection notices, equipment setup requests) and routes equipment requests
to the system handlers responsible for them. Delivery is triggered from
Celery tasks in ``apps.bookings.tasks``.
"""
