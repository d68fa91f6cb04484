"""Bookings app package.

This app encapsulates the reservation domain: the reservation model, the
availability resolver that rejects overlapping slots, the command handlers
that admit, edit, review and delete reservations inside a transaction, and
the Celery tasks that notify requesters and equipment handlers. On
PostgreSQL an exclusion constraint backs the overlap rule in the database.
"""
