"""Users app package.

Defines the custom user model used throughout the project
(``AUTH_USER_MODEL = "users.User"``). Users log in with their email and
carry a role: faculty members book halls, admins review and audit
reservations.
"""
