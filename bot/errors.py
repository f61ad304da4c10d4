"""
Module: bot/errors.py

Exception types raised by the quote and schedule stores and the scheduler.
"""


class NotiError(Exception):
    """Base class for all bot errors."""


class LoadError(NotiError):
    """A backing file was missing or could not be parsed."""

    def __init__(self, path, reason):
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ValidationError(NotiError):
    """Malformed time or unknown day abbreviation."""


class NotFoundError(NotiError):
    """Rule index outside 1..count."""

    def __init__(self, user_id, index, count):
        super().__init__(f"Rule {index} not found for user {user_id} ({count} rules)")
        self.user_id = user_id
        self.index = index
        self.count = count


class NoOpError(NotiError):
    """Remove-all requested for a user without rules."""


class PersistenceError(NotiError):
    """Writing the schedule file failed; the in-memory change was rolled back."""


class NotifyError(NotiError):
    """Delivery of a phrase to a single user failed."""

    def __init__(self, user_id, cause):
        super().__init__(f"Failed to notify user {user_id}: {cause}")
        self.user_id = user_id
        self.cause = cause
