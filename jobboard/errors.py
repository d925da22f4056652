"""Failures surfaced to the rendering layer.

Every operation either returns a valid result or raises exactly one of these.
Messages are written to be shown to the user as-is.
"""
from __future__ import annotations


class JobBoardError(Exception):
    """Base class for all job board failures."""


# ── Sessions ─────────────────────────────────────────────────────────────


class NotRegistered(JobBoardError):
    def __init__(self, message: str = "No account registered on this device.") -> None:
        super().__init__(message)


class InvalidCredentials(JobBoardError):
    def __init__(self, message: str = "Email, password or account type is incorrect.") -> None:
        super().__init__(message)


# ── Listings & applications ──────────────────────────────────────────────


class Unauthorized(JobBoardError):
    def __init__(self, message: str = "You are not allowed to do that.") -> None:
        super().__init__(message)


class NotFound(JobBoardError):
    def __init__(self, what: str, ident: str) -> None:
        self.what = what
        self.ident = ident
        super().__init__(f"{what} '{ident}' not found.")


class InvalidField(JobBoardError):
    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field.replace('_', ' ').capitalize()}: {reason}")


class InvalidRange(JobBoardError):
    def __init__(self, minimum: int, maximum: int) -> None:
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Minimum salary ({minimum:,}) cannot be greater than maximum salary ({maximum:,})."
        )


class AlreadyApplied(JobBoardError):
    def __init__(self, job_title: str) -> None:
        super().__init__(f"You have already applied for {job_title}.")
