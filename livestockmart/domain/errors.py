"""Error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..application.validation import FieldIssue


class LivestockMartError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LivestockMartError):
    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, issues: Sequence["FieldIssue"] = ()) -> None:
        self.issues: List["FieldIssue"] = list(issues)
        if message is None and self.issues:
            message = "; ".join(issue.describe() for issue in self.issues)
        super().__init__(message)


class DuplicateEmail(LivestockMartError):
    status_code = 400
    default_message = "Email already in use"


class InvalidCredentials(LivestockMartError):
    status_code = 400
    default_message = "Invalid email or password"


class Unauthenticated(LivestockMartError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidSession(LivestockMartError):
    status_code = 401
    default_message = "Invalid or expired token"


class NotFound(LivestockMartError):
    status_code = 404
    default_message = "Not found"


class StoreError(LivestockMartError):
    status_code = 500
    default_message = "Server error"
