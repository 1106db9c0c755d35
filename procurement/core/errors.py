#procurement/core/errors.py
from __future__ import annotations


class ProcurementError(Exception):
    """Base of every recognised failure raised by the managers; the message is what clients see."""

    default_message = "procurement error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------------------------------------------------------------
# not found
# ---------------------------------------------------------------------


class NotFound(ProcurementError):
    default_message = "not found"


class UserNotFound(NotFound):
    default_message = "user not found"


class OrganizationNotFound(NotFound):
    default_message = "organization not found"


class TenderNotFound(NotFound):
    default_message = "tender not found"


class BidNotFound(NotFound):
    default_message = "bid not found"


class VersionNotFound(NotFound):
    default_message = "version not found"


class AuthorNotFound(NotFound):
    default_message = "author not found"


# ---------------------------------------------------------------------
# authorization / input
# ---------------------------------------------------------------------


class NotEnoughPrivileges(ProcurementError):
    default_message = "not enough privileges"


class ParseError(ProcurementError):
    """Malformed or oversized input. `user_caused` marks a bad acting identity."""

    default_message = "invalid input"

    def __init__(self, message: str | None = None, *, user_caused: bool = False) -> None:
        super().__init__(message)
        self.user_caused = user_caused


# ---------------------------------------------------------------------
# infrastructure
# ---------------------------------------------------------------------


class InfrastructureError(ProcurementError):
    default_message = "storage failure"


class DeadlineExceeded(InfrastructureError):
    default_message = "deadline exceeded"
