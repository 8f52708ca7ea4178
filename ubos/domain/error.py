"""Domain layer errors.

Every error here is a terminal business outcome: retrying the same input
yields the same result. None of them represents an internal fault.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed input; the caller can correct the request."""

    code = "validation_error"

    def __init__(self, message: str, details: list[str] | None = None):
        self.details = details or []
        super().__init__(message)


class ConflictError(DomainError):
    """State conflict, e.g. a pending invitation already exists."""

    code = "conflict"


class QuotaExceededError(DomainError):
    """Organization pending-invitation ceiling would be exceeded."""

    code = "quota_exceeded"

    def __init__(self, current: int, requested: int, limit: int):
        self.current = current
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"Cannot have more than {limit} pending invitations per organization"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidInvitationError(DomainError):
    """Token does not identify a usable invitation."""

    code = "invalid_invitation"

    def __init__(self, message: str = "Invitation not found or has been used"):
        super().__init__(message)


class InvitationExpiredError(DomainError):
    """Token recognized but its acceptance window has closed."""

    code = "invitation_expired"

    def __init__(
        self, message: str = "Invitation has expired. Please request a new one."
    ):
        super().__init__(message)


class InvitationAlreadyAcceptedError(DomainError):
    """Token recognized but already consumed."""

    code = "invitation_already_accepted"

    def __init__(self, message: str = "Invitation has already been accepted"):
        super().__init__(message)


class CannotResendError(DomainError):
    """Resend attempted on an invitation that is no longer pending."""

    code = "cannot_resend"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Cannot resend invitation with status: {status}")
