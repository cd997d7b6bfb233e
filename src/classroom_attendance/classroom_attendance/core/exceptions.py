class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "Forbidden"


class TooEarlyError(ValidationError):
    """Check-in attempted before the check-in window opened."""

    kind = "TooEarly"


class InvalidConfigurationError(ValidationError):
    """Late/absent thresholds are negative or out of order."""

    kind = "InvalidConfiguration"


class DateNotFoundError(ValidationError):
    """The date is not one of the class's session dates."""

    kind = "DateNotFound"


class ExpiredError(ValidationError):
    """Invite code is past its expiry."""

    kind = "Expired"


class NotFoundError(ValidationError):
    """Class, student record or invite code does not exist."""

    kind = "NotFound"


class OutOfRangeError(ValidationError):
    """Check-in location is too far from the class's check-in location."""

    kind = "OutOfRange"
