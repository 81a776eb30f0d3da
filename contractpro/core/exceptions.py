"""Custom exceptions for the ContractPro application."""


class ContractProException(Exception):
    """Base exception for ContractPro application."""

    pass


class ValidationError(ContractProException):
    """Raised when validation fails."""

    pass


class NotFoundError(ContractProException):
    """Raised when a resource is not found."""

    pass


class InvalidTransitionError(ContractProException):
    """Raised when a lifecycle operation is attempted from the wrong status."""

    pass


class AlreadySentOrSignedError(InvalidTransitionError):
    """Contract left draft already."""

    pass


class MustBeSentFirstError(InvalidTransitionError):
    """Contract cannot be signed before it is sent."""

    pass


class AlreadyPaidError(InvalidTransitionError):
    """Invoice is already paid."""

    pass


class NotYetSentError(InvalidTransitionError):
    """Invoice is still a draft."""

    pass


class DuplicateKeyError(ContractProException):
    """Raised when a unique constraint rejects a write."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} already exists")


class ConcurrentUpdateError(ContractProException):
    """Raised when a record changed between load and save."""

    pass


class ConfigurationError(ContractProException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(ContractProException):
    """Raised when authentication fails."""

    pass


class AuthorizationError(ContractProException):
    """Raised when an authenticated user lacks permission."""

    pass
