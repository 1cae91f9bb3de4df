"""Domain error codes for the accounts module."""

from enum import Enum

from events.domain.errors import DomainError


class AccountErrorCode(Enum):
    """Domain error codes."""

    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ALREADY_VERIFIED = "ALREADY_VERIFIED"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class AccountNotFoundError(DomainError):
    def __init__(self, user_id: int) -> None:
        super().__init__(
            code=AccountErrorCode.ACCOUNT_NOT_FOUND,
            message="Account not found",
        )
        self.user_id = user_id


class EmailTakenError(DomainError):
    """Raised when an email is already registered, in any letter case."""

    def __init__(self) -> None:
        super().__init__(
            code=AccountErrorCode.EMAIL_TAKEN,
            message="An account with this email already exists",
        )


class InvalidCredentialsError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=AccountErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
        )


class AlreadyVerifiedError(DomainError):
    """Raised when KYC is submitted for an already verified account."""

    def __init__(self, user_id: int) -> None:
        super().__init__(
            code=AccountErrorCode.ALREADY_VERIFIED,
            message="Your identity is already verified",
        )
        self.user_id = user_id


class AccountValidationError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(code=AccountErrorCode.VALIDATION_ERROR, message=message)
