"""
Error taxonomy for the account service.

Services raise these exceptions; the HTTP layer turns them into responses
through ERROR_STATUS_CODES. The message of a client-facing error is safe to
return to the caller. StorageError messages are only ever logged.
"""
from fastapi import status


class AccountServiceError(Exception):
    message = "Account service error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(AccountServiceError):
    message = "Invalid request"


class MissingFields(ValidationError):
    message = "You MUST provide name AND password"


class InvalidPassword(ValidationError):
    message = "Invalid password"


class MalformedToken(ValidationError):
    message = "Token is malformed"


class NotFoundOrUnauthorized(AccountServiceError):
    message = "Unauthorized"


class NotRegistered(NotFoundOrUnauthorized):
    message = "You are not registered"


class InvalidToken(NotFoundOrUnauthorized):
    message = "Invalid session token"


class ConflictError(AccountServiceError):
    message = "Conflict"


class AlreadyRegistered(ConflictError):
    message = "You are already registered"


class StorageError(AccountServiceError):
    message = "Storage failure"


ERROR_STATUS_CODES = {
    MalformedToken: status.HTTP_401_UNAUTHORIZED,
    ValidationError: 422,
    NotFoundOrUnauthorized: status.HTTP_401_UNAUTHORIZED,
    ConflictError: 422,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: AccountServiceError) -> int:
    """Most specific status code registered for the exception's class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR
