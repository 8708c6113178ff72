"""Custom exceptions for the provider directory service."""

from fastapi import status


class ProviderDirectoryError(Exception):
    """Base exception for provider directory errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ProviderDirectoryError):
    """Error during input validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "validation_error"


class NotFoundError(ProviderDirectoryError):
    """No provider matched, or a referenced provider does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"


class RepositoryError(ProviderDirectoryError):
    """Error raised by the underlying provider store."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "repository_error"


class ConcurrencyError(ProviderDirectoryError):
    """A versioned write lost against a concurrent update."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "concurrency_conflict"


class SearchTimeoutError(ProviderDirectoryError):
    """A match request ran past its deadline."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    error_code = "timeout"
