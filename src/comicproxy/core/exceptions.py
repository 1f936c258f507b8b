"""Custom exceptions for the upload proxy."""


class UploadProxyError(Exception):
    """Base exception for the upload proxy."""

    status_code = 500


class AuthenticationError(UploadProxyError):
    """Raised when the bearer token is missing, invalid, expired or not admin."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ConfigurationError(UploadProxyError):
    """Raised when required storage settings are missing."""

    status_code = 500

    def __init__(self, message: str = "Storage not configured properly"):
        super().__init__(message)


class UploadValidationError(UploadProxyError):
    """Raised when required form fields are missing."""

    status_code = 400


class StorageProviderError(UploadProxyError):
    """Raised when the storage gateway reports a failure."""

    status_code = 500
