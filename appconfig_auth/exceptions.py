"""
Custom exceptions for the App Configuration authentication library.
"""


class AppConfigAuthError(Exception):
    """Base exception for authentication errors."""
    pass


class MalformedConnectionStringError(AppConfigAuthError):
    """Raised when a connection string is empty or has too few segments."""
    pass


class InvalidEndpointError(AppConfigAuthError):
    """Raised when the endpoint segment is not an absolute URL."""
    pass


class InvalidSecretEncodingError(AppConfigAuthError):
    """Raised when the secret segment is not valid base64."""
    pass


class IncompleteCredentialError(AppConfigAuthError):
    """Raised when endpoint, id or secret is missing from a connection string."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(
            "connection string is missing required field(s): " + ", ".join(self.missing)
        )


class InvalidKeyMaterialError(AppConfigAuthError):
    """Raised when the decoded secret cannot be used as an HMAC key."""
    pass


class InvalidRequestURLError(AppConfigAuthError):
    """Raised when a URL to sign has no host."""
    pass


class UnsupportedBodyError(AppConfigAuthError):
    """Raised when a request body cannot be hashed without consuming it."""
    pass
