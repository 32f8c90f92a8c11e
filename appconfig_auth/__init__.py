"""
App Configuration authentication library.

Signs HTTP requests to an App Configuration store with HMAC-SHA256,
using the credentials from the store's connection string.

Example usage:
    from appconfig_auth import ConfigurationClientCredentials

    credentials = ConfigurationClientCredentials(
        "endpoint=https://example.azconfig.io;id=myid;secret=c2VjcmV0"
    )
    headers = credentials.get_authorization_headers(
        credentials.base_uri + "/kv?key=foo", "GET", b""
    )
"""

from .auth import AppConfigAuth
from .credentials import Credential, parse_connection_string
from .signer import ConfigurationClientCredentials, HeaderSigner, sign
from .exceptions import (
    AppConfigAuthError,
    MalformedConnectionStringError,
    InvalidEndpointError,
    InvalidSecretEncodingError,
    IncompleteCredentialError,
    InvalidKeyMaterialError,
    InvalidRequestURLError,
    UnsupportedBodyError
)
from .constants import (
    HEADER_HOST,
    HEADER_DATE,
    HEADER_CONTENT_HASH,
    HEADER_AUTHORIZATION,
    SIGNED_HEADERS
)

__version__ = "1.0.0"
__all__ = [
    "AppConfigAuth",
    "Credential",
    "parse_connection_string",
    "ConfigurationClientCredentials",
    "HeaderSigner",
    "sign",
    "AppConfigAuthError",
    "MalformedConnectionStringError",
    "InvalidEndpointError",
    "InvalidSecretEncodingError",
    "IncompleteCredentialError",
    "InvalidKeyMaterialError",
    "InvalidRequestURLError",
    "UnsupportedBodyError",
    "HEADER_HOST",
    "HEADER_DATE",
    "HEADER_CONTENT_HASH",
    "HEADER_AUTHORIZATION",
    "SIGNED_HEADERS"
]
