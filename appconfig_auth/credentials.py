"""
Connection string parsing for App Configuration credentials.

A connection string is a semicolon-delimited bundle issued by the service:

    endpoint=https://example.azconfig.io;id=abc123;secret=c2VjcmV0

Segment order is irrelevant and unknown segments are ignored.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlsplit

from .constants import (
    CONNECTION_STRING_FORMAT,
    ENDPOINT_PREFIX,
    ID_PREFIX,
    MIN_SEGMENTS,
    SECRET_PREFIX
)
from .exceptions import (
    IncompleteCredentialError,
    InvalidEndpointError,
    InvalidKeyMaterialError,
    InvalidSecretEncodingError,
    MalformedConnectionStringError
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """
    Parsed credentials for one App Configuration store.

    Attributes:
        base_uri: Absolute URL of the service endpoint
        id: Credential identifier issued by the service
        secret: Raw HMAC key bytes (never part of repr)
    """

    base_uri: str
    id: str
    secret: bytes = field(repr=False)

    def __post_init__(self):
        _check_endpoint(self.base_uri)

        if not self.id:
            raise IncompleteCredentialError(["id"])

        if not isinstance(self.secret, (bytes, bytearray)):
            raise InvalidKeyMaterialError("secret must be bytes")
        if not self.secret:
            raise InvalidKeyMaterialError("secret is empty after decoding")
        object.__setattr__(self, "secret", bytes(self.secret))


def _check_endpoint(value: str) -> str:
    """Ensure value is an absolute URL with a scheme and a host."""
    if not value:
        raise InvalidEndpointError("endpoint is empty")

    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port
    except ValueError as exc:
        raise InvalidEndpointError(f"endpoint is not a valid URL: {exc}") from exc

    if not parts.scheme or not parts.hostname:
        raise InvalidEndpointError(f"endpoint is not an absolute URL: {value!r}")
    return value


def _decode_secret(value: str) -> bytes:
    """Decode a standard base64 secret, tolerating missing padding."""
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSecretEncodingError("secret is not valid base64") from exc


def _split_segments(connection_string: str) -> List[str]:
    segments = connection_string.split(";")
    # Trailing separators do not count as segments
    while segments and not segments[-1]:
        segments.pop()
    return segments


def parse_connection_string(connection_string: Optional[str]) -> Credential:
    """
    Parse a connection string into a Credential.

    Args:
        connection_string: String in the form "endpoint=...;id=...;secret=..."

    Returns:
        Fully validated Credential

    Raises:
        MalformedConnectionStringError: If the string is empty or has fewer than 3 segments
        InvalidEndpointError: If the endpoint is not an absolute URL
        InvalidSecretEncodingError: If the secret is not valid base64
        IncompleteCredentialError: If endpoint, id or secret is missing
        InvalidKeyMaterialError: If the secret decodes to nothing
    """
    if not connection_string:
        raise MalformedConnectionStringError(
            f"connection string is empty, expected format: {CONNECTION_STRING_FORMAT}"
        )

    segments = _split_segments(connection_string)
    if len(segments) < MIN_SEGMENTS:
        raise MalformedConnectionStringError(
            f"invalid connection string segment count: {len(segments)}, "
            f"expected at least {MIN_SEGMENTS}"
        )

    endpoint = None
    credential_id = None
    secret = None

    for raw in segments:
        segment = raw.strip()
        lowered = segment.lower()

        if lowered.startswith(ENDPOINT_PREFIX):
            endpoint = _check_endpoint(segment[len(ENDPOINT_PREFIX):])
        elif lowered.startswith(ID_PREFIX):
            credential_id = segment[len(ID_PREFIX):]
        elif lowered.startswith(SECRET_PREFIX):
            secret = _decode_secret(segment[len(SECRET_PREFIX):])

    missing = [
        name for name, value in (("endpoint", endpoint), ("id", credential_id), ("secret", secret))
        if value is None
    ]
    if missing:
        raise IncompleteCredentialError(missing)

    credential = Credential(base_uri=endpoint, id=credential_id, secret=secret)
    logger.debug("Parsed credential %s for endpoint %s", credential.id, credential.base_uri)
    return credential
