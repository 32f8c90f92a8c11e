"""
HMAC-SHA256 request signing for App Configuration.

For every request the signer produces the Host, Date, x-ms-content-sha256
and Authorization headers. The service rebuilds the same string-to-sign
from these headers and compares signatures, so the format below must be
reproduced byte for byte.
"""

import base64
import datetime
import email.utils
import hashlib
import hmac
import logging
from typing import Callable, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from .constants import (
    AUTHORIZATION_FORMAT,
    DEFAULT_PORTS,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_HASH,
    HEADER_DATE,
    HEADER_HOST,
    SIGNED_HEADERS_VALUE
)
from .credentials import Credential, parse_connection_string
from .exceptions import InvalidKeyMaterialError, InvalidRequestURLError, UnsupportedBodyError

logger = logging.getLogger(__name__)

Body = Union[bytes, bytearray, memoryview, str, None]


def _b64(data: bytes) -> str:
    # b64encode never wraps lines
    return base64.b64encode(data).decode('ascii')


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def format_http_date(moment: datetime.datetime) -> str:
    """Format a datetime as an HTTP-date, e.g. 'Wed, 01 Jan 2020 00:00:00 GMT'."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=datetime.timezone.utc)
    return email.utils.format_datetime(moment.astimezone(datetime.timezone.utc), usegmt=True)


def body_bytes(body: Body) -> bytes:
    """Normalize a request body to the bytes that go on the wire."""
    if body is None:
        return b''
    if isinstance(body, str):
        return body.encode('utf-8')
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise UnsupportedBodyError(
        f"cannot hash request body of type {type(body).__name__}; pass bytes or str"
    )


def content_hash(body: Body) -> str:
    """Base64 SHA-256 digest of the request body."""
    return _b64(hashlib.sha256(body_bytes(body)).digest())


def host_header(url: str) -> str:
    """
    Host header value for a URL.

    The port is kept only when it differs from the scheme's default.

    Raises:
        InvalidRequestURLError: If the URL has no host
    """
    parts = urlsplit(url)
    if not parts.hostname:
        raise InvalidRequestURLError(f"request URL has no host: {url!r}")

    try:
        port = parts.port
    except ValueError as exc:
        raise InvalidRequestURLError(f"request URL has an invalid port: {url!r}") from exc

    host = parts.netloc.rpartition('@')[2]
    if port is None:
        return host.rstrip(':')
    if port == DEFAULT_PORTS.get(parts.scheme.lower()):
        return host[:host.rindex(':')]
    return host


def path_and_query(url: str) -> str:
    """URL path, followed by '?' and the query string when there is one."""
    parts = urlsplit(url)
    if parts.query:
        return f"{parts.path}?{parts.query}"
    return parts.path


def build_string_to_sign(method: str, path_query: str, host: str, date: str, body_hash: str) -> str:
    """
    Canonical string-to-sign.

    Format: METHOD + "\\n" + path_and_query + "\\n" + host;date;content_hash
    The separator must be a bare "\\n" regardless of platform.
    """
    return method.upper() + "\n" + path_query + "\n" + ";".join((host, date, body_hash))


def _find_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    if not headers:
        return None
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


class HeaderSigner:
    """
    Produces authentication headers for requests to one App Configuration store.

    Only the immutable secret is retained; each call builds its own HMAC
    computation, so a single signer can be shared across threads.
    """

    def __init__(self, credential: Credential,
                 clock: Optional[Callable[[], datetime.datetime]] = None):
        """
        Initialize the signer.

        Args:
            credential: Parsed credentials
            clock: Callable returning the current time, defaults to UTC now

        Raises:
            InvalidKeyMaterialError: If the secret cannot be used as an HMAC key
        """
        secret = getattr(credential, 'secret', None)
        if not isinstance(secret, bytes) or not secret:
            raise InvalidKeyMaterialError("secret must be non-empty bytes")

        self.credential = credential
        self._clock = clock or _utc_now
        logger.debug("Created header signer for credential %s", credential.id)

    def signature(self, string_to_sign: str) -> str:
        """Base64 HMAC-SHA256 of the UTF-8 encoded string-to-sign."""
        mac = hmac.new(self.credential.secret, string_to_sign.encode('utf-8'), hashlib.sha256)
        return _b64(mac.digest())

    def sign(self, url: str, method: str, body: Body = b'',
             headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Compute authentication headers for a request.

        Args:
            url: Absolute request URL
            method: HTTP method, any case
            body: Request payload
            headers: Headers already on the request; an existing Date is reused

        Returns:
            Dict with Host, Date, x-ms-content-sha256 and Authorization

        Raises:
            InvalidRequestURLError: If the URL has no host
            UnsupportedBodyError: If the body is not bytes or str
        """
        host = host_header(url)
        body_hash = content_hash(body)

        date = _find_header(headers, HEADER_DATE)
        if date is None:
            date = format_http_date(self._clock())

        path_query = path_and_query(url)
        string_to_sign = build_string_to_sign(method, path_query, host, date, body_hash)

        authorization = AUTHORIZATION_FORMAT.format(
            id=self.credential.id,
            signed_headers=SIGNED_HEADERS_VALUE,
            signature=self.signature(string_to_sign)
        )

        logger.debug("Signed %s request for %s%s", method.upper(), host, path_query)
        return {
            HEADER_HOST: host,
            HEADER_DATE: date,
            HEADER_CONTENT_HASH: body_hash,
            HEADER_AUTHORIZATION: authorization
        }


def sign(credential: Credential, url: str, method: str, body: Body = b'',
         headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Sign a single request without keeping a signer around."""
    return HeaderSigner(credential).sign(url, method, body, headers)


class ConfigurationClientCredentials:
    """
    Credentials that authorize requests to App Configuration.

    Example usage:
        credentials = ConfigurationClientCredentials(connection_string)
        headers = credentials.get_authorization_headers(url, "GET", b"")
    """

    def __init__(self, connection_string: str,
                 clock: Optional[Callable[[], datetime.datetime]] = None):
        """
        Args:
            connection_string: "endpoint={endpoint};id={id};secret={secret}"
            clock: Optional time source forwarded to the signer
        """
        self.credential = parse_connection_string(connection_string)
        self.signer = HeaderSigner(self.credential, clock=clock)

    @property
    def base_uri(self) -> str:
        """Service endpoint taken from the connection string."""
        return self.credential.base_uri

    def get_authorization_headers(self, url: str, method: str, contents: Body = b'',
                                  headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Headers to add to a request to authenticate it."""
        return self.signer.sign(url, method, contents, headers)
