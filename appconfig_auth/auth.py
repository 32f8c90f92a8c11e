"""
requests integration.

Attach App Configuration authentication to requests made through a
caller-owned session:

    session = requests.Session()
    session.auth = AppConfigAuth(connection_string)
    session.get(session.auth.base_uri + "/kv?key=foo")
"""

import datetime
from typing import Callable, Optional, Union

import requests
from requests.auth import AuthBase

from .constants import HEADER_DATE
from .credentials import Credential, parse_connection_string
from .exceptions import UnsupportedBodyError
from .signer import ConfigurationClientCredentials, HeaderSigner

CredentialSource = Union[str, Credential, HeaderSigner, ConfigurationClientCredentials]


def _make_signer(source: CredentialSource,
                 clock: Optional[Callable[[], datetime.datetime]]) -> HeaderSigner:
    if isinstance(source, HeaderSigner):
        return source
    if isinstance(source, ConfigurationClientCredentials):
        return source.signer
    if isinstance(source, Credential):
        return HeaderSigner(source, clock=clock)
    return HeaderSigner(parse_connection_string(source), clock=clock)


class AppConfigAuth(AuthBase):
    """Signs each prepared request with HMAC-SHA256 headers."""

    def __init__(self, credentials: CredentialSource,
                 clock: Optional[Callable[[], datetime.datetime]] = None):
        """
        Args:
            credentials: Connection string, Credential, HeaderSigner or
                ConfigurationClientCredentials
            clock: Time source, ignored when an existing signer is passed
        """
        self.signer = _make_signer(credentials, clock)

    @property
    def base_uri(self) -> str:
        return self.signer.credential.base_uri

    def _request_body(self, request: requests.PreparedRequest):
        body = request.body
        if body is None or isinstance(body, (bytes, str)):
            return body
        raise UnsupportedBodyError(
            f"cannot sign streamed request body of type {type(body).__name__}"
        )

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        headers = self.signer.sign(
            request.url,
            request.method,
            self._request_body(request),
            request.headers
        )

        # Keep whatever Date the caller set, under its original key
        if HEADER_DATE in request.headers:
            headers.pop(HEADER_DATE)

        request.headers.update(headers)
        return request
