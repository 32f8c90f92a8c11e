"""
Unit tests for connection string parsing.
"""

import base64
import dataclasses

import pytest

from appconfig_auth import (
    Credential,
    parse_connection_string,
    MalformedConnectionStringError,
    InvalidEndpointError,
    InvalidSecretEncodingError,
    IncompleteCredentialError,
    InvalidKeyMaterialError
)

SECRET_B64 = base64.b64encode(b"secretbytes").decode('ascii')


class TestParseConnectionString:
    """Test connection string parsing."""

    def test_parse_valid(self):
        """Test parsing a well-formed connection string."""
        credential = parse_connection_string(
            f"endpoint=https://example.com;id=myid;secret={SECRET_B64}"
        )

        assert credential.base_uri == "https://example.com"
        assert credential.id == "myid"
        assert credential.secret == b"secretbytes"

    def test_parse_any_segment_order(self):
        """Test that segment order does not matter."""
        credential = parse_connection_string(
            f"secret={SECRET_B64};id=myid;endpoint=https://example.com"
        )

        assert credential.base_uri == "https://example.com"
        assert credential.id == "myid"

    def test_parse_prefix_case_insensitive(self):
        """Test that prefixes match in any case while values keep theirs."""
        credential = parse_connection_string(
            f"Endpoint=https://Example.com;ID=MyId;SECRET={SECRET_B64}"
        )

        assert credential.base_uri == "https://Example.com"
        assert credential.id == "MyId"
        assert credential.secret == b"secretbytes"

    def test_parse_trims_segments(self):
        """Test that whitespace around segments is ignored."""
        credential = parse_connection_string(
            f"  endpoint=https://example.com ; id=myid ;\tsecret={SECRET_B64}  "
        )

        assert credential.base_uri == "https://example.com"
        assert credential.id == "myid"
        assert credential.secret == b"secretbytes"

    def test_parse_ignores_unknown_segments(self):
        """Test forward compatibility with extra segments."""
        credential = parse_connection_string(
            f"endpoint=https://example.com;region=west;id=myid;secret={SECRET_B64};flag"
        )

        assert credential.id == "myid"

    def test_parse_last_duplicate_wins(self):
        """Test that a repeated key keeps its last value."""
        credential = parse_connection_string(
            f"endpoint=https://example.com;id=first;id=second;secret={SECRET_B64}"
        )

        assert credential.id == "second"

    def test_parse_secret_without_padding(self):
        """Test lenient decoding of unpadded base64."""
        unpadded = SECRET_B64.rstrip("=")
        assert unpadded != SECRET_B64

        credential = parse_connection_string(
            f"endpoint=https://example.com;id=myid;secret={unpadded}"
        )

        assert credential.secret == b"secretbytes"

    def test_parse_id_is_verbatim(self):
        """Test that the id is not decoded."""
        credential = parse_connection_string(
            f"endpoint=https://example.com;id=a%2Fb=c;secret={SECRET_B64}"
        )

        assert credential.id == "a%2Fb=c"

    def test_parse_too_few_segments(self):
        """Test that fewer than three segments are rejected."""
        with pytest.raises(MalformedConnectionStringError):
            parse_connection_string("endpoint=https://x.com;id=abc")

    def test_parse_trailing_separator_not_a_segment(self):
        """Test that a trailing semicolon does not count as a segment."""
        with pytest.raises(MalformedConnectionStringError):
            parse_connection_string("endpoint=https://x.com;id=abc;")

    @pytest.mark.parametrize("value", ["", None])
    def test_parse_empty(self, value):
        """Test that an empty connection string is rejected."""
        with pytest.raises(MalformedConnectionStringError):
            parse_connection_string(value)

    @pytest.mark.parametrize("endpoint", [
        "not a url",
        "example.com",
        "https://",
        "https://example.com:99999",
        "",
    ])
    def test_parse_invalid_endpoint(self, endpoint):
        """Test that a non-absolute endpoint is rejected."""
        with pytest.raises(InvalidEndpointError):
            parse_connection_string(f"endpoint={endpoint};id=myid;secret={SECRET_B64}")

    def test_parse_invalid_secret(self):
        """Test that a secret which is not base64 is rejected."""
        with pytest.raises(InvalidSecretEncodingError) as exc_info:
            parse_connection_string("endpoint=https://example.com;id=myid;secret=not*base64")

        assert "not*base64" not in str(exc_info.value)

    @pytest.mark.parametrize("connection_string,missing", [
        ("id=a;id=b;endpoint=https://example.com", ("secret",)),
        (f"secret={SECRET_B64};id=myid;foo=bar", ("endpoint",)),
        (f"endpoint=https://example.com;secret={SECRET_B64};foo=bar", ("id",)),
        ("foo=1;bar=2;baz=3", ("endpoint", "id", "secret")),
    ])
    def test_parse_incomplete(self, connection_string, missing):
        """Test that each missing field is reported."""
        with pytest.raises(IncompleteCredentialError) as exc_info:
            parse_connection_string(connection_string)

        assert exc_info.value.missing == missing
        for name in missing:
            assert name in str(exc_info.value)

    def test_parse_empty_secret(self):
        """Test that a secret decoding to nothing is rejected."""
        with pytest.raises(InvalidKeyMaterialError):
            parse_connection_string("endpoint=https://example.com;id=myid;secret=")


class TestCredential:
    """Test the Credential value object."""

    @pytest.fixture
    def credential(self):
        return Credential("https://example.com", "myid", b"secretbytes")

    def test_immutable(self, credential):
        """Test that fields cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            credential.id = "other"

    def test_repr_hides_secret(self, credential):
        """Test that the secret never shows up in repr."""
        assert "secretbytes" not in repr(credential)
        assert "myid" in repr(credential)

    def test_bytearray_secret_normalized(self):
        """Test that a bytearray secret is stored as bytes."""
        credential = Credential("https://example.com", "myid", bytearray(b"key"))

        assert credential.secret == b"key"
        assert isinstance(credential.secret, bytes)

    def test_invalid_endpoint(self):
        with pytest.raises(InvalidEndpointError):
            Credential("/relative/path", "myid", b"key")

    def test_empty_id(self):
        with pytest.raises(IncompleteCredentialError):
            Credential("https://example.com", "", b"key")

    @pytest.mark.parametrize("secret", [b"", "text-secret", None])
    def test_invalid_secret(self, secret):
        with pytest.raises(InvalidKeyMaterialError):
            Credential("https://example.com", "myid", secret)
