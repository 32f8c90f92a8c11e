"""
Constants for the App Configuration authentication library.
Header names and formats must match what the service verifies.
"""

# HTTP Headers
HEADER_HOST = "Host"
HEADER_DATE = "Date"
HEADER_CONTENT_HASH = "x-ms-content-sha256"
HEADER_AUTHORIZATION = "Authorization"

# Order matters: the service rebuilds the string-to-sign from this list
SIGNED_HEADERS = (HEADER_HOST, HEADER_DATE, HEADER_CONTENT_HASH)
SIGNED_HEADERS_VALUE = ";".join(SIGNED_HEADERS)

AUTHORIZATION_SCHEME = "HMAC-SHA256"
AUTHORIZATION_FORMAT = (
    AUTHORIZATION_SCHEME + " Credential={id}, SignedHeaders={signed_headers}, Signature={signature}"
)

# Connection string segment prefixes (matched case-insensitively)
ENDPOINT_PREFIX = "endpoint="
ID_PREFIX = "id="
SECRET_PREFIX = "secret="
CONNECTION_STRING_FORMAT = "endpoint={endpoint};id={id};secret={secret}"
MIN_SEGMENTS = 3

# Ports omitted from the Host header
DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
}
