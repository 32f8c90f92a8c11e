#!/usr/bin/env python3
"""
Basic usage examples for the App Configuration authentication library.

This script shows how to parse a connection string, compute the
authentication headers for a request, and sign requests made through a
requests session. Set APPCONFIG_CONNECTION_STRING to talk to a real store;
otherwise a demo connection string is used and nothing is sent.
"""

import logging
import os
import sys

import requests

from appconfig_auth import (
    AppConfigAuth,
    AppConfigAuthError,
    ConfigurationClientCredentials
)

DEMO_CONNECTION_STRING = (
    "endpoint=https://example.azconfig.io;id=demo-id;secret=AAAAAAAAAAAAAAAAAAAAAA=="
)


def main():
    """Run basic usage examples."""
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    connection_string = os.environ.get("APPCONFIG_CONNECTION_STRING")
    live = connection_string is not None
    connection_string = connection_string or DEMO_CONNECTION_STRING

    print("=== App Configuration Authentication Examples ===\n")

    # Example 1: Parse credentials
    print("1. Parsing connection string...")
    try:
        credentials = ConfigurationClientCredentials(connection_string)
    except AppConfigAuthError as e:
        print(f"   ✗ Invalid connection string: {e}")
        return 1
    print(f"   Endpoint: {credentials.base_uri}")
    print(f"   Credential id: {credentials.credential.id}\n")

    # Example 2: Compute headers for a single request
    print("2. Computing authentication headers...")
    url = credentials.base_uri + "/kv?key=color"
    headers = credentials.get_authorization_headers(url, "GET", b"")
    for name, value in headers.items():
        print(f"   {name}: {value}")
    print()

    # Example 3: Pre-stamped Date header
    print("3. Signing with a caller-supplied Date...")
    stamped = credentials.get_authorization_headers(
        url, "GET", b"", {"Date": "Wed, 01 Jan 2020 00:00:00 GMT"}
    )
    print(f"   Date: {stamped['Date']}")
    print(f"   Authorization: {stamped['Authorization']}\n")

    # Example 4: Sign requests through a session
    print("4. Signing requests through a requests session...")
    with requests.Session() as session:
        session.auth = AppConfigAuth(credentials)
        prepared = session.prepare_request(requests.Request("GET", url))
        print(f"   Prepared headers: {sorted(prepared.headers)}")

        if live:
            try:
                response = session.send(prepared, timeout=30)
                print(f"   Response: {response.status_code}")
            except requests.RequestException as e:
                print(f"   ✗ Request failed: {e}")
        else:
            print("   (demo credentials, request not sent)")

    print("\n=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
