# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import hmac
import secrets
import string
from collections.abc import Iterable
from hashlib import sha256
from urllib.parse import quote

from .exceptions import SigningKeyError

EMPTY_SHA256_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
NONCE_ALPHABET = string.ascii_uppercase + string.digits
NONCE_LENGTH = 32


def percent_encode(value: str) -> str:
    """Percent-encode a single URI component.

    Only the RFC 3986 unreserved characters (ASCII letters, digits, ``-``, ``_``,
    ``.`` and ``~``) are left literal. Every other UTF-8 byte becomes ``%XX`` with
    uppercase hex digits, so ``/``, ``=``, ``&``, ``+`` and spaces are all escaped.
    Keys and values must be encoded separately, never as a joined ``key=value``.
    """
    return quote(value, safe="")


def canonicalize_query(query: Iterable[tuple[str, str]]) -> str:
    """Build the canonical query string from ``(key, value)`` pairs.

    Pairs are keyed by their raw name with the last occurrence of a repeated key
    winning, sorted by that name, then encoded and joined as ``k=v&k=v``. An empty
    sequence produces the empty string.
    """
    unique = dict(query)
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}"
        for key, value in sorted(unique.items())
    )


def sha256_hex(value: str | bytes) -> str:
    """Lowercase hex SHA-256 digest. Text is hashed as UTF-8."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return sha256(value).hexdigest()


def hmac_sha256(key: str | bytes, message: str) -> bytes:
    """HMAC-SHA256 of ``message`` keyed with ``key``.

    :raises SigningKeyError: If the key cannot be turned into HMAC key material.
    """
    try:
        if isinstance(key, str):
            key = key.encode("utf-8")
        mac = hmac.new(key=key, digestmod=sha256)
    except (TypeError, ValueError) as e:
        raise SigningKeyError(
            "Unable to use the access key secret as an HMAC-SHA256 key."
        ) from e
    mac.update(message.encode("utf-8"))
    return mac.digest()


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Random ``[A-Z0-9]`` token used for ``x-acs-signature-nonce``."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))
