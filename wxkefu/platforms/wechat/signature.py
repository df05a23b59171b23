"""Verification of the signature WeChat attaches to server callbacks."""

from __future__ import annotations

import hashlib
import hmac
from typing import Mapping


def compute_signature(token: str, nonce: str, timestamp: str) -> str:
    """Return the lowercase hex SHA-1 of the sorted, concatenated inputs."""
    joined = "".join(sorted((token, nonce, timestamp)))
    return hashlib.sha1(joined.encode("utf-8", "surrogatepass")).hexdigest()


def check_signature(token: str, nonce: str, timestamp: str, signature: str) -> bool:
    """Verify that a callback originates from the WeChat servers.

    ``token`` is the server token configured in the mini program console. The
    inputs are order-insensitive since they are sorted before hashing.
    Malformed input yields ``False`` rather than an error.
    """
    expected = compute_signature(token, nonce, timestamp)
    return hmac.compare_digest(
        expected.encode("ascii"),
        signature.encode("utf-8", "surrogatepass"),
    )


def verify_callback(token: str, query: Mapping[str, str]) -> bool:
    """Check the ``signature``/``timestamp``/``nonce`` query parameters of a callback."""
    try:
        signature = query["signature"]
        timestamp = query["timestamp"]
        nonce = query["nonce"]
    except KeyError:
        return False
    return check_signature(token, nonce, timestamp, signature)
