"""Constants and helpers shared by the test modules."""

import json
from collections.abc import Callable
from typing import Any

import jwt

DEV_SECRET = "test-dev-secret-0123456789abcdef0123456789abcdef0123456789abcdef"

MintToken = Callable[..., str]


def sign_raw_payload(
    payload: dict[str, Any], key: Any = DEV_SECRET, algorithm: str = "HS256"
) -> str:
    """Sign ``payload`` as-is, skipping PyJWT's claim type checks on encode."""
    return jwt.api_jws.encode(json.dumps(payload).encode(), key, algorithm=algorithm)
