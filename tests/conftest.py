"""Shared test fixtures for klauth."""

import time
from collections.abc import Iterator
from typing import Any

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from klauth.crypto.issuers import (
    KIDSLOOP_ISSUER_ID,
    RSA_ALGORITHMS,
    IssuerRegistry,
    development_issuer,
)
from klauth.crypto.types import IssuerConfig
from klauth.tokens.checks import reset_default_verifiers

from tests.support import DEV_SECRET, MintToken

_ENV_VARS = (
    "KIDSLOOP_ENVIRONMENT",
    "NODE_ENV",
    "KIDSLOOP_DEV_JWT_SECRET",
    "DEV_JWT_SECRET",
    "DEV_SECRET",
    "KIDSLOOP_ACCESS_COOKIE",
    "KIDSLOOP_LEEWAY_SECONDS",
    "KIDSLOOP_LIVE_AUDIENCE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from an empty token environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_default_verifiers()
    yield
    reset_default_verifiers()


@pytest.fixture(scope="session")
def rsa_private_key() -> RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key() -> EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_private_key: RSAPrivateKey) -> str:
    return (
        rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )


@pytest.fixture
def kidsloop_issuer(rsa_private_key: RSAPrivateKey) -> IssuerConfig:
    """Production-like RSA issuer keyed with the test keypair."""
    return IssuerConfig(
        issuer_id=KIDSLOOP_ISSUER_ID,
        algorithms=RSA_ALGORITHMS,
        key_material=rsa_private_key.public_key(),
    )


@pytest.fixture
def registry(kidsloop_issuer: IssuerConfig) -> IssuerRegistry:
    """Registry with the RSA issuer plus the development issuer."""
    return IssuerRegistry(
        [kidsloop_issuer],
        dev_issuer=development_issuer(DEV_SECRET),
        warn=lambda _message: None,
    )


@pytest.fixture
def mint_token() -> MintToken:
    """Return a helper that signs a payload with fresh iat/exp claims."""

    def _mint(
        claims: dict[str, Any],
        key: Any = DEV_SECRET,
        *,
        algorithm: str = "HS256",
        issuer: str | None = "calmid-debug",
        ttl: int = 600,
    ) -> str:
        now = int(time.time())
        payload: dict[str, Any] = {"iat": now, "exp": now + ttl}
        if issuer is not None:
            payload["iss"] = issuer
        payload.update(claims)
        return jwt.encode(payload, key, algorithm=algorithm)

    return _mint
