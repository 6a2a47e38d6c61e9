"""Process-wide default verifiers and shortcut checks."""

from functools import lru_cache

from klauth.core.settings import TokenSettings
from klauth.crypto.issuers import (
    authentication_issuers,
    build_registry,
    live_authorization_issuers,
)
from klauth.tokens.claims import (
    AuthenticationClaims,
    EmailAuthenticationClaims,
    LiveAuthorizationClaims,
)
from klauth.tokens.verifier import LiveAuthorizationVerifier, TokenVerifier


def _load_settings() -> TokenSettings:
    return TokenSettings()


def authentication_verifier(
    settings: TokenSettings,
) -> TokenVerifier[AuthenticationClaims]:
    """Build an authentication verifier from explicit settings."""
    registry = build_registry(authentication_issuers(), settings)
    return TokenVerifier(
        registry, AuthenticationClaims, leeway=settings.leeway_seconds
    )


@lru_cache(maxsize=1)
def get_authentication_verifier() -> TokenVerifier[AuthenticationClaims]:
    """Authentication verifier built once from the environment."""
    return authentication_verifier(_load_settings())


@lru_cache(maxsize=1)
def get_email_authentication_verifier() -> TokenVerifier[EmailAuthenticationClaims]:
    """Like :func:`get_authentication_verifier` but ``email`` is required."""
    settings = _load_settings()
    return TokenVerifier(
        get_authentication_verifier().registry,
        EmailAuthenticationClaims,
        leeway=settings.leeway_seconds,
    )


@lru_cache(maxsize=1)
def get_live_authorization_verifier() -> LiveAuthorizationVerifier:
    """Live authorization verifier built once from the environment."""
    settings = _load_settings()
    registry = build_registry(live_authorization_issuers(), settings)
    return LiveAuthorizationVerifier(
        registry,
        audience=settings.live_audience,
        leeway=settings.leeway_seconds,
    )


async def check_token(token: str | None) -> EmailAuthenticationClaims:
    """Verify an authentication token whose claims must include an email."""
    return await get_email_authentication_verifier().verify(token)


async def check_authentication_token(token: str | None) -> AuthenticationClaims:
    """Verify an authentication token (email or phone based accounts)."""
    return await get_authentication_verifier().verify(token)


async def check_live_authorization_token(
    token: str | None,
) -> LiveAuthorizationClaims:
    """Verify a live room authorization token."""
    return await get_live_authorization_verifier().verify(token)


async def check_live_authorization_token_and_user_id(
    token: str | None, user_id: str | None
) -> LiveAuthorizationClaims:
    """Verify a live authorization token issued for ``user_id``."""
    return await get_live_authorization_verifier().verify_for_user(token, user_id)


def reset_default_verifiers() -> None:
    """Drop cached verifiers so the next call re-reads the environment."""
    get_authentication_verifier.cache_clear()
    get_email_authentication_verifier.cache_clear()
    get_live_authorization_verifier.cache_clear()
