"""Multi-issuer JWT verification.

Verification is split in two phases. The untrusted phase decodes the token
without checking its signature and reads only the ``iss`` claim, which
selects a registry entry. The trusted phase verifies the signature with the
key and algorithm allow-list of that entry, so a token can never choose its
own algorithm or key.
"""

import logging
from typing import Any, Generic

import jwt

from klauth.crypto.issuers import IssuerRegistry
from klauth.tokens.claims import ClaimsT, LiveAuthorizationClaims, normalize_claims
from klauth.tokens.errors import (
    MalformedToken,
    MissingToken,
    SignatureInvalid,
    SubjectMismatch,
    UnknownIssuer,
)

logger = logging.getLogger(__name__)


class TokenVerifier(Generic[ClaimsT]):
    """Verifies bearer tokens against an issuer registry."""

    def __init__(
        self,
        registry: IssuerRegistry,
        claims_model: type[ClaimsT],
        *,
        audience: str | None = None,
        leeway: float = 0,
    ) -> None:
        self._registry = registry
        self._claims_model = claims_model
        self._audience = audience
        self._leeway = leeway

    @property
    def registry(self) -> IssuerRegistry:
        return self._registry

    @property
    def claims_model(self) -> type[ClaimsT]:
        return self._claims_model

    def read_issuer(self, token: str) -> str:
        """Read ``iss`` from an unverified token. Never trust anything else."""
        try:
            payload = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(f"Malformed token: {exc}") from exc
        issuer = payload.get("iss")
        if not issuer or not isinstance(issuer, str):
            raise MalformedToken("Malformed token: iss must be a non-empty string")
        return issuer

    async def verify(self, token: str | None) -> ClaimsT:
        """Verify ``token`` and return its normalized claims."""
        if not token:
            raise MissingToken("No token provided")
        issuer_id = self.read_issuer(token)
        issuer = self._registry.lookup(issuer_id)
        if issuer is None:
            raise UnknownIssuer(issuer_id)

        audience = issuer.audience or self._audience
        # Claim types are reported by the claims normalizer with field context.
        opts: dict[str, Any] = {"verify_sub": False}
        if audience is None:
            opts["verify_aud"] = False
        try:
            payload = jwt.decode(
                token,
                issuer.key_material,
                algorithms=sorted(issuer.algorithms),
                issuer=issuer.issuer_id,
                audience=audience,
                leeway=self._leeway,
                options=opts,
            )
        except jwt.InvalidTokenError as exc:
            raise SignatureInvalid(
                f"Token from issuer '{issuer_id}' failed verification: {exc}"
            ) from exc

        claims = normalize_claims(self._claims_model, payload)
        logger.debug("Verified token from issuer '%s'", issuer_id)
        return claims


class LiveAuthorizationVerifier(TokenVerifier[LiveAuthorizationClaims]):
    """Verifier for live room authorization tokens."""

    def __init__(
        self,
        registry: IssuerRegistry,
        *,
        audience: str | None = None,
        leeway: float = 0,
    ) -> None:
        super().__init__(
            registry, LiveAuthorizationClaims, audience=audience, leeway=leeway
        )

    async def verify_for_user(
        self, token: str | None, user_id: str | None
    ) -> LiveAuthorizationClaims:
        """Verify ``token`` and require it to be issued for ``user_id``.

        A ``None`` user id never matches, not even a token without a user.
        """
        claims = await self.verify(token)
        if user_id is None or claims.userid != user_id:
            raise SubjectMismatch(expected=user_id, actual=claims.userid)
        return claims
