"""Registry of trusted token issuers and their verification settings.

The registry is assembled once at startup and never changes afterwards.
In non-production environments exactly one extra symmetric-key issuer,
``calmid-debug``, may be appended; that insertion is announced through a
replaceable warning sink so operators can see a development trust anchor
is live.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from types import MappingProxyType

from klauth.core.settings import TokenSettings
from klauth.crypto.keys import load_public_key
from klauth.crypto.trusted_keys import (
    KIDSLOOP_CHINA_USER_LIVE_PUBLIC_KEY,
    KIDSLOOP_PUBLIC_KEY,
    KIDSLOOP_USER_LIVE_PUBLIC_KEY,
)
from klauth.crypto.types import IssuerConfig

logger = logging.getLogger(__name__)

DEV_ISSUER_ID = "calmid-debug"
DEV_ALGORITHMS = frozenset({"HS512", "HS384", "HS256"})

KIDSLOOP_ISSUER_ID = "kidsloop"
USER_LIVE_ISSUER_ID = "KidsLoopUser-live"
CHINA_USER_LIVE_ISSUER_ID = "KidsLoopChinaUser-live"

RSA_ALGORITHMS = frozenset({"RS256", "RS384", "RS512"})
PSS_ALGORITHMS = frozenset({"PS256", "PS384", "PS512"})


class IssuerRegistry:
    """Immutable mapping from issuer id to :class:`IssuerConfig`."""

    def __init__(
        self,
        issuers: Iterable[IssuerConfig],
        dev_issuer: IssuerConfig | None = None,
        warn: Callable[[str], None] = logger.warning,
    ) -> None:
        entries: dict[str, IssuerConfig] = {}
        for issuer in issuers:
            if issuer.issuer_id in entries:
                raise ValueError(f"Duplicate issuer '{issuer.issuer_id}'")
            entries[issuer.issuer_id] = issuer
        if dev_issuer is not None:
            if dev_issuer.issuer_id in entries:
                raise ValueError(
                    f"Development issuer '{dev_issuer.issuer_id}' "
                    "shadows a production issuer"
                )
            warn(
                "Environment is not set to 'production': "
                f"accepting JWTs issued by '{dev_issuer.issuer_id}', "
                f"signed with symmetric secret '{_secret_text(dev_issuer)}'"
            )
            entries[dev_issuer.issuer_id] = dev_issuer
        self._entries = MappingProxyType(entries)
        self._dev_issuer = dev_issuer

    def lookup(self, issuer_id: str) -> IssuerConfig | None:
        """Return the config registered for ``issuer_id``, if any."""
        return self._entries.get(issuer_id)

    @property
    def issuer_ids(self) -> frozenset[str]:
        return frozenset(self._entries)

    @property
    def dev_issuer(self) -> IssuerConfig | None:
        """The development issuer, when one was appended at startup."""
        return self._dev_issuer

    def __contains__(self, issuer_id: object) -> bool:
        return issuer_id in self._entries

    def __iter__(self) -> Iterator[IssuerConfig]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def _secret_text(issuer: IssuerConfig) -> str:
    key = issuer.key_material
    if isinstance(key, bytes):
        return key.decode(errors="replace")
    return str(key)


def development_issuer(secret: str) -> IssuerConfig:
    """Build the symmetric-key ``calmid-debug`` issuer."""
    return IssuerConfig(
        issuer_id=DEV_ISSUER_ID,
        algorithms=DEV_ALGORITHMS,
        key_material=secret,
    )


def authentication_issuers() -> list[IssuerConfig]:
    """Production issuers accepted for authentication tokens."""
    return [
        IssuerConfig(
            issuer_id=KIDSLOOP_ISSUER_ID,
            algorithms=RSA_ALGORITHMS,
            key_material=load_public_key(KIDSLOOP_PUBLIC_KEY),
        ),
    ]


def live_authorization_issuers() -> list[IssuerConfig]:
    """Production issuers accepted for live room authorization tokens."""
    return [
        IssuerConfig(
            issuer_id=USER_LIVE_ISSUER_ID,
            algorithms=frozenset({"RS512"}),
            key_material=load_public_key(KIDSLOOP_USER_LIVE_PUBLIC_KEY),
        ),
        IssuerConfig(
            issuer_id=CHINA_USER_LIVE_ISSUER_ID,
            algorithms=frozenset({"RS512"}),
            key_material=load_public_key(KIDSLOOP_CHINA_USER_LIVE_PUBLIC_KEY),
        ),
        # The kidsloop key is RSA, so only the RSA and PSS families apply.
        IssuerConfig(
            issuer_id=KIDSLOOP_ISSUER_ID,
            algorithms=RSA_ALGORITHMS | PSS_ALGORITHMS,
            key_material=load_public_key(KIDSLOOP_PUBLIC_KEY),
        ),
    ]


def build_registry(
    issuers: Iterable[IssuerConfig],
    settings: TokenSettings,
    warn: Callable[[str], None] = logger.warning,
) -> IssuerRegistry:
    """Assemble a registry, adding the development issuer outside production."""
    dev_issuer = None
    if not settings.is_production:
        dev_issuer = development_issuer(settings.dev_secret)
    return IssuerRegistry(issuers, dev_issuer=dev_issuer, warn=warn)
