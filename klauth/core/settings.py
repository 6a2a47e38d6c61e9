"""Token validation settings loaded from environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET_DEFAULT = "iXtZx1D5AqEB0B9pfn+hRQ=="
ACCESS_COOKIE_DEFAULT = "access"
PRODUCTION = "production"


class TokenSettings(BaseSettings):
    """Environment-driven configuration for token verification."""

    model_config = SettingsConfigDict(env_prefix="KIDSLOOP_", populate_by_name=True)

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("KIDSLOOP_ENVIRONMENT", "NODE_ENV"),
    )
    dev_jwt_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "KIDSLOOP_DEV_JWT_SECRET", "DEV_JWT_SECRET", "DEV_SECRET"
        ),
    )
    access_cookie: str = ACCESS_COOKIE_DEFAULT
    leeway_seconds: int = 0
    live_audience: str | None = None

    @property
    def is_production(self) -> bool:
        """True when the development issuer must stay disabled."""
        return self.environment.strip().lower() == PRODUCTION

    @property
    def dev_secret(self) -> str:
        """Shared secret for the development issuer."""
        return self.dev_jwt_secret or DEV_JWT_SECRET_DEFAULT
