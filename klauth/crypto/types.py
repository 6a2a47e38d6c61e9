"""Type definitions for issuer configuration."""

from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from klauth.crypto.keys import KeyMaterial, ensure_compatible


class IssuerConfig(BaseModel):
    """Verification settings for one trusted issuer."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    issuer_id: Annotated[str, Field(min_length=1)]
    algorithms: frozenset[str]
    key_material: KeyMaterial = Field(repr=False)
    audience: str | None = None

    @field_validator("algorithms")
    @classmethod
    def _non_empty(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            raise ValueError("At least one algorithm must be allowed")
        return value

    @model_validator(mode="after")
    def _key_fits_algorithms(self) -> Self:
        ensure_compatible(self.algorithms, self.key_material)
        return self
