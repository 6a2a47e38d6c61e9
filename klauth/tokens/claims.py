"""Claims models and the type guard that normalizes verified payloads."""

import types
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from klauth.tokens.errors import MalformedToken

Number = int | float

ClaimsT = TypeVar("ClaimsT", bound="Claims")

_TYPE_NAMES: dict[type, str] = {
    str: "a string",
    int: "an integer",
    float: "a number",
    bool: "a boolean",
}

_JSON_NAMES: dict[type, str] = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    type(None): "null",
    dict: "object",
    list: "array",
}

_LEGACY_ALIASES = {
    "userid": "user_id",
    "startat": "start_at",
    "endat": "end_at",
}


class Claims(BaseModel):
    """Base for verified claims: strict types, unknown fields dropped."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class AuthenticationClaims(Claims):
    """Claims of a KidsLoop authentication (access) token."""

    id: str | None = None
    email: str | None = None
    phone: str | None = None
    iat: Number | None = None
    exp: Number
    iss: str


class EmailAuthenticationClaims(AuthenticationClaims):
    """Authentication claims for accounts that always carry an email."""

    email: str


class LiveAuthorizationClaims(Claims):
    """Claims of a live room authorization token.

    ``userid``, ``startat`` and ``endat`` fall back to the legacy
    ``user_id``, ``start_at`` and ``end_at`` fields when absent.
    """

    aud: str
    iss: str
    sub: str
    exp: Number
    iat: Number
    roomid: str
    userid: str | None = None
    startat: Number | None = None
    endat: Number | None = None
    name: str | None = None
    teacher: bool | None = None
    materials: Any = None
    classtype: str | None = None
    org_id: str | None = None
    schedule_id: str | None = None
    is_review: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _apply_legacy_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for canonical, legacy in _LEGACY_ALIASES.items():
            # Only absence triggers the fallback; falsy values are kept.
            if data.get(canonical) is None and legacy in data:
                data[canonical] = data[legacy]
        return data


def describe_type(annotation: Any) -> str:
    """Render a field annotation as text, e.g. 'a string or undefined'."""
    if annotation is Any:
        return "any value"
    if get_origin(annotation) in (Union, types.UnionType):
        members = get_args(annotation)
        optional = type(None) in members
        members = tuple(m for m in members if m is not type(None))
        if set(members) == {int, float}:
            text = "a number"
        else:
            text = " or ".join(describe_type(m) for m in members)
        return f"{text} or undefined" if optional else text
    return _TYPE_NAMES.get(annotation, getattr(annotation, "__name__", str(annotation)))


def _json_type(value: Any) -> str:
    return _JSON_NAMES.get(type(value), type(value).__name__)


def _describe_errors(model: type[Claims], exc: ValidationError) -> str:
    problems: list[str] = []
    seen: set[str] = set()
    for error in exc.errors():
        if not error["loc"]:
            problems.append(f"Malformed token: {error['msg']}")
            continue
        field = str(error["loc"][0])
        if field in seen:
            continue
        seen.add(field)
        info = model.model_fields.get(field)
        expected = describe_type(info.annotation) if info else "valid"
        actual = "undefined" if error["type"] == "missing" else _json_type(error["input"])
        problems.append(f"Malformed token: {field} must be {expected} but was '{actual}'")
    return "; ".join(problems)


def normalize_claims(model: type[ClaimsT], payload: Any) -> ClaimsT:
    """Type-check ``payload`` against ``model`` and rebuild it canonically."""
    if not isinstance(payload, dict):
        raise MalformedToken(
            f"Malformed token: payload must be an object but was '{_json_type(payload)}'"
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise MalformedToken(_describe_errors(model, exc)) from exc
