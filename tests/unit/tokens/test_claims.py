"""Tests for the claims type guard and legacy field normalization."""

from typing import Any

import pytest

from klauth.tokens.claims import (
    AuthenticationClaims,
    EmailAuthenticationClaims,
    LiveAuthorizationClaims,
    describe_type,
    normalize_claims,
)
from klauth.tokens.errors import MalformedToken

AUTH_PAYLOAD = {
    "id": "1a234567-89bc-0d12-efab-c3456789d012",
    "email": "test@example.com",
    "iat": 1_700_000_000,
    "exp": 1_700_000_600,
    "iss": "calmid-debug",
}


def _live_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "aud": "kidsloop-live",
        "iss": "calmid-debug",
        "sub": "authorization",
        "exp": 1_700_000_600,
        "iat": 1_700_000_000,
        "roomid": "test-room",
    }
    payload.update(overrides)
    return payload


class TestAuthenticationClaims:
    """Authentication variant."""

    def test_valid_payload(self) -> None:
        claims = normalize_claims(AuthenticationClaims, AUTH_PAYLOAD)
        assert claims.model_dump(exclude_none=True) == AUTH_PAYLOAD

    def test_undeclared_fields_dropped(self) -> None:
        payload = {**AUTH_PAYLOAD, "roles": ["admin"], "nbf": 1}
        claims = normalize_claims(AuthenticationClaims, payload)
        assert "roles" not in claims.model_dump()
        assert not hasattr(claims, "roles")

    def test_optional_fields_may_be_absent(self) -> None:
        claims = normalize_claims(
            AuthenticationClaims, {"exp": 1_700_000_600, "iss": "kidsloop"}
        )
        assert claims.id is None
        assert claims.email is None
        assert claims.phone is None

    def test_phone_accepted(self) -> None:
        claims = normalize_claims(
            AuthenticationClaims, {**AUTH_PAYLOAD, "phone": "+441234567890"}
        )
        assert claims.phone == "+441234567890"

    def test_wrong_type_names_field_and_types(self) -> None:
        with pytest.raises(MalformedToken) as exc_info:
            normalize_claims(AuthenticationClaims, {**AUTH_PAYLOAD, "id": 42})
        assert str(exc_info.value) == (
            "Malformed token: id must be a string or undefined but was 'number'"
        )

    def test_missing_required_field(self) -> None:
        payload = {k: v for k, v in AUTH_PAYLOAD.items() if k != "exp"}
        with pytest.raises(MalformedToken) as exc_info:
            normalize_claims(AuthenticationClaims, payload)
        assert str(exc_info.value) == (
            "Malformed token: exp must be a number but was 'undefined'"
        )

    def test_numeric_string_not_coerced(self) -> None:
        with pytest.raises(MalformedToken, match="exp must be a number but was 'string'"):
            normalize_claims(AuthenticationClaims, {**AUTH_PAYLOAD, "exp": "1700000600"})

    def test_float_timestamps_accepted(self) -> None:
        claims = normalize_claims(
            AuthenticationClaims, {**AUTH_PAYLOAD, "exp": 1_700_000_600.5}
        )
        assert claims.exp == 1_700_000_600.5

    def test_null_iss_rejected(self) -> None:
        with pytest.raises(MalformedToken, match="iss must be a string but was 'null'"):
            normalize_claims(AuthenticationClaims, {**AUTH_PAYLOAD, "iss": None})

    def test_every_bad_field_reported(self) -> None:
        with pytest.raises(MalformedToken) as exc_info:
            normalize_claims(
                AuthenticationClaims, {**AUTH_PAYLOAD, "id": 1, "email": ["a"]}
            )
        message = str(exc_info.value)
        assert "id must be" in message
        assert "email must be a string or undefined but was 'array'" in message

    def test_non_object_payload(self) -> None:
        with pytest.raises(MalformedToken, match="payload must be an object"):
            normalize_claims(AuthenticationClaims, "just a string")


class TestEmailAuthenticationClaims:
    """Variant that requires an email."""

    def test_email_required(self) -> None:
        payload = {k: v for k, v in AUTH_PAYLOAD.items() if k != "email"}
        with pytest.raises(MalformedToken, match="email must be a string but was 'undefined'"):
            normalize_claims(EmailAuthenticationClaims, payload)

    def test_valid_payload(self) -> None:
        claims = normalize_claims(EmailAuthenticationClaims, AUTH_PAYLOAD)
        assert claims.email == "test@example.com"


class TestLiveAuthorizationClaims:
    """Live authorization variant and legacy aliases."""

    def test_legacy_user_id_fills_userid(self) -> None:
        claims = normalize_claims(LiveAuthorizationClaims, _live_payload(user_id="u-1"))
        assert claims.userid == "u-1"
        assert "user_id" not in claims.model_dump()

    def test_canonical_userid_wins(self) -> None:
        claims = normalize_claims(
            LiveAuthorizationClaims, _live_payload(userid="canonical", user_id="legacy")
        )
        assert claims.userid == "canonical"

    def test_neither_present_leaves_none(self) -> None:
        claims = normalize_claims(LiveAuthorizationClaims, _live_payload())
        assert claims.userid is None
        assert claims.startat is None
        assert claims.endat is None

    def test_falsy_canonical_values_are_kept(self) -> None:
        claims = normalize_claims(
            LiveAuthorizationClaims,
            _live_payload(userid="", user_id="legacy", startat=0, start_at=99),
        )
        assert claims.userid == ""
        assert claims.startat == 0

    def test_legacy_time_window(self) -> None:
        claims = normalize_claims(
            LiveAuthorizationClaims, _live_payload(start_at=100, end_at=200)
        )
        assert claims.startat == 100
        assert claims.endat == 200

    def test_optional_fields(self) -> None:
        materials = [{"id": "m1", "url": "/h5p/play/1"}]
        claims = normalize_claims(
            LiveAuthorizationClaims,
            _live_payload(
                name="Test User",
                teacher=True,
                materials=materials,
                classtype="live",
                org_id="org-1",
                schedule_id="test-room",
                is_review=False,
                type="live",
            ),
        )
        assert claims.teacher is True
        assert claims.materials == materials
        assert claims.is_review is False
        assert "type" not in claims.model_dump()

    def test_teacher_must_be_boolean(self) -> None:
        with pytest.raises(MalformedToken, match="teacher must be a boolean or undefined"):
            normalize_claims(LiveAuthorizationClaims, _live_payload(teacher="yes"))

    def test_roomid_required(self) -> None:
        payload = _live_payload()
        del payload["roomid"]
        with pytest.raises(MalformedToken, match="roomid must be a string"):
            normalize_claims(LiveAuthorizationClaims, payload)

    def test_iat_required(self) -> None:
        payload = _live_payload()
        del payload["iat"]
        with pytest.raises(MalformedToken, match="iat must be a number"):
            normalize_claims(LiveAuthorizationClaims, payload)


class TestDescribeType:
    """Expected-type rendering."""

    @pytest.mark.parametrize(
        ("annotation", "text"),
        [
            (str, "a string"),
            (bool, "a boolean"),
            (int | float, "a number"),
            (int | float | None, "a number or undefined"),
            (str | None, "a string or undefined"),
        ],
    )
    def test_annotations(self, annotation: Any, text: str) -> None:
        assert describe_type(annotation) == text
