"""Token verification failures.

Every failure raised by the verification engine derives from
:class:`TokenError`, so request handling can map all of them onto a single
"unauthenticated" outcome. Messages name the offending field, issuer or
subject but never include key material.
"""


class TokenError(Exception):
    """Base class for all token verification failures."""


class MissingToken(TokenError):  # noqa: N818
    """No token was supplied."""


class MalformedToken(TokenError):  # noqa: N818
    """The token is not a decodable JWT, or its claims have the wrong shape."""


class UnknownIssuer(TokenError):  # noqa: N818
    """The token names an issuer that is not registered."""

    def __init__(self, issuer: str) -> None:
        super().__init__(f"Unknown JWT issuer '{issuer}'")
        self.issuer = issuer


class SignatureInvalid(TokenError):  # noqa: N818
    """Signature, algorithm or standard claim verification failed.

    The underlying PyJWT error is chained as ``__cause__``.
    """


class SubjectMismatch(TokenError):  # noqa: N818
    """A verified token belongs to a different user than expected."""

    def __init__(self, expected: str | None, actual: str | None) -> None:
        super().__init__(
            f"Authorization does not match userID({expected}): "
            f"token was issued for userID({actual})"
        )
        self.expected = expected
        self.actual = actual
