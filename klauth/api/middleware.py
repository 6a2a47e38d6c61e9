"""ASGI middleware that authenticates requests from a KidsLoop access token.

Each request ends in exactly one of three states: no token, token error or
token registered. Whatever the outcome the request continues down the
pipeline; ``request.state.authenticated`` tells later stages whether a
verified token is available on ``request.state.token``.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from klauth.api.hooks import AuthenticationHooks, CallNext
from klauth.core.log_facade import LogChannels, NPMLogger, RFC5424Logger
from klauth.core.settings import TokenSettings
from klauth.tokens.checks import authentication_verifier, get_authentication_verifier
from klauth.tokens.claims import Claims
from klauth.tokens.errors import TokenError
from klauth.tokens.verifier import TokenVerifier

BEARER_PREFIX = "Bearer "


class TokenAuthMiddleware(BaseHTTPMiddleware):
    """Attach the authentication outcome of each request to its state."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        verifier: TokenVerifier[Claims] | None = None,
        logger: RFC5424Logger | NPMLogger | None = None,
        hooks: AuthenticationHooks | None = None,
        cookie_name: str | None = None,
        settings: TokenSettings | None = None,
    ) -> None:
        super().__init__(app)
        if cookie_name is None:
            cookie_name = (settings or TokenSettings()).access_cookie
        if verifier is None:
            verifier = (
                authentication_verifier(settings)
                if settings is not None
                else get_authentication_verifier()
            )
        self._verifier = verifier
        self._log = LogChannels.resolve(logger)
        self._hooks = hooks or AuthenticationHooks()
        self._cookie_name = cookie_name
        self._hooks.initialize(self._log, self._verifier.registry.dev_issuer)

    def extract_token(self, request: Request) -> str | None:
        """Read the token from the access cookie, else a Bearer header."""
        token = request.cookies.get(self._cookie_name)
        if token:
            return token
        auth = request.headers.get("Authorization", "")
        if auth.startswith(BEARER_PREFIX):
            return auth[len(BEARER_PREFIX) :] or None
        return None

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request.state.authenticated = False
        token = self.extract_token(request)
        if not token:
            return await self._hooks.no_token(self._log, request, call_next)
        try:
            claims = await self._verifier.verify(token)
        except TokenError as exc:
            return await self._hooks.token_error(self._log, exc, request, call_next)
        return await self._hooks.token_registered(
            self._log, claims, request, call_next
        )
