"""Lifecycle hooks for the token authentication middleware."""

from collections.abc import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

from klauth.core.log_facade import LogChannels
from klauth.crypto.types import IssuerConfig
from klauth.tokens.claims import Claims
from klauth.tokens.errors import TokenError

CallNext = Callable[[Request], Awaitable[Response]]


class AuthenticationHooks:
    """Default behavior for each middleware state.

    Subclass and override any subset of the methods. An override owns the
    rest of the request: it must ``await call_next(request)`` to continue
    the pipeline, or return its own response to stop it.
    """

    def initialize(self, log: LogChannels, dev_issuer: IssuerConfig | None) -> None:
        """Called once when the middleware is constructed."""
        if dev_issuer is not None:
            log.warn("Running with development JWT secret!")

    async def no_token(
        self, log: LogChannels, request: Request, call_next: CallNext
    ) -> Response:
        log.trace("Unauthenticated request: No token")
        request.state.authenticated = False
        return await call_next(request)

    async def token_error(
        self,
        log: LogChannels,
        error: TokenError,
        request: Request,
        call_next: CallNext,
    ) -> Response:
        log.trace(f"Unauthenticated request: Bad token - {error}")
        request.state.authenticated = False
        return await call_next(request)

    async def token_registered(
        self,
        log: LogChannels,
        claims: Claims,
        request: Request,
        call_next: CallNext,
    ) -> Response:
        request.state.authenticated = True
        request.state.token = claims
        return await call_next(request)
