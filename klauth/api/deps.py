"""FastAPI dependencies exposing the middleware's authentication outcome."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel, ConfigDict

from klauth.tokens.claims import Claims


class AuthenticationResult(BaseModel):
    """Per-request authentication outcome."""

    model_config = ConfigDict(frozen=True)

    authenticated: bool = False
    token: Claims | None = None


def get_authentication_result(request: Request) -> AuthenticationResult:
    """Read the outcome from request state; unset state means anonymous."""
    if getattr(request.state, "authenticated", False) is not True:
        return AuthenticationResult()
    return AuthenticationResult(
        authenticated=True, token=getattr(request.state, "token", None)
    )


async def require_authenticated(
    result: Annotated[AuthenticationResult, Depends(get_authentication_result)],
) -> Claims:
    """Return the verified claims or reject the request with 401."""
    if not result.authenticated or result.token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result.token
