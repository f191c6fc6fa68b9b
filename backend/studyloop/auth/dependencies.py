"""FastAPI dependencies for authentication."""

from typing import Annotated
from fastapi import Depends, HTTPException, Header, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from .config import get_auth_settings
from .token_validator import validate_token, TokenValidationError


bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Access token issued at login",
    auto_error=False,  # Missing tokens get our own 401 message
)


class CurrentUser(BaseModel):
    """The authenticated caller."""

    user_id: str
    email: str | None = None

    @classmethod
    def from_token_claims(cls, claims: dict) -> "CurrentUser":
        return cls(
            user_id=claims.get("userId") or claims.get("sub", ""),
            email=claims.get("email"),
        )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    x_user_id: str | None = Header(None, description="User ID header (dev fallback)"),
) -> CurrentUser:
    """
    Validate the Bearer token and return the current user.

    For local development set AUTH_ENABLED=false and send an X-User-Id header instead.

    Raises:
        HTTPException: 401 if the token is missing or invalid.
    """
    settings = get_auth_settings()

    if not settings.enabled:
        if x_user_id:
            return CurrentUser(user_id=x_user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication disabled but no X-User-Id header provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = validate_token(credentials.credentials)
    except TokenValidationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser.from_token_claims(claims)
