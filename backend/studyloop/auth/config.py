"""Authentication configuration."""

import os
from functools import lru_cache
from pydantic import BaseModel


class AuthSettings(BaseModel):
    """Authentication settings loaded from environment variables."""

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    enabled: bool = True  # Set to False to use the X-User-Id header (local dev)

    def is_configured(self) -> bool:
        """Check if tokens can be verified."""
        return bool(self.jwt_secret)


@lru_cache()
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings from environment variables."""
    enabled_str = os.getenv("AUTH_ENABLED", "true").lower()
    enabled = enabled_str not in ("false", "0", "no", "off")

    return AuthSettings(
        jwt_secret=os.getenv("JWT_SECRET", ""),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        enabled=enabled,
    )
