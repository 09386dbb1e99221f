"""Rate limiting middleware using slowapi."""

import hashlib

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from plateshare.config import get_settings

settings = get_settings()


def get_rate_limit_key(request: Request) -> str:
    """
    Get rate limit key from request.

    Uses a hash of the bearer token if present, otherwise the client IP.
    The token is not verified here; verification happens in the route.
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split("Bearer ", 1)[1]
        return "token:" + hashlib.sha256(token.encode("utf-8")).hexdigest()[:32]

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.rate_limit_default],
    storage_uri="memory://",  # In-memory storage (suitable for single instance)
    enabled=settings.rate_limit_enabled,
)

# Limit for unauthenticated writes and payment intents
write_limit = limiter.limit(settings.rate_limit_writes)


__all__ = ["limiter", "write_limit"]
