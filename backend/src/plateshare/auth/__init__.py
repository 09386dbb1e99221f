"""Firebase Authentication module for API protection."""

import logging
from dataclasses import dataclass

from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for Authorization header
_security = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    """Verified identity from a Firebase ID token."""

    uid: str
    email: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_firebase_token(token: str) -> AuthenticatedUser:
    """
    Verify Firebase ID token and return the caller's identity.

    Args:
        token: Firebase ID token from client

    Returns:
        AuthenticatedUser with uid and email

    Raises:
        HTTPException: 401 if token is invalid, expired, revoked or carries no email
    """
    try:
        decoded = auth.verify_id_token(token)
    except auth.ExpiredIdTokenError:
        raise _unauthorized("Authentication token has expired")
    except auth.RevokedIdTokenError:
        raise _unauthorized("Authentication token has been revoked")
    except auth.InvalidIdTokenError:
        raise _unauthorized("Invalid authentication token")
    except Exception:
        logger.warning("Token verification failed", exc_info=True)
        raise _unauthorized("unauthorized access")

    email = decoded.get("email")
    if not email:
        raise _unauthorized("Authentication token has no email")

    # Stored emails are lowercase; lookups and ownership checks compare exactly
    return AuthenticatedUser(uid=decoded["uid"], email=email.lower())


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Security(_security),
) -> AuthenticatedUser:
    """
    FastAPI dependency for extracting the verified caller from the Authorization header.

    Usage:
        @router.get("/protected")
        async def protected_endpoint(
            identity: Annotated[AuthenticatedUser, Depends(get_current_identity)],
        ):
            return {"email": identity.email}
    """
    if credentials is None:
        raise _unauthorized("unauthorized access")

    return await verify_firebase_token(credentials.credentials)
