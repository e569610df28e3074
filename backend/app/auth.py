"""
Writing Submissions Backend — Request Authentication
=====================================================

What:  FastAPI dependency that turns an incoming request into a verified user id.
How:   Reads the session JWT from the auth cookie (or a Bearer header),
       verifies signature and expiry with PyJWT, and returns the `userId` claim.
Who:   Declared as a dependency by every route under /api/writing.
When:  Before the route handler runs. A rejected request never reaches it.

Token format (shared with the login flow):
    HS256 JWT, payload {"userId": "<id>", "exp": <unix time>}

The identity is injected as a handler parameter. Handlers never read a user
id from the query string or the body.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header falls through to our own 401 response
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_in: Optional[timedelta] = None) -> str:
    """Issue a session token in the format accepted by get_current_user_id()."""
    lifetime = expires_in if expires_in is not None else timedelta(days=settings.jwt_expires_days)
    payload = {
        "userId": user_id,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_user_id(token: str) -> str:
    """
    Verify a session token and return its userId claim.

    Raises:
        AuthenticationError: Token is expired, tampered with, malformed,
                             or does not name a user.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(reason="token_expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError(reason="invalid_token") from None

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationError(reason="missing_user_id")
    return user_id


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Resolve the caller's identity or reject the request with 401.

    Lookup order:
        1. `auth-token` cookie (what the web client sends)
        2. `Authorization: Bearer <token>` header, also tried when the
           cookie is present but does not verify
    """
    cookie_token = request.cookies.get(settings.auth_cookie_name)
    bearer_token = credentials.credentials if credentials is not None else None

    if cookie_token:
        try:
            return decode_user_id(cookie_token)
        except AuthenticationError:
            if not bearer_token:
                raise
            logger.debug("Session cookie rejected, trying bearer token")

    if not bearer_token:
        raise AuthenticationError(reason="missing_token")

    return decode_user_id(bearer_token)
