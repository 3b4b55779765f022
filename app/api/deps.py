# app/api/deps.py
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import jwt
import logging

from app.core.database import get_async_session
from app.core.security import decode_access_token
from app.crud.user import get_user_by_id
from app.models.user import User

logger = logging.getLogger(__name__)

# auto_error is off so a missing header produces our own 401 instead of FastAPI's 403
optional_security = HTTPBearer(auto_error=False)

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

async def get_current_user(
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> User:
    """
    Resolve the caller from the bearer token in the Authorization header.

    Any missing, malformed, expired or wrongly signed token, or a token for a
    user that no longer exists, is rejected with 401.
    """
    if not credentials or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    try:
        user_id = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected token: {str(e)}")
        raise _unauthorized("Invalid token")

    user = await get_user_by_id(user_id, db)
    if not user:
        raise _unauthorized("User not found")

    return user
