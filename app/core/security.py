# app/core/security.py
import uuid
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
import jwt
from typing import Optional, Union
from .config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(subject: Union[str, uuid.UUID], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token for the given subject (user ID)
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(subject),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str) -> uuid.UUID:
    """
    Return the user ID carried by the token.

    Raises jwt.InvalidTokenError (ExpiredSignatureError included) for bad,
    expired or malformed tokens, and for tokens whose subject is not a UUID.
    """
    payload = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require": ["sub", "exp", "iat"]},
    )
    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise jwt.InvalidTokenError("Invalid user ID format in token")
