# app/api/routes/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_async_session
from app.core.security import create_access_token, get_password_hash, verify_password
from app.crud.user import create_user, get_user_by_email
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register", response_model=AuthResponse)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Create a user and return a token for it"""
    if await get_user_by_email(payload.email, db):
        raise HTTPException(status.HTTP_409_CONFLICT, detail="Email already registered")

    try:
        user = await create_user(payload.email, get_password_hash(payload.password), db)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise HTTPException(status.HTTP_409_CONFLICT, detail="Email already registered")

    logger.info(f"User {user.email} has registered")
    return AuthResponse(token=create_access_token(user.id), user_id=str(user.id))

@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
):
    user = await get_user_by_email(payload.email, db)
    # Same answer whether the email is unknown or the password is wrong
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login attempt for {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(token=create_access_token(user.id), user_id=str(user.id))
