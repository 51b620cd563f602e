"""Authentication API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from ..schemas.auth import Token, UserCreate, UserLogin, UserResponse
from ..services.auth_service import AuthService
from ..services.log_service import log_service
from ..services.settings_cache import SettingsCache
from .dependencies import get_settings_cache, require_database
from .errors import ApiError

router = APIRouter(
    prefix="/api/auth", tags=["auth"], dependencies=[Depends(require_database)]
)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from JWT token"""
    if credentials is None:
        raise ApiError.unauthorized("Missing or invalid authorization header")

    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise ApiError.unauthorized("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise ApiError.unauthorized("Invalid or expired token")

    user = await AuthService(db).get_user(user_id)
    if user is None or not user.is_active:
        raise ApiError.unauthorized("User not found or inactive")

    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Current user if a valid token was sent; anonymous otherwise"""
    if credentials is None:
        return None
    try:
        return await get_current_user(credentials, db)
    except ApiError as e:
        log_service.info(f"Ignoring bad credentials on optional auth: {e.message}")
        return None


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require an authenticated admin"""
    if not current_user.is_admin:
        raise ApiError.forbidden("Admin access required")
    return current_user


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
):
    """
    Register a user. The first account becomes the admin.
    """
    auth_service = AuthService(db)

    if await auth_service.get_user_by_email(user_data.email):
        raise ApiError.invalid_input("Email already registered")

    if await auth_service.has_users():
        role = "user"
        credits = await cache.get("users.default_credits")
    else:
        role = "admin"
        credits = await cache.get("users.default_admin_credits")

    user = await auth_service.create_user(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        role=role,
        credits=int(credits or 0),
    )
    log_service.info(f"Registered {role} {user.email}")

    return user


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    """
    Login with email and password
    """
    auth_service = AuthService(db)

    user = await auth_service.authenticate_user(
        email=credentials.email, password=credentials.password
    )

    if not user:
        raise ApiError.unauthorized("Incorrect email or password")

    access_token = auth_service.create_access_token(
        data={"sub": str(user.id), "role": user.role}
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """
    Get current user info
    """
    return current_user
