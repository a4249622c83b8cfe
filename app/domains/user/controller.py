"""User authentication and directory endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user
from app.database import get_db
from app.domains.user.service import UserService
from app.schemas.base import ResponseSchema
from app.schemas.user import (
    AuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)
from models import User

router = APIRouter(prefix="/api/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: UserRegisterRequest, db: AsyncSession = Depends(get_db)):
    """Register a new account.

    Returns an access token so the client is signed in immediately.
    """
    user_service = UserService(db)
    user, token = await user_service.register(
        username=register_data.username,
        email=str(register_data.email),
        password=register_data.password,
    )
    return AuthResponse(
        token=token, user=UserResponse.model_validate(user), message="User created successfully"
    )


@router.post("/login", response_model=AuthResponse)
async def login(login_data: UserLoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange a username and password for an access token."""
    user_service = UserService(db)
    user, token = await user_service.authenticate(login_data.username, login_data.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user), message="Login successful")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@users_router.get("", response_model=ResponseSchema)
async def list_users(
    current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    """List every other user, ordered by username."""
    users = await UserService(db).list_other_users(current_user.id)
    return ResponseSchema(
        status="success",
        message="Users retrieved successfully",
        data={"users": [UserResponse.model_validate(u).model_dump() for u in users]},
    )


@users_router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a single user's public profile."""
    user = await UserService(db).get_user(user_id)
    return UserResponse.model_validate(user)
