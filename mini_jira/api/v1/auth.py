from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.schemas.auth import (
    UserCreate,
    UserLogin,
    UserResponse,
    UserRoleUpdate,
    AuthResponse,
    TokenResponse,
    RefreshTokenRequest,
)
from mini_jira.schemas.response import ApiResponse, success_response
from mini_jira.services.security_service import SecurityService
from mini_jira.repositories.user_repository import UserRepository
from mini_jira.api.dependencies.auth import get_current_user, get_current_admin
from mini_jira.models.user import User
from mini_jira.logs import debug_logger

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(user: User) -> dict:
    tokens = SecurityService.create_tokens(user)
    return {"user": user, **tokens}


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """
    Register a new user and sign them in
    """
    existing_user = await UserRepository.get_by_email(db, user_data.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = await UserRepository.create(
        db,
        email=user_data.email,
        password_hash=SecurityService.create_password_hash(user_data.password),
        name=user_data.name,
    )
    debug_logger.info(f"Registered user {user.id} ({user.email})")

    return success_response(_auth_payload(user), "User registered")


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_async_session)
):
    """
    Exchange email and password for an access/refresh token pair
    """
    user = await UserRepository.get_by_email(db, credentials.email)
    if not user or not SecurityService.verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return success_response(_auth_payload(user), "Logged in")


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """
    Issue a new token pair from a refresh token
    """
    payload = SecurityService.verify_refresh_token(refresh_data.refresh_token)
    user = await UserRepository.get_by_id(db, int(payload["sub"])) if payload else None

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return success_response(SecurityService.create_tokens(user), "Token refreshed")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    return success_response(current_user)


@router.get("/users", response_model=ApiResponse[List[UserResponse]])
async def list_users(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user)
):
    """All users, for picking assignees and project members"""
    users = await UserRepository.get_all(db)
    return success_response(users)


@router.patch("/users/{user_id}/role", response_model=ApiResponse[UserResponse])
async def change_user_role(
    user_id: int,
    role_data: UserRoleUpdate,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin)
):
    """Change a user's global role (global admins only)"""
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    updated = await UserRepository.update_role(db, user_id, role_data.role)
    debug_logger.info(f"User {admin.id} set global role of user {user_id} to {role_data.role.value}")
    return success_response(updated, "Role updated")
