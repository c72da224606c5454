"""User account endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.api.deps import get_current_user, get_db
from paywise.core.logging import get_logger
from paywise.models import BudgetSnapshot, MerchantCategory, Transaction, User

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class UserCreateRequest(BaseModel):
    """Payload for registering a user."""

    email: EmailStr
    name: str | None = Field(default=None, max_length=255)


class UserResponse(BaseModel):
    """User response model."""

    id: str
    email: str
    name: str | None
    created_at: datetime
    updated_at: datetime | None


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Register a user. Emails are unique, case-insensitively."""
    email = payload.email.strip().lower()
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )

    user = User(email=email, name=payload.name.strip() if payload.name else None)
    db.add(user)
    await db.flush()
    logger.info("user_created", user_id=user.id, email=user.email)
    return _to_user_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user."""
    return _to_user_response(user)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete the authenticated user along with everything they own."""
    for model in (BudgetSnapshot, Transaction, MerchantCategory):
        await db.execute(delete(model).where(model.user_id == user.id))
    await db.delete(user)
    await db.flush()
    logger.info("user_deleted", user_id=user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
