"""User registration and push-token routes."""

from fastapi import APIRouter

from app.api.deps import UserSvc
from app.core.middleware import set_user_id
from app.schemas.base import MessageResponse
from app.schemas.user import TokenUpdate, UserCreate, UserCreatedResponse, UserRead

router = APIRouter()


@router.post("/create-user", response_model=UserCreatedResponse)
async def create_user(user_in: UserCreate, service: UserSvc) -> UserCreatedResponse:
    """Register a user and their push token."""
    set_user_id(user_in.user_id)
    user = await service.create_user(user_in)
    return UserCreatedResponse(data=UserRead.model_validate(user))


@router.put("/update-token", response_model=MessageResponse)
async def update_token(token_in: TokenUpdate, service: UserSvc) -> MessageResponse:
    """Replace a user's push token."""
    set_user_id(token_in.user_id)
    await service.update_token(token_in)
    return MessageResponse(message="Token updated")
