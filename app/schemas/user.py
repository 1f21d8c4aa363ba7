"""User schemas."""

from pydantic import Field

from app.schemas.base import CamelModel, UTCDateTime


class UserCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    user_token: str = Field(..., min_length=1, description="Firebase Cloud Messaging token")


class TokenUpdate(CamelModel):
    user_id: str = Field(..., min_length=1)
    user_token: str = Field(..., min_length=1)


class UserRead(CamelModel):
    user_id: str
    email: str
    user_token: str | None
    created_at: UTCDateTime


class UserCreatedResponse(CamelModel):
    success: bool = True
    message: str = "User created"
    data: UserRead
