"""User registration and push-token management."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user import User
from app.repositories.user import UserRepository
from app.schemas.user import TokenUpdate, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations."""

    def __init__(self, db: AsyncSession, repository: UserRepository | None = None) -> None:
        self.db = db
        self.repository = repository or UserRepository()

    async def create_user(self, user_in: UserCreate) -> User:
        user = await self.repository.create(
            self.db,
            user_id=user_in.user_id,
            email=user_in.email,
            user_token=user_in.user_token,
        )
        logger.info("User created", extra={"user_id": user.user_id})
        return user

    async def update_token(self, token_in: TokenUpdate) -> bool:
        """Replace a user's push token.

        Unknown users are not an error, matching the update-by-filter
        semantics clients already rely on.

        Returns:
            True if a user was updated.
        """
        updated = await self.repository.update_token(self.db, token_in.user_id, token_in.user_token)
        if not updated:
            logger.warning("Token update for unknown user", extra={"user_id": token_in.user_id})
            return False
        logger.info("Push token updated", extra={"user_id": token_in.user_id})
        return True
