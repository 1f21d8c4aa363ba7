"""User repository."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user import User


class UserRepository:
    """Repository for User persistence.

    Follows Pattern 1: session passed to methods (not held in __init__).
    """

    async def create(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        email: str,
        user_token: str,
    ) -> User:
        """Insert a new user.

        Raises:
            sqlalchemy.exc.IntegrityError: If user_id is already registered.
        """
        user = User(user_id=user_id, email=email, user_token=user_token)
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    async def update_token(self, db: AsyncSession, user_id: str, user_token: str) -> int:
        """Replace a user's push token.

        Returns:
            Number of updated rows (0 when the user is unknown).
        """
        result = await db.execute(
            update(User).where(User.user_id == user_id).values(user_token=user_token)
        )
        await db.flush()
        return result.rowcount

    async def get_by_user_id(self, db: AsyncSession, user_id: str) -> User | None:
        result = await db.execute(select(User).where(User.user_id == user_id))
        return result.scalar_one_or_none()

    async def list_push_tokens(self, db: AsyncSession) -> list[str]:
        """Return every non-empty push token, oldest registration first."""
        result = await db.execute(
            select(User.user_token)
            .where(User.user_token.isnot(None))
            .where(User.user_token != "")
            .order_by(User.created_at, User.id)
        )
        return list(result.scalars().all())
