"""Download database model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base, utc_now


class Download(Base):
    """First download of an app by a user.

    At most one row exists per (user_id, app_name); ``timestamp`` is the
    event time and ``created_at`` the ingestion time.
    """

    __tablename__ = "downloads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    app_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "app_name", name="uq_downloads_user_id_app_name"),
    )

    def __repr__(self) -> str:
        return f"<Download(user_id={self.user_id}, app_name={self.app_name})>"
