"""Purchase database model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base, utc_now


class Purchase(Base):
    """An in-app purchase or trial start reported by a client.

    Purchases form an append-only log. ``price`` is expressed in
    ``currency_code`` units; conversion happens at report time.
    """

    __tablename__ = "purchases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    currency_code: Mapped[str] = mapped_column(String(10), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    price_formatted: Mapped[str | None] = mapped_column(String(64), nullable=True)
    kind: Mapped[str] = mapped_column(String(255), nullable=False)
    is_sandbox: Mapped[bool] = mapped_column(Boolean, nullable=False)
    app_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    store_front: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_trial: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    trial_period: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Purchase(app_name={self.app_name}, kind={self.kind}, is_trial={self.is_trial})>"
