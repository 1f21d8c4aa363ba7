"""Database models."""

from app.db.models.base import Base
from app.db.models.download import Download
from app.db.models.purchase import Purchase
from app.db.models.user import User

__all__ = ["Base", "Download", "Purchase", "User"]
