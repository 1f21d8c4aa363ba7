"""Repository layer for database operations."""

from app.repositories.download import DownloadInsertResult, DownloadRepository
from app.repositories.purchase import PurchaseFilter, PurchaseRepository
from app.repositories.user import UserRepository

__all__ = [
    "DownloadInsertResult",
    "DownloadRepository",
    "PurchaseFilter",
    "PurchaseRepository",
    "UserRepository",
]
