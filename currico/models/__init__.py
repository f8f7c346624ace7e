"""
Models package: export all SQLAlchemy models.
"""

from currico.models.base import Base
from currico.models.download import Download
from currico.models.notification import Notification
from currico.models.resource import Resource
from currico.models.review import Review
from currico.models.transaction import Transaction
from currico.models.user import User

__all__ = ["Base", "Download", "Notification", "Resource", "Review", "Transaction", "User"]
