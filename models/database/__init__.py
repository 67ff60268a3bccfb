"""
Database models package - SQLAlchemy ORM models
"""

from .caption import Caption
from .document import Document
from .translation import Translation
from .user import User

__all__ = [
    "Caption",
    "Document",
    "Translation",
    "User",
]
