"""
Document model - An uploaded subtitle file and its language pair
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from database import Base

TITLE_MAX_LENGTH = 255
LANGUAGE_MAX_LENGTH = 10


class Document(Base):
    """Subtitle document owned by a user"""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    source_language = Column(String(LANGUAGE_MAX_LENGTH), nullable=False)
    target_language = Column(String(LANGUAGE_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="documents")
    captions = relationship(
        "Caption",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Caption.position",
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, title={self.title})>"
