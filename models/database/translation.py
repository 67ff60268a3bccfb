"""
Translation model - User supplied text for a caption
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from database import Base


class Translation(Base):
    """Append-only translation of a caption"""

    __tablename__ = "translations"

    id = Column(Integer, primary_key=True, index=True)
    caption_id = Column(Integer, ForeignKey("captions.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    caption = relationship("Caption", back_populates="translations")
    author = relationship("User", back_populates="translations")
