"""
Caption model - One timed subtitle entry of a document
"""

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base


class Caption(Base):
    """Timed caption; position is the block's ordinal in the uploaded file"""

    __tablename__ = "captions"
    __table_args__ = (UniqueConstraint("document_id", "position", name="uq_captions_document_position"),)

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    start_time = Column(Integer, nullable=False)  # milliseconds
    end_time = Column(Integer, nullable=False)  # milliseconds
    text = Column(Text, nullable=False, default="")

    # Relationships
    document = relationship("Document", back_populates="captions")
    translations = relationship(
        "Translation",
        back_populates="caption",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Translation.id",
    )

    def __repr__(self) -> str:
        return f"<Caption(id={self.id}, document_id={self.document_id}, position={self.position})>"
