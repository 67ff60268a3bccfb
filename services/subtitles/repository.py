"""SQLAlchemy-backed store for documents, captions and translations."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from models.database import Caption, Document, Translation
from shared.models import CaptionEntry, DocumentMetadata


class DocumentRepository:
    """Document and caption persistence over a single SQLAlchemy session.

    Write methods only flush; callers decide when the unit of work is
    committed or rolled back.
    """

    def __init__(self, session: Session):
        self.session = session

    def create_document(self, metadata: DocumentMetadata, owner_id: int) -> Document:
        document = Document(
            owner_id=owner_id,
            title=metadata.title,
            source_language=metadata.source_language,
            target_language=metadata.target_language,
        )
        self.session.add(document)
        # Assigns document.id for the captions
        self.session.flush()
        return document

    def create_captions(self, document: Document, entries: list[CaptionEntry]) -> list[Caption]:
        captions = [
            Caption(
                document_id=document.id,
                position=entry.index,
                start_time=entry.start_time,
                end_time=entry.end_time,
                text=entry.text,
            )
            for entry in entries
        ]
        self.session.add_all(captions)
        self.session.flush()
        return captions

    def find_document(self, document_id: int) -> Document | None:
        return self.session.get(Document, document_id)

    def find_captions(self, document_id: int) -> list[Caption]:
        """Captions of a document in original file order, translations loaded."""
        stmt = (
            select(Caption)
            .where(Caption.document_id == document_id)
            .options(selectinload(Caption.translations))
            .order_by(Caption.position)
        )
        return list(self.session.execute(stmt).scalars().all())

    def find_caption(self, document_id: int, caption_id: int) -> Caption | None:
        stmt = select(Caption).where(
            Caption.id == caption_id,
            Caption.document_id == document_id,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def count_captions(self, document_id: int) -> int:
        stmt = select(func.count(Caption.id)).where(Caption.document_id == document_id)
        return int(self.session.execute(stmt).scalar_one())

    def append_translation(self, caption: Caption, text: str, author_id: int | None) -> Translation:
        translation = Translation(caption_id=caption.id, text=text, author_id=author_id)
        self.session.add(translation)
        self.session.flush()
        return translation

    def delete_document(self, document: Document) -> None:
        self.session.delete(document)
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
