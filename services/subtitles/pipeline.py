"""Ingestion and export of subtitle documents.

Ingest: validate -> decode -> parse -> persist (one transaction).
Export: load -> merge translations -> serialize.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from models.database import Caption, Document, Translation
from models.database.document import LANGUAGE_MAX_LENGTH, TITLE_MAX_LENGTH
from shared.enums import SubtitleFormat
from shared.models import DocumentMetadata, ExportedSubtitles, ExportPolicy, ExportRecord
from shared.utils import config, setup_logging, subtitle_filename

from . import merger
from .encoding import convert, parse_encoding
from .errors import (
    CaptionNotFoundError,
    DocumentNotFoundError,
    EncodingError,
    PermissionDeniedError,
    PersistenceError,
    SubtitleValidationError,
    UnsupportedEncodingError,
)
from .repository import DocumentRepository
from .srt import TIME_RANGE_RE, SrtCodec

logger = setup_logging("subtitle-pipeline")

SRT_MEDIA_TYPE = "text/srt"


class DocumentPipeline:
    """Orchestrates document ingestion and export over an injected repository."""

    def __init__(
        self,
        repository: DocumentRepository,
        max_upload_bytes: int | None = None,
        languages: dict[str, str] | None = None,
        codec: SrtCodec | None = None,
    ):
        """
        Args:
            repository: Store used for all reads and writes
            max_upload_bytes: Largest accepted upload, defaults to MAX_UPLOAD_BYTES
            languages: Allowed language codes, defaults to the configured set
            codec: SRT codec, a fresh lenient one when omitted
        """
        self.repository = repository
        if max_upload_bytes is None:
            max_upload_bytes = config.get("max_upload_bytes", 1024 * 1024)
        self.max_upload_bytes = max_upload_bytes
        self.languages = languages if languages is not None else config.languages()
        self.codec = codec or SrtCodec()

    def ingest(
        self,
        raw_bytes: bytes | None,
        declared_encoding: str | None,
        metadata: DocumentMetadata,
        owner_id: int,
    ) -> Document:
        """Store an uploaded SRT file as a new document with its captions.

        Raises:
            SubtitleValidationError: Input problems, all reported together
            PersistenceError: The store failed; nothing was written
        """
        submitted: dict[str, Any] = {**metadata.model_dump(), "encoding": declared_encoding}

        violations = self._validate_upload(raw_bytes, declared_encoding, metadata)
        if violations:
            raise SubtitleValidationError(
                f"Upload rejected with {len(violations)} problem(s)", violations, submitted
            )

        encoding = parse_encoding(declared_encoding)
        try:
            text = convert(raw_bytes, encoding)
        except EncodingError as e:
            raise SubtitleValidationError(
                "Invalid file encoding",
                [{"field": "encoding", "message": "Invalid file encoding"}],
                submitted,
            ) from e

        entries = self.codec.parse(text)
        if not entries:
            raise SubtitleValidationError(
                "Wrong subtitles file",
                [{"field": "file", "message": "Wrong subtitles file"}],
                submitted,
            )

        try:
            document = self.repository.create_document(metadata, owner_id)
            self.repository.create_captions(document, entries)
            self.repository.commit()
        except SQLAlchemyError as e:
            self.repository.rollback()
            logger.exception(f"Failed to store document '{metadata.title}' with {len(entries)} captions")
            raise PersistenceError("Failed to store document") from e

        logger.info(f"Ingested document {document.id} with {len(entries)} captions ({encoding.value})")
        return document

    def export(self, document_id: int, policy: ExportPolicy) -> ExportedSubtitles:
        """Render a document as SRT, substituting translations per ``policy``."""
        document, captions = self._load(document_id)
        return self._render(document, merger.merge(captions, policy))

    def export_original(self, document_id: int) -> ExportedSubtitles:
        """Render a document as SRT using the uploaded caption text."""
        document, captions = self._load(document_id)
        return self._render(document, merger.original(captions))

    def get_document(self, document_id: int) -> Document:
        document = self._find_document(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document

    def list_captions(self, document_id: int) -> list[Caption]:
        self.get_document(document_id)
        try:
            return self.repository.find_captions(document_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load captions of document {document_id}")
            raise PersistenceError("Failed to load captions") from e

    def add_translation(
        self, document_id: int, caption_id: int, text: str, author_id: int | None
    ) -> Translation:
        """Append a translation to a caption of the document."""
        if not text or not text.strip():
            raise SubtitleValidationError(
                "Translation is empty",
                [{"field": "text", "message": "Translation text is required"}],
                {"text": text},
            )
        # Blank lines and time ranges would start a new SRT block on export
        lines = text.strip().splitlines()
        if any(not line.strip() for line in lines):
            raise SubtitleValidationError(
                "Translation contains a blank line",
                [{"field": "text", "message": "Translation must not contain blank lines"}],
                {"text": text},
            )
        if any(TIME_RANGE_RE.match(line) for line in lines):
            raise SubtitleValidationError(
                "Translation contains a time range",
                [{"field": "text", "message": "Translation must not contain subtitle time ranges"}],
                {"text": text},
            )

        self.get_document(document_id)
        try:
            caption = self.repository.find_caption(document_id, caption_id)
            if caption is None:
                raise CaptionNotFoundError(f"Caption {caption_id} not found in document {document_id}")
            translation = self.repository.append_translation(caption, text, author_id)
            self.repository.commit()
        except SQLAlchemyError as e:
            self.repository.rollback()
            logger.exception(f"Failed to store translation for caption {caption_id}")
            raise PersistenceError("Failed to store translation") from e

        logger.info(f"Added translation {translation.id} to caption {caption_id}")
        return translation

    def delete_document(self, document_id: int, requester_id: int) -> None:
        """Delete a document and, through the store, its captions."""
        document = self.get_document(document_id)
        if document.owner_id != requester_id:
            raise PermissionDeniedError(f"User {requester_id} does not own document {document_id}")

        try:
            self.repository.delete_document(document)
            self.repository.commit()
        except SQLAlchemyError as e:
            self.repository.rollback()
            logger.exception(f"Failed to delete document {document_id}")
            raise PersistenceError("Failed to delete document") from e

        logger.info(f"Deleted document {document_id}")

    def _validate_upload(
        self,
        raw_bytes: bytes | None,
        declared_encoding: str | None,
        metadata: DocumentMetadata,
    ) -> list[dict[str, Any]]:
        """Collect every independent input problem before any decoding."""
        violations: list[dict[str, Any]] = []

        if raw_bytes is None:
            violations.append({"field": "file", "message": "Please select file to upload"})
        elif len(raw_bytes) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes / (1024 * 1024)
            violations.append(
                {"field": "file", "message": f"File too big (Maximum size is {limit_mb:g} MB)"}
            )

        if not declared_encoding or not declared_encoding.strip():
            violations.append({"field": "encoding", "message": "Select subtitles file encoding"})
        else:
            try:
                parse_encoding(declared_encoding)
            except UnsupportedEncodingError:
                violations.append(
                    {"field": "encoding", "message": f"Unsupported encoding: {declared_encoding}"}
                )

        if not metadata.title:
            violations.append({"field": "title", "message": "Title is required"})
        elif len(metadata.title) > TITLE_MAX_LENGTH:
            violations.append(
                {"field": "title", "message": f"Title is too long (maximum is {TITLE_MAX_LENGTH} characters)"}
            )

        for field in ("source_language", "target_language"):
            value = getattr(metadata, field)
            label = field.replace("_", " ").capitalize()
            if not value:
                violations.append({"field": field, "message": f"{label} is required"})
            elif len(value) > LANGUAGE_MAX_LENGTH or value not in self.languages:
                violations.append({"field": field, "message": f"{label} '{value}' is not supported"})

        return violations

    def _find_document(self, document_id: int) -> Document | None:
        try:
            return self.repository.find_document(document_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load document {document_id}")
            raise PersistenceError("Failed to load document") from e

    def _load(self, document_id: int) -> tuple[Document, list[Caption]]:
        document = self.get_document(document_id)
        try:
            captions = self.repository.find_captions(document_id)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load captions of document {document_id}")
            raise PersistenceError("Failed to load captions") from e

        if not captions:
            raise DocumentNotFoundError(f"Document {document_id} has no captions")
        return document, captions

    def _render(self, document: Document, records: list[ExportRecord]) -> ExportedSubtitles:
        return ExportedSubtitles(
            filename=subtitle_filename(document.title, SubtitleFormat.SRT.value),
            content=self.codec.serialize(records),
            media_type=SRT_MEDIA_TYPE,
        )
