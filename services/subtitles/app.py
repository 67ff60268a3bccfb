"""Subtitle document service API endpoints."""

from fastapi import APIRouter, Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from database import get_db
from models.database import Document
from models.database.user import User as DBUser
from services.auth import get_current_user
from services.subtitles.errors import (
    CaptionNotFoundError,
    DocumentNotFoundError,
    PermissionDeniedError,
    SubtitleServiceError,
    SubtitleValidationError,
)
from services.subtitles.pipeline import DocumentPipeline
from services.subtitles.repository import DocumentRepository
from shared.enums import CANONICAL_ENCODING, SupportedEncoding
from shared.models import (
    CaptionResponse,
    DocumentMetadata,
    DocumentResponse,
    EncodingInfo,
    ExportedSubtitles,
    ExportPolicy,
    OwnerInfo,
    TranslationRequest,
    TranslationResponse,
    ValidationErrorResponse,
    ValidationViolation,
)
from shared.response_models import APIResponse
from shared.utils import config, content_disposition, setup_logging

logger = setup_logging("subtitle-service")

router = APIRouter()


def get_pipeline(db: Session = Depends(get_db)) -> DocumentPipeline:
    """Build a pipeline bound to the request's database session."""
    return DocumentPipeline(DocumentRepository(db))


def _document_response(document: Document, caption_count: int) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        title=document.title,
        source_language=document.source_language,
        target_language=document.target_language,
        created_at=document.created_at,
        owner=OwnerInfo.model_validate(document.owner) if document.owner else None,
        caption_count=caption_count,
    )


def _validation_response(error: SubtitleValidationError) -> JSONResponse:
    body = ValidationErrorResponse(
        message=str(error),
        errors=[ValidationViolation(**violation) for violation in error.violations],
        document=dict(error.submitted),
    )
    return JSONResponse(status_code=422, content=body.model_dump())


def _http_error(error: SubtitleServiceError) -> HTTPException:
    """Map a domain error onto the HTTP status the API reports for it."""
    if isinstance(error, (DocumentNotFoundError, CaptionNotFoundError)):
        return HTTPException(status_code=404, detail="Not found")
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=403, detail="Forbidden")
    # PersistenceError details stay in the server log
    return HTTPException(status_code=500, detail="Server error")


def _download(exported: ExportedSubtitles) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": content_disposition(exported.filename)},
    )


@router.get("/health")
async def health_check():
    """Health check endpoint for the subtitle service."""
    return APIResponse(message="Subtitle Service is healthy")


@router.get("/encodings", response_model=list[EncodingInfo])
async def list_encodings() -> list[EncodingInfo]:
    """Encodings an upload may be declared in."""
    return [
        EncodingInfo(identifier=encoding, canonical=encoding is CANONICAL_ENCODING)
        for encoding in SupportedEncoding
    ]


@router.get("/languages")
async def list_languages() -> dict[str, str]:
    """Language codes accepted as source and target languages."""
    return config.languages()


@router.post(
    "/documents",
    status_code=201,
    response_model=DocumentResponse,
    responses={422: {"model": ValidationErrorResponse}},
)
async def create_document(
    file: UploadFile | None = File(None),
    title: str = Form(""),
    source_language: str = Form(""),
    target_language: str = Form(""),
    encoding: str = Form(""),
    user: DBUser = Depends(get_current_user),
    pipeline: DocumentPipeline = Depends(get_pipeline),
):
    """Upload an SRT file and store it as a new document.

    Every validation problem is reported at once with the submitted fields
    echoed back. Uploads over the size limit are rejected without decoding.
    """
    raw_bytes = None
    if file is not None and file.filename:
        # One byte past the limit is enough to reject oversized uploads
        raw_bytes = await file.read(pipeline.max_upload_bytes + 1)

    metadata = DocumentMetadata(
        title=title,
        source_language=source_language,
        target_language=target_language,
    )

    try:
        document = pipeline.ingest(raw_bytes, encoding, metadata, owner_id=user.id)
        return _document_response(document, pipeline.repository.count_captions(document.id))
    except SubtitleValidationError as e:
        logger.info(f"Rejected upload from {user.username}: {e.messages}")
        return _validation_response(e)
    except SubtitleServiceError as e:
        raise _http_error(e) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Failed to create document: {e}")
        raise HTTPException(status_code=500, detail="Server error") from e


@router.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: int, pipeline: DocumentPipeline = Depends(get_pipeline)):
    """Document details with owner and caption count."""
    try:
        document = pipeline.get_document(document_id)
        return _document_response(document, pipeline.repository.count_captions(document_id))
    except SubtitleServiceError as e:
        raise _http_error(e) from e


@router.delete("/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: int,
    user: DBUser = Depends(get_current_user),
    pipeline: DocumentPipeline = Depends(get_pipeline),
) -> Response:
    """Delete a document and its captions. Only the owner may delete."""
    try:
        pipeline.delete_document(document_id, requester_id=user.id)
    except SubtitleServiceError as e:
        raise _http_error(e) from e
    return Response(status_code=204)


@router.get("/documents/{document_id}/captions", response_model=list[CaptionResponse])
async def list_captions(document_id: int, pipeline: DocumentPipeline = Depends(get_pipeline)):
    """Captions in original file order, each with its translations."""
    try:
        captions = pipeline.list_captions(document_id)
    except SubtitleServiceError as e:
        raise _http_error(e) from e
    return [CaptionResponse.model_validate(caption) for caption in captions]


@router.post(
    "/documents/{document_id}/captions/{caption_id}/translations",
    status_code=201,
    response_model=TranslationResponse,
    responses={422: {"model": ValidationErrorResponse}},
)
async def add_translation(
    document_id: int,
    caption_id: int,
    request: TranslationRequest,
    user: DBUser = Depends(get_current_user),
    pipeline: DocumentPipeline = Depends(get_pipeline),
):
    """Append a translation to a caption."""
    try:
        translation = pipeline.add_translation(document_id, caption_id, request.text, author_id=user.id)
    except SubtitleValidationError as e:
        return _validation_response(e)
    except SubtitleServiceError as e:
        raise _http_error(e) from e
    return TranslationResponse.model_validate(translation)


@router.get("/documents/{document_id}/download/original")
async def download_original(document_id: int, pipeline: DocumentPipeline = Depends(get_pipeline)):
    """Download the document as uploaded, ignoring translations."""
    try:
        return _download(pipeline.export_original(document_id))
    except SubtitleServiceError as e:
        raise _http_error(e) from e


@router.get("/documents/{document_id}/download/translation")
async def download_translation(
    document_id: int,
    skip_untranslated: bool = False,
    pipeline: DocumentPipeline = Depends(get_pipeline),
):
    """Download the translated document; policy given as query parameter."""
    try:
        return _download(pipeline.export(document_id, ExportPolicy(skip_untranslated=skip_untranslated)))
    except SubtitleServiceError as e:
        raise _http_error(e) from e


@router.post("/documents/{document_id}/download/translation")
async def download_translation_submit(
    document_id: int,
    policy: ExportPolicy | None = None,
    pipeline: DocumentPipeline = Depends(get_pipeline),
):
    """Download the translated document; policy given as JSON body."""
    try:
        return _download(pipeline.export(document_id, policy or ExportPolicy()))
    except SubtitleServiceError as e:
        raise _http_error(e) from e


app = FastAPI(
    title="Subtitle Service",
    description="Upload, translate and export SRT subtitle documents",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as e:
        raise RuntimeError("uvicorn must be installed to run this service.") from e
    uvicorn.run(app, host="0.0.0.0", port=8004)
