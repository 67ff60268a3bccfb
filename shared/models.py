from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.enums import SupportedEncoding


class CaptionEntry(BaseModel):
    """Timed caption as parsed from, or written to, an SRT file."""

    index: int = Field(..., ge=1, description="1-based ordinal of the block in file order")
    start_time: int = Field(..., ge=0, description="Start time in milliseconds")
    end_time: int = Field(..., ge=0, description="End time in milliseconds")
    text: str = Field(default="", description="Caption text, lines joined with \\n")


class ExportPolicy(BaseModel):
    skip_untranslated: bool = Field(
        default=False, description="Omit captions that have no translation"
    )


class ExportRecord(BaseModel):
    """Caption chosen for export with the text that will be written."""

    id: int | None = None
    start_time: int
    end_time: int
    text: str


class ExportedSubtitles(BaseModel):
    filename: str
    content: str
    media_type: str = "text/srt"


class DocumentMetadata(BaseModel):
    """User supplied fields describing an upload."""

    title: str = Field(default="", description="Document title")
    source_language: str = Field(default="", description="Language code of the uploaded captions")
    target_language: str = Field(default="", description="Language code translations are written in")

    @field_validator("title", "source_language", "target_language", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class ValidationViolation(BaseModel):
    field: str | None = None
    message: str


class ValidationErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: list[ValidationViolation]
    document: dict[str, str | None] = Field(
        default_factory=dict, description="Submitted field values echoed back"
    )


class OwnerInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    source_language: str
    target_language: str
    created_at: datetime
    owner: OwnerInfo | None = None
    caption_count: int = 0


class TranslationRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=10000, description="Translated caption text")


class TranslationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    caption_id: int
    text: str
    author_id: int | None = None
    created_at: datetime


class CaptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    position: int
    start_time: int
    end_time: int
    text: str
    translations: list[TranslationResponse] = Field(default_factory=list)


class EncodingInfo(BaseModel):
    identifier: SupportedEncoding
    canonical: bool = False
