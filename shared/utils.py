from urllib.parse import quote

from shared.config import config
from shared.logging_utils import setup_logging

__all__ = [
    "config",
    "setup_logging",
    "sanitize_filename",
    "subtitle_filename",
    "content_disposition",
]


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage and Content-Disposition headers"""
    invalid_chars = '<>:"/\\|?*\r\n\t;'
    for char in invalid_chars:
        filename = filename.replace(char, "_")
    return filename.strip() or "subtitles"


def subtitle_filename(title: str, extension: str = "srt") -> str:
    """Build the download filename for a document title"""
    return f"{sanitize_filename(title)}.{extension}"


def content_disposition(filename: str) -> str:
    """Build an attachment Content-Disposition header value.

    Header values must be latin-1, so non-ASCII titles are sent through the
    RFC 5987 ``filename*`` parameter with an ASCII fallback.
    """
    fallback = filename.encode("ascii", errors="replace").decode("ascii").replace("?", "_")
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
