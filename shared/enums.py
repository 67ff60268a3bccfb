"""
Enums and constants used across the application.
"""

from enum import Enum


class SupportedEncoding(str, Enum):
    """Encodings an uploaded subtitle file may be declared in."""

    UTF_8 = "utf-8"
    UTF_16 = "utf-16"
    WINDOWS_1251 = "windows-1251"
    KOI8_R = "koi8-r"
    CP866 = "cp866"
    WINDOWS_1252 = "windows-1252"
    ISO_8859_1 = "iso-8859-1"
    GB18030 = "gb18030"
    BIG5 = "big5"
    SHIFT_JIS = "shift_jis"


CANONICAL_ENCODING = SupportedEncoding.UTF_8


class SubtitleFormat(str, Enum):
    """Subtitle formats produced on export."""

    SRT = "srt"
