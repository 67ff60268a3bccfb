"""Conversion of uploaded bytes into canonical Unicode text."""

from __future__ import annotations

from shared.enums import SupportedEncoding
from shared.utils import setup_logging

from .errors import EncodingError, UnsupportedEncodingError

logger = setup_logging("subtitle-encoding")

# Python codec used to decode each supported identifier
CODECS: dict[SupportedEncoding, str] = {
    SupportedEncoding.UTF_8: "utf-8",
    SupportedEncoding.UTF_16: "utf-16",
    SupportedEncoding.WINDOWS_1251: "cp1251",
    SupportedEncoding.KOI8_R: "koi8_r",
    SupportedEncoding.CP866: "cp866",
    SupportedEncoding.WINDOWS_1252: "cp1252",
    SupportedEncoding.ISO_8859_1: "latin_1",
    SupportedEncoding.GB18030: "gb18030",
    SupportedEncoding.BIG5: "big5",
    SupportedEncoding.SHIFT_JIS: "shift_jis",
}

ALIASES: dict[str, SupportedEncoding] = {
    "utf8": SupportedEncoding.UTF_8,
    "utf16": SupportedEncoding.UTF_16,
    "cp1251": SupportedEncoding.WINDOWS_1251,
    "win1251": SupportedEncoding.WINDOWS_1251,
    "koi8r": SupportedEncoding.KOI8_R,
    "ibm866": SupportedEncoding.CP866,
    "cp1252": SupportedEncoding.WINDOWS_1252,
    "latin1": SupportedEncoding.ISO_8859_1,
    "latin-1": SupportedEncoding.ISO_8859_1,
    "sjis": SupportedEncoding.SHIFT_JIS,
    "shift-jis": SupportedEncoding.SHIFT_JIS,
}


def parse_encoding(value: str | SupportedEncoding | None) -> SupportedEncoding:
    """Resolve a raw identifier into a supported encoding.

    Raises:
        UnsupportedEncodingError: If the value is empty or not supported.
    """
    if isinstance(value, SupportedEncoding):
        return value
    normalized = (value or "").strip().lower()
    if not normalized:
        raise UnsupportedEncodingError("No encoding given")
    try:
        return SupportedEncoding(normalized)
    except ValueError:
        pass
    if normalized in ALIASES:
        return ALIASES[normalized]
    raise UnsupportedEncodingError(f"Unsupported encoding: {value}")


def convert(data: bytes, encoding: SupportedEncoding) -> str:
    """Decode ``data`` declared as ``encoding`` into text.

    Every codec decodes straight to str; canonical UTF-8 input is never
    transcoded, so valid text comes back unchanged.

    Raises:
        EncodingError: If the bytes are not valid under the declared encoding.
    """
    codec = CODECS[encoding]
    try:
        return data.decode(codec)
    except UnicodeDecodeError as e:
        logger.debug(f"Decoding {len(data)} bytes as {encoding.value} failed: {e}")
        raise EncodingError(f"Bytes are not valid {encoding.value}: {e.reason}") from e
