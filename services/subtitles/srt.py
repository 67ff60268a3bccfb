"""SubRip (SRT) parsing and serialization."""

from __future__ import annotations

import re
from collections.abc import Iterable

from shared.models import CaptionEntry, ExportRecord
from shared.utils import setup_logging

from .errors import FormatError

logger = setup_logging("srt-codec")

BOM = "\ufeff"

TIMESTAMP_PATTERN = r"\d+:\d{1,2}:\d{1,2}[,.]\d{1,3}"
TIME_RANGE_RE = re.compile(
    rf"^\s*(?P<start>{TIMESTAMP_PATTERN})\s*-->\s*(?P<end>{TIMESTAMP_PATTERN})(?:\s+.*)?$"
)
TIMESTAMP_RE = re.compile(r"^(?P<h>\d+):(?P<m>\d{1,2}):(?P<s>\d{1,2})[,.](?P<ms>\d{1,3})$")

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


def parse_timestamp(value: str) -> int:
    """Convert ``HH:MM:SS,mmm`` into milliseconds since 00:00:00,000."""
    match = TIMESTAMP_RE.match(value.strip())
    if not match:
        raise FormatError(f"Malformed timestamp: {value!r}")

    hours = int(match.group("h"))
    minutes = int(match.group("m"))
    seconds = int(match.group("s"))
    # "1,5" means 500ms, not 5ms
    millis = int(match.group("ms").ljust(3, "0"))

    if minutes >= 60 or seconds >= 60:
        raise FormatError(f"Timestamp out of range: {value!r}")

    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + millis


def format_timestamp(milliseconds: int) -> str:
    """Convert milliseconds into the zero-padded ``HH:MM:SS,mmm`` form."""
    if milliseconds < 0:
        raise ValueError(f"Negative timestamp: {milliseconds}")
    hours, remainder = divmod(int(milliseconds), MS_PER_HOUR)
    minutes, remainder = divmod(remainder, MS_PER_MINUTE)
    seconds, millis = divmod(remainder, MS_PER_SECOND)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


class SrtCodec:
    """Parse SRT text into captions and write captions back as SRT.

    Parsing is lenient by default: a block that is not a complete caption
    (malformed time range, end before start, no text lines) is skipped and
    logged. Pass ``strict=True`` to raise :class:`FormatError` on the first such block.
    """

    def parse(self, text: str, strict: bool = False) -> list[CaptionEntry]:
        """Parse SRT text into captions ordered as they appear in the input."""
        captions: list[CaptionEntry] = []

        for number, block in enumerate(self._split_blocks(self._normalize(text)), start=1):
            try:
                start_time, end_time, body = self._parse_block(block, number)
            except FormatError as e:
                if strict:
                    raise
                logger.debug(f"Skipping SRT block {number}: {e}")
                continue

            captions.append(
                CaptionEntry(
                    index=len(captions) + 1,
                    start_time=start_time,
                    end_time=end_time,
                    text=body,
                )
            )

        return captions

    def serialize(self, captions: Iterable[CaptionEntry | ExportRecord]) -> str:
        """Write captions as SRT, renumbering blocks from 1 in output order."""
        blocks = []

        for number, caption in enumerate(captions, start=1):
            lines = caption.text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
            # Blank lines separate blocks, so none may appear inside one
            text = "\n".join(line for line in lines if line.strip())
            start = format_timestamp(caption.start_time)
            end = format_timestamp(caption.end_time)
            blocks.append(f"{number}\n{start} --> {end}\n{text}\n")

        return "\n".join(blocks)

    @staticmethod
    def _normalize(text: str) -> list[str]:
        if text.startswith(BOM):
            text = text[len(BOM):]
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return [line.rstrip() for line in text.split("\n")]

    @staticmethod
    def _split_blocks(lines: list[str]) -> list[list[str]]:
        """Group lines into blocks separated by blank lines.

        A time range line inside a block that already has one starts a new
        block, taking the preceding index line with it. This recovers files
        that drop the blank separator.
        """
        blocks: list[list[str]] = []
        current: list[str] = []

        for line in lines:
            if not line:
                if current:
                    blocks.append(current)
                current = []
                continue

            if current and TIME_RANGE_RE.match(line) and any(
                TIME_RANGE_RE.match(existing) for existing in current[:2]
            ):
                carry = [current.pop()] if len(current) > 2 and current[-1].strip().isdigit() else []
                blocks.append(current)
                current = carry

            current.append(line)

        if current:
            blocks.append(current)
        return blocks

    @staticmethod
    def _parse_block(block: list[str], number: int) -> tuple[int, int, str]:
        if TIME_RANGE_RE.match(block[0]):
            time_line, body = block[0], block[1:]
        elif len(block) > 1:
            # First line is the index label; it carries no identity
            time_line, body = block[1], block[2:]
        else:
            raise FormatError(f"Block {number} has no time range", number)

        match = TIME_RANGE_RE.match(time_line)
        if not match:
            raise FormatError(f"Block {number} has a malformed time range: {time_line.strip()!r}", number)

        start_time = parse_timestamp(match.group("start"))
        end_time = parse_timestamp(match.group("end"))
        if end_time < start_time:
            raise FormatError(f"Block {number} ends before it starts", number)
        if not body:
            raise FormatError(f"Block {number} has no text", number)

        return start_time, end_time, "\n".join(body)

