"""Choice of caption text for translated exports."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from shared.models import ExportPolicy, ExportRecord


def select(caption: Any, policy: ExportPolicy) -> ExportRecord | None:
    """Pick the text to export for ``caption``.

    The first translation (in append order) wins regardless of policy.
    Untranslated captions keep their original text, or are dropped when
    ``policy.skip_untranslated`` is set.
    """
    if caption.translations:
        text = caption.translations[0].text
    elif not policy.skip_untranslated:
        text = caption.text
    else:
        return None

    return ExportRecord(
        id=caption.id,
        start_time=caption.start_time,
        end_time=caption.end_time,
        text=text,
    )


def merge(captions: Iterable[Any], policy: ExportPolicy) -> list[ExportRecord]:
    """Apply :func:`select` to each caption in order, dropping omitted ones."""
    records = (select(caption, policy) for caption in captions)
    return [record for record in records if record is not None]


def original(captions: Iterable[Any]) -> list[ExportRecord]:
    """Export records carrying each caption's own text, ignoring translations."""
    return [
        ExportRecord(
            id=caption.id,
            start_time=caption.start_time,
            end_time=caption.end_time,
            text=caption.text,
        )
        for caption in captions
    ]
