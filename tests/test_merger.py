"""Tests for translation selection on export."""

from types import SimpleNamespace

import pytest

from services.subtitles import merger
from shared.models import ExportPolicy


def make_caption(caption_id: int, text: str, translations: list[str] | None = None):
    return SimpleNamespace(
        id=caption_id,
        start_time=caption_id * 1000,
        end_time=caption_id * 1000 + 500,
        text=text,
        translations=[SimpleNamespace(text=t) for t in translations or []],
    )


@pytest.mark.parametrize("skip_untranslated", [True, False])
def test_translation_wins_under_any_policy(skip_untranslated: bool) -> None:
    caption = make_caption(1, "Hello", ["Привет"])
    record = merger.select(caption, ExportPolicy(skip_untranslated=skip_untranslated))

    assert record is not None
    assert record.text == "Привет"
    assert (record.id, record.start_time, record.end_time) == (1, 1000, 1500)


def test_first_translation_is_current() -> None:
    caption = make_caption(1, "Hello", ["Привет", "Здравствуйте"])
    assert merger.select(caption, ExportPolicy()).text == "Привет"


def test_untranslated_keeps_original_text() -> None:
    caption = make_caption(2, "World")
    record = merger.select(caption, ExportPolicy(skip_untranslated=False))
    assert record is not None
    assert record.text == "World"


def test_untranslated_is_omitted_when_skipping() -> None:
    caption = make_caption(2, "World")
    assert merger.select(caption, ExportPolicy(skip_untranslated=True)) is None


def test_default_policy_keeps_untranslated() -> None:
    assert ExportPolicy().skip_untranslated is False


def test_merge_preserves_order_and_drops_omitted() -> None:
    captions = [
        make_caption(1, "One", ["Один"]),
        make_caption(2, "Two"),
        make_caption(3, "Three", ["Три"]),
    ]

    skipped = merger.merge(captions, ExportPolicy(skip_untranslated=True))
    kept = merger.merge(captions, ExportPolicy(skip_untranslated=False))

    assert [r.text for r in skipped] == ["Один", "Три"]
    assert [r.text for r in kept] == ["Один", "Two", "Три"]


def test_original_ignores_translations() -> None:
    captions = [make_caption(1, "One", ["Один"]), make_caption(2, "Two")]
    assert [r.text for r in merger.original(captions)] == ["One", "Two"]
