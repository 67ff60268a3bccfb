"""Tests for SRT parsing and serialization."""

import pytest

from services.subtitles.errors import FormatError
from services.subtitles.srt import SrtCodec, format_timestamp, parse_timestamp
from shared.models import CaptionEntry, ExportRecord

SAMPLE = (
    "1\n00:00:01,000 --> 00:00:02,500\nHello\n\n"
    "2\n00:00:03,000 --> 00:00:04,000\nWorld\n"
)


@pytest.fixture
def codec() -> SrtCodec:
    return SrtCodec()


class TestTimestamps:
    def test_parse_timestamp(self) -> None:
        assert parse_timestamp("00:00:00,000") == 0
        assert parse_timestamp("01:01:01,123") == 3661123
        assert parse_timestamp("00:00:02.500") == 2500

    def test_short_milliseconds_are_fractions(self) -> None:
        assert parse_timestamp("00:00:01,5") == 1500

    @pytest.mark.parametrize("value", ["00:61:00,000", "00:00:60,000", "1:2", "abc"])
    def test_parse_timestamp_rejects_malformed(self, value: str) -> None:
        with pytest.raises(FormatError):
            parse_timestamp(value)

    def test_format_timestamp(self) -> None:
        assert format_timestamp(0) == "00:00:00,000"
        assert format_timestamp(3661123) == "01:01:01,123"
        assert format_timestamp(100 * 3600 * 1000) == "100:00:00,000"


class TestParse:
    def test_concrete_example(self, codec: SrtCodec) -> None:
        captions = codec.parse(SAMPLE)

        assert [(c.start_time, c.end_time, c.text) for c in captions] == [
            (1000, 2500, "Hello"),
            (3000, 4000, "World"),
        ]
        assert [c.index for c in captions] == [1, 2]

    def test_empty_and_garbage_input(self, codec: SrtCodec) -> None:
        assert codec.parse("") == []
        assert codec.parse("\n\n  \n") == []
        assert codec.parse("This is not a subtitle file.\nJust prose.") == []

    def test_windows_line_endings_bom_and_trailing_whitespace(self, codec: SrtCodec) -> None:
        text = "\ufeff1  \r\n00:00:01,000 --> 00:00:02,000   \r\nHello \r\n\r\n"
        captions = codec.parse(text)

        assert len(captions) == 1
        assert captions[0].text == "Hello"
        assert captions[0].start_time == 1000

    def test_old_mac_line_endings(self, codec: SrtCodec) -> None:
        captions = codec.parse("1\r00:00:01,000 --> 00:00:02,000\rHi\r")
        assert [c.text for c in captions] == ["Hi"]

    def test_multiline_text_keeps_line_breaks(self, codec: SrtCodec) -> None:
        text = "1\n00:00:01,000 --> 00:00:02,000\nFirst line\n  second line\n"
        assert codec.parse(text)[0].text == "First line\n  second line"

    def test_order_follows_file_not_index_labels(self, codec: SrtCodec) -> None:
        text = (
            "7\n00:00:05,000 --> 00:00:06,000\nSeven\n\n"
            "3\n00:00:01,000 --> 00:00:02,000\nThree\n"
        )
        captions = codec.parse(text)

        assert [c.text for c in captions] == ["Seven", "Three"]
        assert [c.index for c in captions] == [1, 2]

    def test_lenient_parse_skips_bad_blocks(self, codec: SrtCodec) -> None:
        text = (
            "1\n00:00:01,000 --> 00:00:02,000\nGood\n\n"
            "2\n00:00:05,000 --> 00:00:04,000\nBackwards\n\n"
            "3\nnot a time line\nBroken\n\n"
            "4\n00:00:07,000 --> 00:00:08,000\nAlso good\n"
        )
        captions = codec.parse(text)

        assert [c.text for c in captions] == ["Good", "Also good"]
        assert [c.index for c in captions] == [1, 2]

    def test_strict_parse_raises_on_end_before_start(self, codec: SrtCodec) -> None:
        text = "1\n00:00:05,000 --> 00:00:04,000\nBackwards\n"
        with pytest.raises(FormatError):
            codec.parse(text, strict=True)

    def test_strict_parse_raises_on_malformed_range(self, codec: SrtCodec) -> None:
        with pytest.raises(FormatError):
            codec.parse("1\n00:00:01 --> soon\nText\n", strict=True)

    def test_zero_length_caption_is_allowed(self, codec: SrtCodec) -> None:
        captions = codec.parse("1\n00:00:01,000 --> 00:00:01,000\nBlink\n")
        assert captions[0].start_time == captions[0].end_time == 1000

    def test_missing_blank_separator(self, codec: SrtCodec) -> None:
        text = (
            "1\n00:00:01,000 --> 00:00:02,000\nHello\n"
            "2\n00:00:03,000 --> 00:00:04,000\nWorld\n"
        )
        assert [c.text for c in codec.parse(text)] == ["Hello", "World"]

    def test_position_coordinates_after_time_range(self, codec: SrtCodec) -> None:
        text = "1\n00:00:01,000 --> 00:00:02,000 X1:100 X2:200 Y1:10 Y2:20\nPlaced\n"
        assert codec.parse(text)[0].end_time == 2000

    def test_block_without_text_is_skipped(self, codec: SrtCodec) -> None:
        text = (
            "1\n00:00:01,000 --> 00:00:02,000\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\nWorld\n"
        )
        assert [c.text for c in codec.parse(text)] == ["World"]

    def test_strict_parse_raises_on_block_without_text(self, codec: SrtCodec) -> None:
        with pytest.raises(FormatError):
            codec.parse("1\n00:00:01,000 --> 00:00:02,000\n", strict=True)


class TestSerialize:
    def test_concrete_example_round_trip(self, codec: SrtCodec) -> None:
        assert codec.serialize(codec.parse(SAMPLE)) == SAMPLE

    def test_renumbers_from_one(self, codec: SrtCodec) -> None:
        records = [
            ExportRecord(id=42, start_time=0, end_time=1000, text="a"),
            ExportRecord(id=7, start_time=2000, end_time=3000, text="b"),
        ]
        output = codec.serialize(records)

        assert output.startswith("1\n00:00:00,000 --> 00:00:01,000\na\n\n2\n")
        assert output.endswith("b\n")

    def test_empty_sequence(self, codec: SrtCodec) -> None:
        assert codec.serialize([]) == ""

    def test_round_trip_preserves_count_timings_and_text(self, codec: SrtCodec) -> None:
        captions = [
            CaptionEntry(index=1, start_time=0, end_time=999, text="Line one\nLine two"),
            CaptionEntry(index=2, start_time=1000, end_time=1000, text="Привет"),
            CaptionEntry(index=3, start_time=59_999, end_time=3_600_000, text="  indented"),
        ]
        parsed = codec.parse(codec.serialize(captions))

        assert [(c.start_time, c.end_time, c.text) for c in parsed] == [
            (c.start_time, c.end_time, c.text) for c in captions
        ]

    def test_crlf_in_text_is_normalized(self, codec: SrtCodec) -> None:
        output = codec.serialize([CaptionEntry(index=1, start_time=0, end_time=1, text="a\r\nb")])
        assert "\r" not in output
        assert codec.parse(output)[0].text == "a\nb"

    def test_blank_lines_inside_text_do_not_split_blocks(self, codec: SrtCodec) -> None:
        records = [
            ExportRecord(id=1, start_time=0, end_time=1000, text="Privet\n\n  \nmir"),
            ExportRecord(id=2, start_time=2000, end_time=3000, text="Ok\n\n7\nStill the same caption"),
        ]
        parsed = codec.parse(codec.serialize(records))

        assert [c.start_time for c in parsed] == [0, 2000]
        assert [c.text for c in parsed] == [
            "Privet\nmir",
            "Ok\n7\nStill the same caption",
        ]
