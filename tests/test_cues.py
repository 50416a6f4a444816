import pytest

from subtitle_overlay.cues import Cue, SubtitleFormat, detect_format, load_cues, parse_cues


def test_detect_format() -> None:
    assert detect_format("WEBVTT\n\n00:01.000 --> 00:02.000\nhi") is SubtitleFormat.WEBVTT
    assert detect_format("  \n webvtt - captions") is SubtitleFormat.WEBVTT
    assert detect_format("\ufeffWEBVTT") is SubtitleFormat.WEBVTT
    assert detect_format("1\n00:00:01,000 --> 00:00:02,000\nhi") is SubtitleFormat.SRT
    assert detect_format("") is SubtitleFormat.SRT


@pytest.mark.parametrize("fixture_name", ["srt_text", "vtt_text"])
def test_two_cue_input_in_either_format(request, fixture_name: str) -> None:
    cues = load_cues(request.getfixturevalue(fixture_name))

    assert cues == (Cue(0.0, 1.5, "Hello"), Cue(2.0, 3.0, "World"))


def test_multiline_text_is_preserved() -> None:
    text = "1\n00:00:01,000 --> 00:00:02,000\nfirst line\nsecond line\n\n"
    (cue,) = parse_cues(text)
    assert cue.text == "first line\nsecond line"


def test_crlf_line_endings() -> None:
    text = "1\r\n00:00:01,000 --> 00:00:02,000\r\nHello\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nWorld\r\n"
    assert [c.text for c in parse_cues(text)] == ["Hello", "World"]


def test_srt_with_byte_order_mark() -> None:
    text = "\ufeff1\n00:00:01,000 --> 00:00:02,000\nHello\n"
    assert parse_cues(text) == [Cue(1.0, 2.0, "Hello")]


def test_srt_without_index_lines() -> None:
    text = "00:00:01,000 --> 00:00:02,000\nA\n\n00:00:03,000 --> 00:00:04,000\nB\n"
    assert [c.text for c in parse_cues(text)] == ["A", "B"]


def test_block_without_time_range_is_skipped() -> None:
    text = (
        "1\n"
        "not a time range\n"
        "orphan text\n"
        "\n"
        "2\n"
        "00:00:05,000 --> 00:00:06,000\n"
        "Survivor\n"
    )
    assert parse_cues(text) == [Cue(5.0, 6.0, "Survivor")]


def test_time_range_on_last_line_yields_empty_cue() -> None:
    text = "1\n00:00:01,000 --> 00:00:02,000"
    assert parse_cues(text) == [Cue(1.0, 2.0, "")]


def test_cue_ending_before_start_is_dropped() -> None:
    text = "1\n00:00:05,000 --> 00:00:01,000\nbackwards\n\n2\n00:00:06,000 --> 00:00:07,000\nok\n"
    assert parse_cues(text) == [Cue(6.0, 7.0, "ok")]


def test_vtt_header_metadata_notes_and_identifiers() -> None:
    text = (
        "WEBVTT\n"
        "Kind: captions\n"
        "Language: en\n"
        "\n"
        "NOTE this is a comment\n"
        "spanning two lines\n"
        "\n"
        "STYLE\n"
        "::cue { color: yellow }\n"
        "\n"
        "intro\n"
        "00:00:01.000 --> 00:00:02.000 align:start position:10%\n"
        "<b>Hi</b> there\n"
        "\n"
        "NOTE trailing comment\n"
        "\n"
        "00:03.000 --> 00:04.000\n"
        "Bye\n"
    )
    cues = parse_cues(text)

    assert cues == [Cue(1.0, 2.0, "<b>Hi</b> there"), Cue(3.0, 4.0, "Bye")]


def test_vtt_header_immediately_followed_by_cue() -> None:
    text = "WEBVTT\n00:01.000 --> 00:02.000\nTight\n"
    assert parse_cues(text) == [Cue(1.0, 2.0, "Tight")]


def test_parse_keeps_file_order_and_load_sorts_stably() -> None:
    text = (
        "1\n00:00:05,000 --> 00:00:06,000\nlate\n\n"
        "2\n00:00:01,000 --> 00:00:02,000\nearly-a\n\n"
        "3\n00:00:01,000 --> 00:00:03,000\nearly-b\n"
    )
    assert [c.text for c in parse_cues(text)] == ["late", "early-a", "early-b"]
    assert [c.text for c in load_cues(text)] == ["early-a", "early-b", "late"]


@pytest.mark.parametrize("text", ["", "\n\n\n", "garbage\nmore garbage", "WEBVTT\n\nNOTE only"])
def test_unparsable_input_yields_no_cues(text: str) -> None:
    assert load_cues(text) == ()


def test_explicit_format_overrides_detection() -> None:
    # Forced SRT treats the header as a block without a time range.
    text = "WEBVTT\n\n00:01.000 --> 00:02.000\nHi\n"
    assert parse_cues(text, SubtitleFormat.SRT) == [Cue(1.0, 2.0, "Hi")]


def test_cue_is_immutable() -> None:
    cue = Cue(0.0, 1.0, "x")
    with pytest.raises(AttributeError):
        cue.text = "y"  # type: ignore[misc]
