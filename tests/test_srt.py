"""Tests for SRT parsing and generation."""

import pytest

from srtcorrect.models import SubtitleEntry
from srtcorrect.srt import (
    export_filename,
    parse_srt,
    read_srt,
    srt_time_to_seconds,
    subtitles_to_srt,
    write_srt,
)


def test_parse_sample(sample_srt):
    entries = parse_srt(sample_srt)

    assert entries == [
        SubtitleEntry(id=1, start_time="00:00:01,000", end_time="00:00:02,000", text="Hello wrold"),
        SubtitleEntry(id=2, start_time="00:00:03,000", end_time="00:00:04,000", text="Goodbye"),
    ]


def test_parse_keeps_multiline_text():
    content = "7\n00:01:00,500 --> 00:01:02,250\nfirst line\nsecond line\n"

    entries = parse_srt(content)

    assert len(entries) == 1
    assert entries[0].id == 7
    assert entries[0].text == "first line\nsecond line"


def test_parse_skips_malformed_blocks():
    content = (
        "abc\n00:00:01,000 --> 00:00:02,000\nbad index\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\ngood\n\n"
        "3\n00:00:05 --> 00:00:06\nbad timestamps\n\n"
        "4\n00:00:07,000 --> 00:00:08,000"
    )

    entries = parse_srt(content)

    assert [e.id for e in entries] == [2]
    assert entries[0].text == "good"


@pytest.mark.parametrize("content", ["", "   \n\n  ", "garbage", "1\n2\n3"])
def test_parse_unparseable_returns_empty(content):
    assert parse_srt(content) == []


def test_parse_tolerates_crlf_and_whitespace_separators():
    content = (
        "1\r\n00:00:01,000-->00:00:02,000\r\nHi\r\n  \r\n\r\n"
        "2\r\n00:00:03,000  -->  00:00:04,000\r\nThere\r\n"
    )

    entries = parse_srt(content)

    assert [(e.id, e.text) for e in entries] == [(1, "Hi"), (2, "There")]
    assert entries[0].end_time == "00:00:02,000"


def test_parse_preserves_source_order():
    content = (
        "5\n00:00:05,000 --> 00:00:06,000\nfive\n\n"
        "2\n00:00:01,000 --> 00:00:02,000\ntwo"
    )

    assert [e.id for e in parse_srt(content)] == [5, 2]


def test_serialize_format(sample_srt):
    assert subtitles_to_srt(parse_srt(sample_srt)) == sample_srt


def test_serialize_has_no_trailing_blank_line(sample_srt):
    out = subtitles_to_srt(parse_srt(sample_srt + "\n\n\n"))

    assert not out.endswith("\n")
    assert "\n\n\n" not in out


def test_round_trip_drops_malformed_blocks_once():
    content = (
        "x\n00:00:00,000 --> 00:00:01,000\nbad\n\n"
        "1\n00:00:01,000 --> 00:00:02,000\nline one\nline two\n\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\nline three"
    )

    parsed = parse_srt(content)

    assert parse_srt(subtitles_to_srt(parsed)) == parsed


def test_serialize_empty():
    assert subtitles_to_srt([]) == ""


@pytest.mark.parametrize(
    "timestamp,expected",
    [
        ("00:00:01,000", 1.0),
        ("01:02:03,450", 3723.45),
        ("00:00:00,001", 0.001),
        ("bad", 0.0),
        ("00:00:01.000", 0.0),
        ("", 0.0),
    ],
)
def test_srt_time_to_seconds(timestamp, expected):
    assert srt_time_to_seconds(timestamp) == pytest.approx(expected)


def test_read_and_write(tmp_path, sample_srt):
    path = tmp_path / "in.srt"
    path.write_text("\ufeff" + sample_srt, encoding="utf-8")

    raw = read_srt(path)
    entries = parse_srt(raw)
    write_srt(entries, tmp_path / "out.srt")

    assert entries[0].id == 1
    assert (tmp_path / "out.srt").read_text(encoding="utf-8") == sample_srt


def test_read_falls_back_to_cp1252(tmp_path):
    path = tmp_path / "latin.srt"
    path.write_bytes("1\n00:00:01,000 --> 00:00:02,000\ncaf\xe9".encode("cp1252"))

    assert parse_srt(read_srt(path))[0].text == "café"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        read_srt(tmp_path / "missing.srt")


def test_export_filename():
    assert export_filename("lecture.srt") == "corrected_lecture.srt"
    assert export_filename("/some/dir/lecture.srt") == "corrected_lecture.srt"
    assert export_filename("") == "corrected_subtitles.srt"
    assert export_filename(None) == "corrected_subtitles.srt"


@pytest.mark.parametrize("index", ["0", "-3", "1_0", "+4", "٣"])
def test_parse_rejects_non_positive_or_non_decimal_index(index):
    content = (
        f"{index}\n00:00:01,000 --> 00:00:02,000\nbad\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\ngood"
    )

    assert [e.id for e in parse_srt(content)] == [2]
