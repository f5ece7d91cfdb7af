"""Tests for SRT parser."""

import pytest
from pathlib import Path
import tempfile

from srt_zh.errors import ParseError
from srt_zh.parser import parse_srt, serialize_srt, read_srt, save_srt, validate_srt_file
from srt_zh.models import SubtitleEntry


class TestParseSrt:

    def test_parse_simple(self):
        content = """1
00:00:01,000 --> 00:00:03,500
Hello world

2
00:00:04,000 --> 00:00:06,500
Goodbye world

"""
        entries = parse_srt(content)
        assert len(entries) == 2
        assert entries[0].id == "1"
        assert entries[0].timestamp == "00:00:01,000 --> 00:00:03,500"
        assert entries[0].text == "Hello world"
        assert entries[1].text == "Goodbye world"

    def test_parse_multiline_keeps_lines(self):
        content = """1
00:00:01,000 --> 00:00:03,500
Line one
Line two

"""
        entries = parse_srt(content)
        assert entries[0].text == "Line one\nLine two"

    def test_parse_empty(self):
        assert parse_srt("") == []
        assert parse_srt("   \n\n  ") == []

    def test_parse_empty_strict(self):
        with pytest.raises(ParseError):
            parse_srt("not a subtitle", strict=True)

    def test_parse_no_trailing_newline(self):
        content = """1
00:00:01,000 --> 00:00:03,500
First

2
00:00:04,000 --> 00:00:06,500
Last entry"""
        entries = parse_srt(content)
        assert len(entries) == 2
        assert entries[1].text == "Last entry"

    def test_parse_windows_line_endings(self):
        content = "1\r\n00:00:01,000 --> 00:00:03,500\r\nHello\r\n\r\n"
        entries = parse_srt(content)
        assert len(entries) == 1
        assert entries[0].text == "Hello"

    def test_multiple_blank_lines_between_blocks(self):
        content = "1\nt1\nA\n\n\n  \n2\nt2\nB\n"
        entries = parse_srt(content)
        assert [e.id for e in entries] == ["1", "2"]

    def test_drops_short_blocks(self):
        content = "1\nt1\n\n2\nt2\nKept\n"
        entries = parse_srt(content)
        assert len(entries) == 1
        assert entries[0].id == "2"

    def test_opaque_id_and_timestamp(self):
        content = "intro\nsomething odd\nHello\n"
        entries = parse_srt(content)
        assert entries[0].id == "intro"
        assert entries[0].timestamp == "something odd"

    def test_bom_is_ignored(self):
        content = "\ufeff1\nt1\nHello\n"
        assert parse_srt(content)[0].id == "1"


class TestSerializeSrt:

    def test_serialize(self):
        entries = [
            SubtitleEntry("1", "00:00:01,000 --> 00:00:02,000", "Hello"),
            SubtitleEntry("2", "00:00:03,000 --> 00:00:04,000", "World"),
        ]
        assert serialize_srt(entries) == (
            "1\n00:00:01,000 --> 00:00:02,000\nHello\n"
            "\n"
            "2\n00:00:03,000 --> 00:00:04,000\nWorld\n"
        )

    def test_serialize_empty(self):
        assert serialize_srt([]) == ""

    def test_roundtrip_preserves_entries(self):
        content = (
            "7\n00:00:01,000 --> 00:00:02,000\nFirst line\nSecond line\n\n"
            "x\n00:00:03,000 --> 00:00:04,000\nWorld\n"
        )
        entries = parse_srt(content)
        assert serialize_srt(entries) == content
        assert parse_srt(serialize_srt(entries)) == entries


class TestValidateSrtFile:

    def test_nonexistent(self):
        error = validate_srt_file(Path("/nonexistent/file.srt"))
        assert "not found" in error

    def test_wrong_extension(self):
        with tempfile.NamedTemporaryFile(suffix=".txt") as f:
            error = validate_srt_file(Path(f.name))
            assert "Invalid file extension" in error

    def test_empty_file(self):
        with tempfile.NamedTemporaryFile(suffix=".srt") as f:
            error = validate_srt_file(Path(f.name))
            assert error == "File is empty"

    def test_valid_file(self):
        with tempfile.NamedTemporaryFile(suffix=".srt", delete=False) as f:
            f.write(b"test content")
            path = Path(f.name)

        try:
            error = validate_srt_file(path)
            assert error is None
        finally:
            path.unlink()


class TestSaveAndRead:

    def test_save_and_reload(self):
        entries = [
            SubtitleEntry("1", "00:00:01,000 --> 00:00:03,500", "你好"),
            SubtitleEntry("2", "00:00:04,000 --> 00:00:06,500", "世界"),
        ]

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sub" / "out.srt"
            save_srt(entries, path)
            reloaded = read_srt(path)

        assert reloaded == entries

    def test_read_invalid_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.srt"
            path.write_text("just some text\n", encoding="utf-8")
            with pytest.raises(ParseError):
                read_srt(path)
