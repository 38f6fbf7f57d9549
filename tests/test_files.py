import io

import pytest

from lrcshift.errors import EncodingNotSupported, LrcFileNotFound
from lrcshift.files import (
    atomic_write_lines,
    process_lyrics_file,
    read_lrc_lines,
    read_stdin_lines,
    split_lines,
)


def test_read_strips_bom_and_carriage_returns(tmp_path):
    p = tmp_path / "song.lrc"
    p.write_bytes(b"\xef\xbb\xbf[ti:x]\r\n[00:01.00]a\r\n")
    assert read_lrc_lines(p) == ["[ti:x]", "[00:01.00]a"]


def test_read_rejects_utf16(tmp_path):
    p = tmp_path / "song.lrc"
    p.write_bytes("[00:01.00]a\n".encode("utf-16"))
    with pytest.raises(EncodingNotSupported):
        read_lrc_lines(p)


def test_read_missing_file(tmp_path):
    with pytest.raises(LrcFileNotFound):
        read_lrc_lines(tmp_path / "nope.lrc")


def test_split_lines_keeps_inner_blank_lines():
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("") == []


def test_read_stdin_lines():
    assert read_stdin_lines(io.StringIO("a\r\nb\n")) == ["a", "b"]


def test_process_lyrics_file(tmp_path):
    p = tmp_path / "song.lrc"
    p.write_text("[offset: 750]\n[00:40.10]She was crying\n", encoding="utf-8")
    assert process_lyrics_file(p, "correctoffset") == ["[00:39.35] She was crying"]


def test_atomic_write_creates_parents_and_cleans_up(tmp_path):
    dest = tmp_path / "out" / "song.lrc"
    staging = tmp_path / "staging"
    atomic_write_lines(dest, ["a", "b"], temp_dir=staging)
    assert dest.read_text(encoding="utf-8") == "a\nb"
    assert list(staging.iterdir()) == []


def test_atomic_write_overwrites(tmp_path):
    dest = tmp_path / "song.lrc"
    dest.write_text("old", encoding="utf-8")
    atomic_write_lines(dest, ["new"], temp_dir=tmp_path / "staging")
    assert dest.read_text(encoding="utf-8") == "new"
