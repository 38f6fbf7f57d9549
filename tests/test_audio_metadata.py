import pytest

from lrcshift.audio.metadata import read_audio_lyrics, write_audio_lyrics
from lrcshift.errors import AudioFormatError


def test_no_lyrics_yet(flac_file):
    assert read_audio_lyrics(flac_file) == []


def test_write_then_read(flac_file, tmp_path):
    out = tmp_path / "out" / "song.flac"
    write_audio_lyrics(flac_file, out, ["[00:01.00] a", "b"], temp_dir=tmp_path / "staging")
    assert read_audio_lyrics(out) == ["[00:01.00] a", "b"]
    # source untouched
    assert read_audio_lyrics(flac_file) == []
    assert list((tmp_path / "staging").iterdir()) == []


def test_write_in_place_with_custom_field(flac_file, tmp_path):
    write_audio_lyrics(flac_file, flac_file, ["x"], field="UNSYNCEDLYRICS", temp_dir=tmp_path / "staging")
    assert read_audio_lyrics(flac_file, field="UNSYNCEDLYRICS") == ["x"]
    assert read_audio_lyrics(flac_file) == []


def test_unsupported_file(tmp_path):
    p = tmp_path / "notes.xyz"
    p.write_bytes(b"definitely not audio")
    with pytest.raises(AudioFormatError):
        read_audio_lyrics(p)


def test_mp3_lyrics_go_to_uslt(mp3_file, tmp_path):
    from mutagen.id3 import ID3

    assert read_audio_lyrics(mp3_file) == []
    write_audio_lyrics(mp3_file, mp3_file, ["[00:01.00] a", "b"], temp_dir=tmp_path / "staging")
    assert read_audio_lyrics(mp3_file) == ["[00:01.00] a", "b"]
    frames = ID3(mp3_file).getall("USLT")
    assert len(frames) == 1
    assert frames[0].text == "[00:01.00] a\nb"


def test_mp3_rewrite_replaces_previous_lyrics(mp3_file, tmp_path):
    write_audio_lyrics(mp3_file, mp3_file, ["old"], temp_dir=tmp_path / "staging")
    write_audio_lyrics(mp3_file, mp3_file, ["new"], temp_dir=tmp_path / "staging")
    assert read_audio_lyrics(mp3_file) == ["new"]
