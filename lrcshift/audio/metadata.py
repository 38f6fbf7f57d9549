"""
Embedded lyrics in audio containers, via mutagen.

- Vorbis comments (FLAC, Ogg Vorbis, Opus): `LYRICS` field
- ID3 (MP3 and friends): first `USLT` frame
- MP4/M4A: `©lyr` atom

Streams are never touched; writes go to a temp copy that is then moved over
the destination.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

import mutagen
from mutagen.flac import FLAC
from mutagen.id3 import ID3FileType, USLT
from mutagen.mp4 import MP4
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from lrcshift.errors import AudioFormatError, OutputWriteError
from lrcshift.files import move_into_place, split_lines, temp_path_for

logger = logging.getLogger(__name__)

MP4_LYRICS_ATOM = "\xa9lyr"
_VORBIS_TYPES = (FLAC, OggVorbis, OggOpus)


def _open(path: Path) -> mutagen.FileType:
    try:
        audio = mutagen.File(path)
    except mutagen.MutagenError as e:
        raise AudioFormatError(f"Cannot read audio file {path}: {e}") from e
    if audio is None:
        raise AudioFormatError(f"Unsupported audio format: {path}")
    return audio


def _get_lyrics_text(audio: mutagen.FileType, field: str) -> str | None:
    if audio.tags is None:
        return None
    if isinstance(audio, ID3FileType):
        frames = audio.tags.getall("USLT")
        return str(frames[0].text) if frames else None
    if isinstance(audio, MP4):
        values = audio.tags.get(MP4_LYRICS_ATOM)
        return values[0] if values else None
    if isinstance(audio, _VORBIS_TYPES):
        values = audio.tags.get(field)
        return values[0] if values else None
    raise AudioFormatError(f"No lyrics field known for {type(audio).__name__}")


def _set_lyrics_text(audio: mutagen.FileType, field: str, text: str) -> None:
    if audio.tags is None:
        audio.add_tags()
    if isinstance(audio, ID3FileType):
        audio.tags.delall("USLT")
        audio.tags.add(USLT(encoding=3, lang="eng", desc="", text=text))
    elif isinstance(audio, MP4):
        audio.tags[MP4_LYRICS_ATOM] = [text]
    elif isinstance(audio, _VORBIS_TYPES):
        audio.tags[field] = [text]
    else:
        raise AudioFormatError(f"No lyrics field known for {type(audio).__name__}")


def read_audio_lyrics(path: Path, field: str = "LYRICS") -> list[str]:
    """Lyrics lines embedded in `path`, or [] if it carries none."""
    audio = _open(path)
    text = _get_lyrics_text(audio, field)
    if not text:
        logger.info("%s has no embedded lyrics", path)
        return []
    return split_lines(text)


def write_audio_lyrics(
    source: Path,
    output: Path,
    lines: Iterable[str],
    field: str = "LYRICS",
    temp_dir: Path | None = None,
) -> None:
    """Copy `source` to `output` with its lyrics replaced by `lines`."""
    text = "\n".join(lines)
    tmp = temp_path_for(output, temp_dir)
    try:
        tmp.parent.mkdir(parents=True, exist_ok=True)
        output.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, tmp)
        audio = _open(tmp)
        _set_lyrics_text(audio, field, text)
        audio.save()
        move_into_place(tmp, output)
    except (OSError, mutagen.MutagenError) as e:
        raise OutputWriteError(f"Failed to write output audio file: {e}") from e
    finally:
        tmp.unlink(missing_ok=True)
    logger.info("Embedded %d lyric lines into %s", text.count("\n") + 1 if text else 0, output)
