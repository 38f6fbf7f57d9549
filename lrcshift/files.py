"""
File side of the pipeline: decoding LRC bytes into lines and writing them back.

The lrc core only sees lists of str; everything about BOMs, line endings and
atomic replacement lives here.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, TextIO

from lrcshift.errors import EncodingNotSupported, LrcFileNotFound, OutputWriteError
from lrcshift.lrc.process import ProcessOptions, process_lyrics

logger = logging.getLogger(__name__)

_UTF8_BOM = "\ufeff"
_WIDE_BOMS = (
    b"\x00\x00\xfe\xff",  # UTF-32 BE
    b"\xff\xfe\x00\x00",  # UTF-32 LE
    b"\xfe\xff",  # UTF-16 BE
    b"\xff\xfe",  # UTF-16 LE
)


def looks_like_utf16_or_utf32(data: bytes) -> bool:
    return any(data.startswith(bom) for bom in _WIDE_BOMS)


def split_lines(text: str) -> list[str]:
    if text.startswith(_UTF8_BOM):
        text = text[len(_UTF8_BOM) :]
    text = text.replace("\r", "")
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def decode_lrc(data: bytes, source: str = "<bytes>") -> list[str]:
    if looks_like_utf16_or_utf32(data):
        raise EncodingNotSupported(f"{source} appears to be UTF-16/32; LRC must be UTF-8")
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingNotSupported(f"{source} is not valid UTF-8: {e}") from e
    return split_lines(text)


def read_lrc_lines(path: Path) -> list[str]:
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise LrcFileNotFound(f'File "{path}" does not exist.') from e
    lines = decode_lrc(data, source=str(path))
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


def read_stdin_lines(stream: TextIO) -> list[str]:
    return split_lines(stream.read())


def process_lyrics_file(path: Path, options: str | ProcessOptions = "") -> list[str]:
    return process_lyrics(read_lrc_lines(path), options)


def temp_path_for(dest: Path, temp_dir: Path | None = None) -> Path:
    base = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
    return base / f"{dest.stem}-temp{dest.suffix}"


def move_into_place(tmp: Path, dest: Path) -> None:
    try:
        os.replace(tmp, dest)
    except OSError:
        # different filesystem (e.g. /tmp on tmpfs)
        shutil.copyfile(tmp, dest)
        tmp.unlink(missing_ok=True)


def atomic_write_lines(dest: Path, lines: Iterable[str], temp_dir: Path | None = None) -> None:
    tmp = temp_path_for(dest, temp_dir)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text("\n".join(lines), encoding="utf-8")
        move_into_place(tmp, dest)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise OutputWriteError(f"Failed to write output .lrc file: {e}") from e
    logger.info("Wrote %s", dest)
