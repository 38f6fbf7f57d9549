from __future__ import annotations

from pathlib import Path

import pytest


def _streaminfo(sample_rate: int = 44_100, channels: int = 2, bits: int = 16) -> bytes:
    packed = (sample_rate << 44) | ((channels - 1) << 41) | ((bits - 1) << 36)
    return (
        (4096).to_bytes(2, "big")  # min block size
        + (4096).to_bytes(2, "big")  # max block size
        + bytes(6)  # min/max frame size: unknown
        + packed.to_bytes(8, "big")
        + bytes(16)  # md5
    )


def write_minimal_flac(path: Path) -> Path:
    """A FLAC header with STREAMINFO only: no frames, no tags."""
    info = _streaminfo()
    header = bytes([0x80]) + len(info).to_bytes(3, "big")  # last block, type STREAMINFO
    path.write_bytes(b"fLaC" + header + info)
    return path


@pytest.fixture
def flac_file(tmp_path) -> Path:
    return write_minimal_flac(tmp_path / "song.flac")


def write_minimal_mp3(path: Path, frames: int = 20) -> Path:
    """Silent MPEG-1 Layer III frames (128 kbps, 44.1 kHz), no ID3 tag."""
    frame = b"\xff\xfb\x90\x64" + bytes(413)
    path.write_bytes(frame * frames)
    return path


@pytest.fixture
def mp3_file(tmp_path) -> Path:
    return write_minimal_mp3(tmp_path / "song.mp3")
