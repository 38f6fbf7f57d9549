"""
LRC timestamps: `[-]mm:ss.cs` <-> signed milliseconds.

Offset sign convention: a negative offset delays the timestamp (it is
subtracted, so the lyric shows later), a positive one advances it. This is how
most players read `[offset:]`. `invert` flips it so a positive value means
"show this later".
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimestampCarry:
    """A component was out of range and had to be carried into the next unit."""

    original: str
    corrected: str

    def __str__(self) -> str:
        return f"{self.original} timestamp is malformed; will round up to {self.corrected}"


def _is_digit(c: str) -> bool:
    # str.isdigit() also accepts things like "²"
    return "0" <= c <= "9"


def is_timestamp_shaped(text: str) -> bool:
    if not text:
        return False
    if text.count(":") != 1 or text.count(".") != 1:
        return False
    body = text[1:] if text[0] == "-" else text
    return all(_is_digit(c) or c in ":." for c in body)


def is_numeric(text: str) -> bool:
    # "" is numeric on purpose, callers read it as zero
    for i, c in enumerate(text):
        if _is_digit(c) or c == ".":
            continue
        if i == 0 and c == "-":
            continue
        return False
    return True


def to_int(text: str) -> int:
    """Integer value of an `is_numeric` string; anything after `.` is dropped."""
    negative = text.startswith("-")
    digits = (text[1:] if negative else text).split(".", 1)[0]
    value = int(digits) if digits else 0
    return -value if negative else value


def _component(text: str) -> int:
    return int(text) if text else 0


def _split_ms(ms: int) -> tuple[int, int, int]:
    m, rem = divmod(abs(ms), 60_000)
    s, rem = divmod(rem, 1_000)
    return m, s, rem // 10


def format_timestamp(ms: int, no_padding: bool = False) -> str:
    m, s, cs = _split_ms(ms)
    sign = "-" if ms < 0 else ""
    if no_padding:
        return f"{sign}{m}:{s}.{cs}"
    return f"{sign}{m:02d}:{s:02d}.{cs:02d}"


def parse_timestamp(text: str) -> tuple[int, TimestampCarry | None]:
    """
    Parse `mm:ss.cs` into milliseconds.

    Text that is not timestamp-shaped parses as 0. Seconds >= 60 or
    centiseconds >= 100 are carried (`1:75.00` -> `02:15.00`) and reported
    through the returned `TimestampCarry`; the duration is still usable.
    """
    if not is_timestamp_shaped(text):
        return 0, None

    negative = text[0] == "-"
    body = text[1:] if negative else text
    colon = body.index(":")
    dot = body.index(".")
    if dot < colon:
        # "12.34:56" has the right characters in the wrong order
        return 0, None

    mm = _component(body[:colon])
    ss = _component(body[colon + 1 : dot])
    cs = _component(body[dot + 1 :])

    total = mm * 60_000 + ss * 1_000 + cs * 10
    duration = -total if negative else total

    carry = None
    if ss >= 60 or cs >= 100:
        carry = TimestampCarry(original=text, corrected=format_timestamp(duration))
    return duration, carry


def timestamp_ms(text: str) -> int:
    return parse_timestamp(text)[0]


def apply_offset(ms: int, offset_ms: int, invert: bool = False) -> int:
    out = ms - offset_ms * (-1 if invert else 1)
    # never earlier than the start of the track
    return out if out > 0 else 0
