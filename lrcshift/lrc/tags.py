from __future__ import annotations

import logging
from dataclasses import dataclass

from .timestamp import is_timestamp_shaped, timestamp_ms
from .tokens import serialize, tokenize, trim

logger = logging.getLogger(__name__)

TIME_TAG = "time"

_OPEN = ("[", "<")
_CLOSE = ("]", ">")


@dataclass(frozen=True, slots=True)
class NamedTag:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class TimedTag:
    """A bracketed span holding a bare timestamp, e.g. `[00:12.34]`."""

    value: str

    @property
    def name(self) -> str:
        return TIME_TAG

    @property
    def ms(self) -> int:
        return timestamp_ms(self.value)


Tag = NamedTag | TimedTag


def slice_at(text: str, joint: str = ":") -> tuple[str, str]:
    """
    "offset: 750" -> ("offset", " 750")
    "correctoffset" -> ("correctoffset", "")
    """
    name, sep, value = text.partition(joint)
    return name, value if sep else ""


def _candidates(line: str) -> list[str]:
    found: list[str] = []
    building: list[str] = []
    inside = False

    for c in line:
        if c in _OPEN:
            inside = True
        elif c in _CLOSE:
            if building:
                found.append("".join(building))
            building = []
            inside = False
        elif inside:
            building.append(c)

    # unterminated "[ti: Song" still counts
    if building:
        found.append("".join(building))
    return found


def read_tags(line: str) -> list[Tag]:
    """
    Every `[name:value]` / `<name:value>` span in `line`, in order.

    `[` and `<` (and `]` and `>`) are interchangeable, so `[foo>` is a span.
    Timestamps are kept whole as `TimedTag` instead of being split at `:`.
    """
    tags: list[Tag] = []
    for cand in _candidates(line):
        if is_timestamp_shaped(cand):
            tags.append(TimedTag(cand))
            continue
        name, value = slice_at(cand, ":")
        tags.append(NamedTag(trim(name), trim(value)))
    return tags


def _pop_once(tokens: list[str], key: str) -> tuple[list[str] | None, bool]:
    """
    Remove the `[...]` span around the first token containing `key`.

    Returns (new tokens or None when nothing was removed, key seen again).
    """
    hits = [i for i, tok in enumerate(tokens) if key in tok]
    if not hits:
        return None, False
    at = hits[0]
    repeat = len(hits) > 1

    opening = next((i for i in range(at, -1, -1) if tokens[i] == "["), None)
    closing = next((i for i in range(at, len(tokens)) if tokens[i] == "]"), None)
    if opening is None or closing is None or opening > closing:
        return None, repeat

    # the key must sit in the name part, not in the value
    inner = serialize(tokens[opening:closing])
    name, sep, _ = inner.partition(":")
    if sep and key not in name:
        return None, repeat

    return tokens[:opening] + tokens[closing + 1 :], repeat


def pop_tag(line: str, key: str) -> str:
    """
    Drop the bracketed tag named `key` from `line`.

    Only the first token holding `key` is considered on each pass; if the key
    shows up again the pass repeats on the result, so
    `pop_tag("[x:1][x:2] rest", "x") == "rest"`. Lines without a well formed
    span around the key come back unchanged.
    """
    out = line
    # every pass removes at least the two brackets, so this terminates
    while True:
        popped, repeat = _pop_once(tokenize(out, True), key)
        if popped is None:
            break
        out = serialize(popped, " ", True)
        if not repeat:
            break

    if out is not line:
        logger.debug("popped %r: %r -> %r", key, line, out)
    return out
