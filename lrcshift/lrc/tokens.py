from __future__ import annotations

from typing import Iterable

MARKERS = frozenset("[]<>")
_OPENERS = ("[", "<")
_TIGHT_BEFORE = ("]", ">", ":")


def tokenize(line: str, lyrics_mode: bool = False) -> list[str]:
    """
    Split `line` on spaces.

    In lyrics mode every `[`, `]`, `<` and `>` becomes a token of its own,
    even inside a word: "[00:12.34]Hey" -> ["[", "00:12.34", "]", "Hey"].
    """
    tokens: list[str] = []
    start = -1

    for i, c in enumerate(line):
        if c == " " or (lyrics_mode and c in MARKERS):
            if start != -1:
                tokens.append(line[start:i])
                start = -1
            if c != " ":
                tokens.append(c)
            continue
        if start == -1:
            start = i

    if start != -1:
        tokens.append(line[start:])
    return tokens


def serialize(tokens: Iterable[str], joint: str = " ", lyrics_mode: bool = False) -> str:
    """
    Join tokens back into a line.

    In lyrics mode brackets stay tight, so `[ 00:12.34 ]` comes back as
    `[00:12.34]` while words keep their separator.
    """
    out: list[str] = []
    prev: str | None = None
    for tok in tokens:
        if prev is not None:
            tight = lyrics_mode and (prev in _OPENERS or tok in _TIGHT_BEFORE)
            if not tight:
                out.append(joint)
        out.append(tok)
        prev = tok
    return "".join(out)


def trim(text: str) -> str:
    return text.strip()
