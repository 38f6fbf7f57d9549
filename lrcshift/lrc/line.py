from __future__ import annotations

import logging

from .timestamp import apply_offset, format_timestamp, is_timestamp_shaped, parse_timestamp
from .tokens import serialize, tokenize

logger = logging.getLogger(__name__)


def apply_offset_to_timestamp(text: str, offset_ms: int, invert: bool = False) -> str:
    """
    Shift one timestamp token, e.g. ("00:12.33", -670) -> "00:13.00".

    Anything that is not a timestamp is returned as is.
    """
    if not is_timestamp_shaped(text):
        return text
    ms, carry = parse_timestamp(text)
    if carry is not None:
        logger.warning("%s", carry)
    return format_timestamp(apply_offset(ms, offset_ms, invert))


def correct_line(line: str, offset_ms: int, invert: bool = False) -> str:
    """
    Rewrite every timestamp in `line` by `offset_ms`.

    ("[00:13.75] A lyric", -1250) -> "[00:15.00] A lyric". Only bare
    timestamp tokens change; brackets and tag text pass through, although the
    line is re-joined with tight brackets.
    """
    tokens = [apply_offset_to_timestamp(tok, offset_ms, invert) for tok in tokenize(line, True)]
    return serialize(tokens, " ", True)
