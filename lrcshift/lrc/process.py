"""
The per-file processing pass.

Options are a space separated string of `name[:value]` tokens:

- `correctoffset[:N]`: rewrite every timestamp by the running offset. The
  offset comes from `[offset:]` / `[of:]` tags as they are met, so a second
  tag further down re-bases everything after it. A numeric `N` pins the
  offset and file tags are then ignored.
- `invertoffset`: flip the offset sign convention (see `timestamp`).
- `dropmetadata`: strip `[ti:]`, `[ar:]`, `[al:]`, `[au:]`, `[le:]`,
  `[by:]`, `[re:]` and `[ve:]`, e.g. before embedding into an audio file.

Unknown options are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from .line import correct_line
from .tags import pop_tag, read_tags, slice_at
from .timestamp import is_numeric, to_int
from .tokens import tokenize, trim

logger = logging.getLogger(__name__)

# shortest names first
METADATA_KEYS = ("ti", "ar", "al", "au", "le", "by", "re", "ve")
OFFSET_KEYS = ("offset", "of")


@dataclass(frozen=True, slots=True)
class ProcessOptions:
    correct_offset: bool = False
    offset_override: int | None = None
    invert_offset: bool = False
    drop_metadata: bool = False


@dataclass(frozen=True, slots=True)
class ProcessingState:
    offset: int = 0
    have_override: bool = False

    @classmethod
    def from_options(cls, opts: ProcessOptions) -> ProcessingState:
        if opts.offset_override is None:
            return cls()
        return cls(offset=opts.offset_override, have_override=True)


def parse_options(options: str) -> ProcessOptions:
    opts = ProcessOptions()
    for tok in tokenize(options):
        name, value = slice_at(tok, ":")
        name, value = trim(name), trim(value)

        if name == "correctoffset":
            opts = replace(opts, correct_offset=True)
            # a non-numeric value is ignored, not an error
            if value and is_numeric(value):
                opts = replace(opts, offset_override=to_int(value))
        elif name == "invertoffset":
            opts = replace(opts, invert_offset=True)
        elif name == "dropmetadata":
            opts = replace(opts, drop_metadata=True)
        else:
            logger.debug("Ignoring unknown option '%s'", name)
    return opts


def build_options(offset: int = 0, invert: bool = False, drop_metadata: bool = False) -> str:
    # offset 0 means "use whatever the file says"
    parts = ["correctoffset" + (f":{offset}" if offset != 0 else "")]
    if invert:
        parts.append("invertoffset")
    if drop_metadata:
        parts.append("dropmetadata")
    return " ".join(parts)


def _offset_tag_value(line: str) -> tuple[bool, str | None]:
    """(line has an offset tag, its usable value) - first offset tag wins."""
    for tag in read_tags(line):
        if tag.name in OFFSET_KEYS:
            if tag.value and is_numeric(tag.value):
                return True, tag.value
            return True, None
    return False, None


def _step(state: ProcessingState, line: str, opts: ProcessOptions) -> tuple[ProcessingState, str | None]:
    has_offset_tag, value = _offset_tag_value(line)
    if value is not None and not state.have_override:
        state = replace(state, offset=to_int(value))
        logger.debug("Running offset is now %d ms", state.offset)

    out = line
    if opts.drop_metadata:
        for key in METADATA_KEYS:
            out = pop_tag(out, key)

    # only the short key is popped; it also matches inside "offset"
    if has_offset_tag:
        out = pop_tag(out, "of")

    if not trim(out):
        return state, None

    if opts.correct_offset:
        out = correct_line(out, state.offset, opts.invert_offset)
    return state, out


def process_lyrics(lines: Iterable[str], options: str | ProcessOptions = "") -> list[str]:
    """
    Run the requested passes over LRC lines and return the new lines.

    Lines left empty after tag removal are dropped.
    """
    opts = parse_options(options) if isinstance(options, str) else options
    state = ProcessingState.from_options(opts)

    out: list[str] = []
    for line in lines:
        state, processed = _step(state, line, opts)
        if processed is not None:
            out.append(processed)
    return out
