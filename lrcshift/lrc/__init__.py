from .line import apply_offset_to_timestamp, correct_line
from .process import (
    METADATA_KEYS,
    OFFSET_KEYS,
    ProcessingState,
    ProcessOptions,
    build_options,
    parse_options,
    process_lyrics,
)
from .tags import NamedTag, Tag, TimedTag, pop_tag, read_tags, slice_at
from .timestamp import (
    TimestampCarry,
    apply_offset,
    format_timestamp,
    is_numeric,
    is_timestamp_shaped,
    parse_timestamp,
    timestamp_ms,
)
from .tokens import serialize, tokenize, trim

__all__ = [
    "METADATA_KEYS",
    "OFFSET_KEYS",
    "NamedTag",
    "ProcessOptions",
    "ProcessingState",
    "Tag",
    "TimedTag",
    "TimestampCarry",
    "apply_offset",
    "apply_offset_to_timestamp",
    "build_options",
    "correct_line",
    "format_timestamp",
    "is_numeric",
    "is_timestamp_shaped",
    "parse_options",
    "parse_timestamp",
    "pop_tag",
    "process_lyrics",
    "read_tags",
    "serialize",
    "slice_at",
    "timestamp_ms",
    "tokenize",
    "trim",
]
