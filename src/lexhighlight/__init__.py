"""Highlight known vocabulary phrases in text with lexicon metadata."""

from lexhighlight.highlighter import Highlighter
from lexhighlight.lexicon import (
    DictionaryRecord,
    Example,
    IndexEntry,
    LexiconIndex,
    LexiconIndexBuilder,
    MatchSpan,
    build_index,
    scan,
)
from lexhighlight.preferences import ExclusionPreferences
from lexhighlight.text import normalize_phrase, tokenize

__all__ = [
    "DictionaryRecord",
    "Example",
    "ExclusionPreferences",
    "Highlighter",
    "IndexEntry",
    "LexiconIndex",
    "LexiconIndexBuilder",
    "MatchSpan",
    "build_index",
    "normalize_phrase",
    "scan",
    "tokenize",
]
