"""Lexicon index construction and phrase scanning."""

from lexhighlight.lexicon.index import LexiconIndex, LexiconIndexBuilder, PhraseBucket, build_index
from lexhighlight.lexicon.models import DictionaryRecord, Example, IndexEntry, MatchSpan
from lexhighlight.lexicon.scanner import scan

__all__ = [
    "DictionaryRecord",
    "Example",
    "IndexEntry",
    "LexiconIndex",
    "LexiconIndexBuilder",
    "MatchSpan",
    "PhraseBucket",
    "build_index",
    "scan",
]
