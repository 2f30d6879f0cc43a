"""Lexicon index construction.

The index maps a phrase's first token to the phrases that start with it,
grouped by token length. Each first token also keeps its lengths sorted
longest first, which is the order the scanner tries them in.

An index is built from one snapshot of the lexicon records and the
exclusion sets. Exclusions are applied here, never at scan time; any change
to the inputs means building a new index.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from lexhighlight.lexicon.models import DictionaryRecord, IndexEntry, Level
from lexhighlight.text.normalizer import has_variant_separator, normalize_phrase, split_variants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhraseBucket:
    """All indexed phrases sharing one first token.

    Attributes:
        by_length: Token length -> canonical phrase -> entry.
        lengths_desc: Lengths present in ``by_length``, longest first.
    """

    by_length: Mapping[int, Mapping[str, IndexEntry]]
    lengths_desc: tuple[int, ...]


class LexiconIndex:
    """Read-only phrase index produced by ``LexiconIndexBuilder``."""

    def __init__(self, buckets: Mapping[str, PhraseBucket], size: int) -> None:
        """Wrap already-frozen buckets.

        Args:
            buckets: First token -> bucket of phrases starting with it.
            size: Number of phrases stored across all buckets.
        """
        self._buckets = MappingProxyType(dict(buckets))
        self._size = size

    @property
    def size(self) -> int:
        """Number of distinct phrases in the index."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, phrase: object) -> bool:
        return isinstance(phrase, str) and self.lookup(phrase) is not None

    def bucket(self, first_token: str) -> PhraseBucket | None:
        """Return the bucket for a first token, or None if nothing starts with it."""
        return self._buckets.get(first_token)

    def lookup(self, phrase: str) -> IndexEntry | None:
        """Look up a phrase after normalizing it."""
        canonical = normalize_phrase(phrase)
        if not canonical:
            return None
        tokens = canonical.split(" ")
        bucket = self._buckets.get(tokens[0])
        if bucket is None:
            return None
        phrases = bucket.by_length.get(len(tokens))
        if phrases is None:
            return None
        return phrases.get(canonical)

    def first_tokens(self) -> list[str]:
        """Return all first tokens in the index, sorted."""
        return sorted(self._buckets)

    def phrases(self) -> list[str]:
        """Return all canonical phrases in the index, sorted."""
        return sorted(
            phrase for bucket in self._buckets.values() for phrases in bucket.by_length.values() for phrase in phrases
        )


class LexiconIndexBuilder:
    """Accumulates phrases into a lexicon index.

    The first phrase added for a canonical form wins; later additions of the
    same canonical phrase are dropped.
    """

    def __init__(
        self,
        disabled_words: Iterable[str] = (),
        disabled_levels: Iterable[Level] = (),
        expand_inflection_tail: bool = False,
    ) -> None:
        """Initialize the builder with its exclusion sets.

        Args:
            disabled_words: Canonical phrases that must not be indexed.
            disabled_levels: Levels whose phrases must not be indexed.
            expand_inflection_tail: Also index the last token of each
                multi-token inflection variant as a single-token phrase.
        """
        self._disabled_words = frozenset(disabled_words)
        self._disabled_levels = frozenset(disabled_levels)
        self._expand_inflection_tail = expand_inflection_tail
        self._buckets: dict[str, dict[int, dict[str, IndexEntry]]] = {}
        self._lengths: dict[str, list[int]] = {}
        self._size = 0

    @property
    def size(self) -> int:
        """Number of phrases added so far."""
        return self._size

    def add_phrase(self, raw_phrase: str, record: DictionaryRecord) -> bool:
        """Add one phrase carrying the metadata of ``record``.

        Args:
            raw_phrase: Base form or inflection variant to index.
            record: Record supplying the entry metadata and level.

        Returns:
            True if the phrase was stored, False if it was empty, excluded,
            or already present.
        """
        canonical = normalize_phrase(raw_phrase)
        if not canonical:
            return False
        if canonical in self._disabled_words:
            return False
        # Unleveled entries are never subject to tier filtering.
        if record.level and record.level in self._disabled_levels:
            return False

        tokens = canonical.split(" ")
        first_token = tokens[0]
        length = len(tokens)

        by_length = self._buckets.setdefault(first_token, {})
        phrases = by_length.get(length)
        if phrases is None:
            phrases = {}
            by_length[length] = phrases
            lengths = self._lengths.setdefault(first_token, [])
            lengths.append(length)
            lengths.sort(reverse=True)

        if canonical in phrases:
            return False

        phrases[canonical] = IndexEntry(
            phrase=canonical,
            meaning=record.meaning,
            type=record.type,
            inflection=record.inflection,
            base_word=record.word,
            ord=record.ord,
            level=record.level,
            description=record.description,
            examples=record.examples,
        )
        self._size += 1
        return True

    def add_record(self, record: DictionaryRecord) -> int:
        """Add a record's base forms and inflection variants.

        A record whose base word has no letters is skipped entirely, including
        its inflections.

        Returns:
            Number of phrases stored from this record.
        """
        forms = [form for form in _base_forms(record.word) if normalize_phrase(form)]
        if not forms:
            return 0

        added = 0
        for form in forms:
            added += self.add_phrase(form, record)

        for variant in split_variants(record.inflection):
            added += self.add_phrase(variant, record)
            if self._expand_inflection_tail:
                tokens = normalize_phrase(variant).split(" ")
                if len(tokens) > 1:
                    added += self.add_phrase(tokens[-1], record)

        return added

    def add_records(self, records: Any) -> int:
        """Add raw or parsed records, skipping anything unusable.

        A ``records`` value that is not a list of records is treated as an
        empty lexicon.

        Returns:
            Number of phrases stored.
        """
        if isinstance(records, str | bytes | Mapping) or not isinstance(records, Iterable):
            logger.warning("Lexicon records must be a list, got %s; using an empty lexicon", type(records).__name__)
            return 0

        added = 0
        skipped = 0
        for item in records:
            record = coerce_record(item)
            if record is None:
                skipped += 1
                continue
            added += self.add_record(record)

        if skipped:
            logger.debug("Skipped %d unusable lexicon records", skipped)
        return added

    def build(self) -> LexiconIndex:
        """Freeze the accumulated phrases into a read-only index."""
        buckets = {
            first_token: PhraseBucket(
                by_length=MappingProxyType(
                    {length: MappingProxyType(dict(phrases)) for length, phrases in by_length.items()}
                ),
                lengths_desc=tuple(self._lengths[first_token]),
            )
            for first_token, by_length in self._buckets.items()
        }
        return LexiconIndex(buckets, self._size)


def coerce_record(item: Any) -> DictionaryRecord | None:
    """Return ``item`` as a DictionaryRecord, or None if it cannot be used."""
    if isinstance(item, DictionaryRecord):
        return item
    if not isinstance(item, Mapping):
        return None
    try:
        return DictionaryRecord.model_validate(dict(item))
    except ValidationError as e:
        logger.debug("Ignoring malformed lexicon record %r: %s", item.get("word"), e)
        return None


def build_index(
    records: Any,
    disabled_words: Iterable[str] = (),
    disabled_levels: Iterable[Level] = (),
    *,
    expand_inflection_tail: bool = False,
) -> LexiconIndex:
    """Build a lexicon index from records and exclusion sets.

    Args:
        records: List of raw record dicts or DictionaryRecord objects.
        disabled_words: Canonical phrases to exclude.
        disabled_levels: Levels to exclude.
        expand_inflection_tail: Also index the trailing token of multi-token
            inflection variants.

    Returns:
        A fully built, read-only LexiconIndex.
    """
    builder = LexiconIndexBuilder(
        disabled_words=disabled_words,
        disabled_levels=disabled_levels,
        expand_inflection_tail=expand_inflection_tail,
    )
    builder.add_records(records)
    index = builder.build()
    logger.info("Built lexicon index: %d phrases under %d first tokens", index.size, len(index.first_tokens()))
    return index


def _base_forms(word: str) -> list[str]:
    if has_variant_separator(word):
        return split_variants(word)
    return [word]
