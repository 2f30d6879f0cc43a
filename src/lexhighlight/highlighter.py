"""Highlighter session tying lexicons, preferences and the current index together.

The session owns exactly one lexicon index at a time. Every preference change
builds a complete replacement index and only then swaps it in, so a failed
build leaves the previous index in place. The session does no locking:
callers that scan from several threads must not rebuild while scans against
the current index are still running.
"""

import logging
from collections.abc import Iterable
from typing import Any

from lexhighlight.config import Config
from lexhighlight.lexicon.index import LexiconIndex, build_index
from lexhighlight.lexicon.loader import load_lexicon, load_optional_lexicon, merge_lexicons, parse_records
from lexhighlight.lexicon.models import DictionaryRecord, Level, MatchSpan
from lexhighlight.lexicon.scanner import scan
from lexhighlight.lexicon.stats import LevelStats, collect_levels, count_levels, summarize_matches
from lexhighlight.preferences import ExclusionPreferences

logger = logging.getLogger(__name__)


class Highlighter:
    """Scan texts for lexicon phrases under the current exclusion preferences."""

    def __init__(
        self,
        main_records: list[Any],
        extra_records: list[Any] | None = None,
        preferences: ExclusionPreferences | None = None,
        expand_inflection_tail: bool = False,
    ) -> None:
        """Initialize the session and build the first index.

        Args:
            main_records: Raw or parsed records of the main lexicon.
            extra_records: Raw or parsed records of the optional extra lexicon.
            preferences: Initial exclusion preferences.
            expand_inflection_tail: Also index the last token of multi-token
                inflection variants.
        """
        self._main_records = parse_records(main_records)
        self._extra_records = parse_records(extra_records or [])
        self._preferences = preferences or ExclusionPreferences()
        self._expand_inflection_tail = expand_inflection_tail
        self._index = self._build()

    @classmethod
    def from_config(cls, config: Config) -> "Highlighter":
        """Create a session from the lexicon files and preferences in config.

        Raises:
            FileNotFoundError: If the main lexicon file does not exist.
            LexiconLoadError: If the main lexicon file is unusable.
        """
        main_records = load_lexicon(config.getMainLexiconPath())
        extra_records = load_optional_lexicon(config.getExtraLexiconPath())
        return cls(
            main_records=main_records,
            extra_records=extra_records,
            preferences=config.get_preferences(),
            expand_inflection_tail=config.get_matching_config().expand_inflection_tail,
        )

    @property
    def index(self) -> LexiconIndex:
        """The index currently used for scanning."""
        return self._index

    @property
    def preferences(self) -> ExclusionPreferences:
        """The preferences the current index was built with."""
        return self._preferences

    def records(self) -> list[DictionaryRecord]:
        """Return the records the current index is built from, main lexicon first."""
        return merge_lexicons(self._main_records, self._extra_records, self._preferences.include_extra)

    def all_levels(self) -> list[Level]:
        """Return the distinct positive levels of the main lexicon."""
        return collect_levels(self._main_records)

    def level_counts(self) -> dict[Level, int]:
        """Return record counts per level of the main lexicon."""
        return count_levels(self._main_records)

    def rebuild(self) -> LexiconIndex:
        """Build a fresh index from the current records and preferences and install it."""
        self._index = self._build()
        return self._index

    def update_preferences(self, preferences: ExclusionPreferences) -> LexiconIndex:
        """Replace the preferences and rebuild the index.

        The new preferences are only kept if the rebuild succeeds.
        """
        previous = self._preferences
        self._preferences = preferences
        try:
            return self.rebuild()
        except Exception:
            self._preferences = previous
            raise

    def disable_word(self, word: str) -> LexiconIndex:
        """Exclude a phrase and rebuild."""
        return self.update_preferences(self._preferences.disable_word(word))

    def enable_word(self, word: str) -> LexiconIndex:
        """Restore a previously excluded phrase and rebuild."""
        return self.update_preferences(self._preferences.enable_word(word))

    def set_level_enabled(self, level: Level | str, enabled: bool) -> LexiconIndex:
        """Enable or disable a level and rebuild."""
        if enabled:
            return self.update_preferences(self._preferences.enable_level(level))
        return self.update_preferences(self._preferences.disable_level(level))

    def set_include_extra(self, enabled: bool) -> LexiconIndex:
        """Toggle the extra lexicon and rebuild."""
        return self.update_preferences(self._preferences.with_include_extra(enabled))

    def scan(self, text: str) -> list[MatchSpan]:
        """Scan one text against the current index."""
        return scan(text, self._index)

    def scan_segments(self, texts: Iterable[str]) -> tuple[list[list[MatchSpan]], LevelStats]:
        """Scan several text segments and count their matches per level.

        Returns:
            Tuple of (matches per segment in input order, combined level stats).
        """
        results: list[list[MatchSpan]] = []
        stats = LevelStats()
        for text in texts:
            matches = self.scan(text)
            results.append(matches)
            stats.merge(summarize_matches(matches))
        return results, stats

    def _build(self) -> LexiconIndex:
        logger.info(
            "Rebuilding lexicon index: include_extra=%s disabled_words=%d disabled_levels=%s",
            self._preferences.include_extra,
            len(self._preferences.disabled_words),
            sorted(self._preferences.disabled_levels),
        )
        return build_index(
            self.records(),
            disabled_words=self._preferences.disabled_words,
            disabled_levels=self._preferences.disabled_levels,
            expand_inflection_tail=self._expand_inflection_tail,
        )
