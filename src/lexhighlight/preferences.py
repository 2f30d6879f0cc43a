"""Exclusion preferences applied when building a lexicon index.

Preferences arrive from an external store (or the config file) as loosely
typed lists. Disabled words are normalized to canonical phrases and disabled
levels are coerced to numbers, so they can be compared directly against
index keys and record levels.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lexhighlight.lexicon.models import Level, parse_level
from lexhighlight.text.normalizer import normalize_phrase


class ExclusionPreferences(BaseModel):
    """User choices that remove phrases from the index."""

    disabled_words: frozenset[str] = Field(frozenset(), description="Canonical phrases to exclude")
    disabled_levels: frozenset[Level] = Field(frozenset(), description="Levels to exclude")
    include_extra: bool = Field(True, description="Merge the extra lexicon into the main one")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("disabled_words", mode="before")
    @classmethod
    def normalize_words(cls, value: Any) -> frozenset[str]:
        if not isinstance(value, list | tuple | set | frozenset):
            return frozenset()
        words = (normalize_phrase(item) for item in value if isinstance(item, str))
        return frozenset(word for word in words if word)

    @field_validator("disabled_levels", mode="before")
    @classmethod
    def coerce_levels(cls, value: Any) -> frozenset[Level]:
        if not isinstance(value, list | tuple | set | frozenset):
            return frozenset()
        levels = (parse_level(item) for item in value)
        return frozenset(level for level in levels if level > 0)

    def disable_word(self, word: str) -> "ExclusionPreferences":
        """Return preferences with ``word`` excluded. Empty phrases are ignored."""
        canonical = normalize_phrase(word)
        if not canonical:
            return self
        return self.model_copy(update={"disabled_words": self.disabled_words | {canonical}})

    def enable_word(self, word: str) -> "ExclusionPreferences":
        """Return preferences with ``word`` no longer excluded."""
        canonical = normalize_phrase(word)
        return self.model_copy(update={"disabled_words": self.disabled_words - {canonical}})

    def disable_level(self, level: Level | str) -> "ExclusionPreferences":
        """Return preferences with ``level`` excluded. Non-positive levels are ignored."""
        parsed = parse_level(level)
        if parsed <= 0:
            return self
        return self.model_copy(update={"disabled_levels": self.disabled_levels | {parsed}})

    def enable_level(self, level: Level | str) -> "ExclusionPreferences":
        """Return preferences with ``level`` no longer excluded."""
        return self.model_copy(update={"disabled_levels": self.disabled_levels - {parse_level(level)}})

    def with_include_extra(self, enabled: bool) -> "ExclusionPreferences":
        """Return preferences with the extra lexicon toggled."""
        return self.model_copy(update={"include_extra": enabled})
