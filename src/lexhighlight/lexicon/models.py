"""Data models for lexicon records, index entries and match spans.

``DictionaryRecord`` is the external input shape and is parsed leniently:
lexicon files are hand-maintained, so a malformed field falls back to an
empty value instead of rejecting the record. ``IndexEntry`` and ``MatchSpan``
are internal pipeline types and are plain frozen dataclasses.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lexhighlight.text.normalizer import flatten_inflection

Level = int | float


def parse_level(value: Any) -> Level:
    """Coerce a number-like level into a number, defaulting to 0.

    Integral values come back as ``int`` so they compare equal to the integer
    levels used in exclusion sets.
    """
    if isinstance(value, bool):
        return 0

    if isinstance(value, int):
        return value

    number: float
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
    else:
        return 0

    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def _coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, int | float):
        return str(value) if value else ""
    return ""


class Example(BaseModel):
    """Example sentence with its translation."""

    no: str | None = None
    en: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class DictionaryRecord(BaseModel):
    """One lexicon entry as supplied by the lexicon file.

    ``type`` falls back to ``pos`` when absent. ``inflection`` is stored in its
    flattened, comma-joined display form.
    """

    word: str = Field("", description="Base form, may list alternate forms separated by , ; or /")
    meaning: str = Field("", description="Translation or gloss")
    type: str = Field("", description="Part of speech")
    inflection: str = Field("", description="Flattened inflection display string")
    level: Level = Field(0, description="Difficulty tier, 0 when unleveled")
    ord: str = Field("", description="Homograph disambiguator")
    description: str | None = Field(None, description="Optional longer description")
    examples: tuple[Example, ...] = Field((), description="Example sentences")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def use_pos_as_type(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("type") and data.get("pos"):
            data = dict(data)
            data["type"] = data["pos"]
        return data

    @field_validator("word", "meaning", "type", "ord", mode="before")
    @classmethod
    def text_or_empty(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("inflection", mode="before")
    @classmethod
    def flatten_inflection_field(cls, value: Any) -> str:
        return flatten_inflection(value)

    @field_validator("level", mode="before")
    @classmethod
    def parse_level_field(cls, value: Any) -> Level:
        return parse_level(value)

    @field_validator("description", mode="before")
    @classmethod
    def description_or_none(cls, value: Any) -> str | None:
        text = _coerce_text(value).strip()
        return text or None

    @field_validator("examples", mode="before")
    @classmethod
    def keep_usable_examples(cls, value: Any) -> tuple[Example, ...]:
        if not isinstance(value, list | tuple):
            return ()

        examples: list[Example] = []
        for item in value:
            if not isinstance(item, Mapping):
                continue
            no = _coerce_text(item.get("no")).strip() or None
            en = _coerce_text(item.get("en")).strip() or None
            if no is None and en is None:
                continue
            examples.append(Example(no=no, en=en))
        return tuple(examples)


@dataclass(frozen=True)
class IndexEntry:
    """Metadata stored for one canonical phrase in the lexicon index.

    Attributes:
        phrase: Canonical phrase this entry is keyed by.
        meaning: Translation or gloss of the source record.
        type: Part of speech.
        inflection: Flattened inflection display string of the source record.
        base_word: Raw base word of the source record.
        ord: Homograph disambiguator.
        level: Difficulty tier, 0 when unleveled.
        description: Optional longer description.
        examples: Example sentences of the source record.
    """

    phrase: str
    meaning: str
    type: str
    inflection: str
    base_word: str
    ord: str
    level: Level
    description: str | None = None
    examples: tuple[Example, ...] = ()


@dataclass(frozen=True)
class MatchSpan:
    """A matched phrase occurrence in scanned text.

    ``start`` and ``end`` form a half-open character range aligned to the
    first and last matched token.
    """

    start: int
    end: int
    phrase: str
    meaning: str
    type: str
    inflection: str
    base_word: str
    ord: str
    level: Level
    description: str | None = None
    examples: tuple[Example, ...] = ()

    @classmethod
    def from_entry(cls, entry: IndexEntry, start: int, end: int) -> "MatchSpan":
        """Create a span carrying a copy of the entry's metadata."""
        return cls(
            start=start,
            end=end,
            phrase=entry.phrase,
            meaning=entry.meaning,
            type=entry.type,
            inflection=entry.inflection,
            base_word=entry.base_word,
            ord=entry.ord,
            level=entry.level,
            description=entry.description,
            examples=entry.examples,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict, omitting empty optional fields."""
        data: dict[str, Any] = {
            "start": self.start,
            "end": self.end,
            "phrase": self.phrase,
            "meaning": self.meaning,
            "type": self.type,
            "inflection": self.inflection,
            "base_word": self.base_word,
            "ord": self.ord,
            "level": self.level,
        }
        if self.description:
            data["description"] = self.description
        if self.examples:
            data["examples"] = [example.model_dump(exclude_none=True) for example in self.examples]
        return data
