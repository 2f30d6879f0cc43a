"""Level statistics over lexicon records and scan results."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from lexhighlight.lexicon.models import DictionaryRecord, Level, MatchSpan


@dataclass
class LevelStats:
    """Match counts per level for one or more scanned texts.

    Attributes:
        by_level: Number of matches per positive level.
        total: Number of leveled matches. Unleveled matches are not counted.
    """

    by_level: Counter[Level] = field(default_factory=Counter)
    total: int = 0

    def add(self, matches: Iterable[MatchSpan]) -> None:
        """Count the leveled matches of one scan."""
        for match in matches:
            if match.level > 0:
                self.by_level[match.level] += 1
                self.total += 1

    def merge(self, other: "LevelStats") -> None:
        """Accumulate another stats object into this one."""
        self.by_level.update(other.by_level)
        self.total += other.total

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable summary with levels in ascending order."""
        return {
            "total": self.total,
            "by_level": {str(level): self.by_level[level] for level in sorted(self.by_level)},
        }


def summarize_matches(matches: Iterable[MatchSpan]) -> LevelStats:
    """Count matches per level."""
    stats = LevelStats()
    stats.add(matches)
    return stats


def collect_levels(records: Iterable[DictionaryRecord]) -> list[Level]:
    """Return the distinct positive levels present in the records, ascending."""
    return sorted({record.level for record in records if record.level > 0})


def count_levels(records: Iterable[DictionaryRecord]) -> dict[Level, int]:
    """Count records per positive level, ordered by level."""
    counts = Counter(record.level for record in records if record.level > 0)
    return {level: counts[level] for level in sorted(counts)}
