"""Tests for the Highlighter session."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from lexhighlight.config import Config
from lexhighlight.highlighter import Highlighter
from lexhighlight.lexicon.loader import LexiconLoadError
from lexhighlight.preferences import ExclusionPreferences

MAIN = [
    {"word": "hus", "meaning": "house", "level": 500},
    {"word": "rødt hus", "meaning": "red house", "level": 1500},
    {"word": "katt", "meaning": "cat", "level": 500},
]
EXTRA = [
    {"word": "katt", "meaning": "my cat"},
    {"word": "hybel", "meaning": "bedsit"},
]
TEXT = "En katt i et rødt hus, ikke en hybel."


def _matched(highlighter: Highlighter, text: str = TEXT) -> list[str]:
    return [text[m.start : m.end] for m in highlighter.scan(text)]


class TestHighlighter:
    """Tests for Highlighter rebuild and scan behaviour."""

    def test_initial_scan(self) -> None:
        highlighter = Highlighter(MAIN, EXTRA)
        assert _matched(highlighter) == ["katt", "rødt hus", "hybel"]

    def test_main_lexicon_wins_over_extra(self) -> None:
        highlighter = Highlighter(MAIN, EXTRA)
        entry = highlighter.index.lookup("katt")
        assert entry is not None
        assert entry.meaning == "cat"

    def test_exclude_extra_lexicon(self) -> None:
        highlighter = Highlighter(MAIN, EXTRA, ExclusionPreferences(include_extra=False))
        assert _matched(highlighter) == ["katt", "rødt hus"]

    def test_toggle_extra_rebuilds(self) -> None:
        highlighter = Highlighter(MAIN, EXTRA)
        old_index = highlighter.index
        new_index = highlighter.set_include_extra(False)
        assert new_index is highlighter.index
        assert new_index is not old_index
        assert "hybel" in old_index
        assert "hybel" not in new_index

    def test_disable_and_restore_word(self) -> None:
        highlighter = Highlighter(MAIN)
        highlighter.disable_word("Katt")
        assert _matched(highlighter) == ["rødt hus"]
        highlighter.enable_word("katt")
        assert _matched(highlighter) == ["katt", "rødt hus"]

    def test_disable_level_removes_phrase_without_exposing_shorter_one(self) -> None:
        highlighter = Highlighter(MAIN)
        text = "Det røde huset og det rødt hus der"
        assert _matched(highlighter, text) == ["rødt hus"]
        highlighter.set_level_enabled(1500, False)
        # "hus" is its own phrase here, so it now matches inside the former span
        assert _matched(highlighter, text) == ["hus"]
        highlighter.set_level_enabled(1500, True)
        assert _matched(highlighter, text) == ["rødt hus"]

    def test_failed_rebuild_keeps_previous_state(self) -> None:
        highlighter = Highlighter(MAIN)
        index = highlighter.index
        prefs = highlighter.preferences
        with patch("lexhighlight.highlighter.build_index", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                highlighter.disable_word("hus")
        assert highlighter.index is index
        assert highlighter.preferences is prefs

    def test_scan_segments(self) -> None:
        highlighter = Highlighter(MAIN, EXTRA)
        results, stats = highlighter.scan_segments(["et hus", "", "katt og hybel"])
        assert [len(r) for r in results] == [1, 0, 2]
        assert stats.total == 2
        assert stats.by_level == {500: 2}

    def test_level_overview_uses_main_lexicon(self) -> None:
        highlighter = Highlighter(MAIN, EXTRA)
        assert highlighter.all_levels() == [500, 1500]
        assert highlighter.level_counts() == {500: 2, 1500: 1}

    def test_tail_expansion_flag(self) -> None:
        records = [{"word": "gå", "inflection": "har gått"}]
        assert _matched(Highlighter(records), "de er gått") == []
        assert _matched(Highlighter(records, expand_inflection_tail=True), "de er gått") == ["gått"]


class TestFromConfig:
    """Tests for Highlighter.from_config."""

    def _config(self, tmp_path: Path, lexicon: dict[str, str], **sections: object) -> Config:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"lexicon": lexicon, **sections}, allow_unicode=True), encoding="utf-8")
        return Config(path)

    def test_loads_lexicons_and_preferences(self, tmp_path: Path) -> None:
        main_path = tmp_path / "wordsdetail.json"
        extra_path = tmp_path / "myown.json"
        main_path.write_text(json.dumps(MAIN, ensure_ascii=False), encoding="utf-8")
        extra_path.write_text(json.dumps(EXTRA, ensure_ascii=False), encoding="utf-8")
        config = self._config(
            tmp_path,
            {"main_path": str(main_path), "extra_path": str(extra_path)},
            preferences={"disabled_words": ["katt"]},
        )
        highlighter = Highlighter.from_config(config)
        assert _matched(highlighter) == ["rødt hus", "hybel"]

    def test_missing_extra_lexicon_is_tolerated(self, tmp_path: Path) -> None:
        main_path = tmp_path / "wordsdetail.json"
        main_path.write_text(json.dumps(MAIN, ensure_ascii=False), encoding="utf-8")
        config = self._config(tmp_path, {"main_path": str(main_path), "extra_path": str(tmp_path / "nope.json")})
        assert _matched(Highlighter.from_config(config)) == ["katt", "rødt hus"]

    def test_broken_main_lexicon_raises(self, tmp_path: Path) -> None:
        main_path = tmp_path / "wordsdetail.json"
        main_path.write_text("{}", encoding="utf-8")
        config = self._config(tmp_path, {"main_path": str(main_path)})
        with pytest.raises(LexiconLoadError):
            Highlighter.from_config(config)
