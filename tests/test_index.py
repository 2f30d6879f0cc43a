"""Tests for lexicon index construction."""

import logging
from types import MappingProxyType

import pytest

from lexhighlight.lexicon.index import LexiconIndexBuilder, build_index, coerce_record
from lexhighlight.lexicon.models import DictionaryRecord


def _record(word: str, **fields: object) -> DictionaryRecord:
    return DictionaryRecord.model_validate({"word": word, **fields})


class TestAddPhrase:
    """Tests for LexiconIndexBuilder.add_phrase."""

    def test_stores_normalized_phrase(self) -> None:
        builder = LexiconIndexBuilder()
        assert builder.add_phrase("Rødt  Hus", _record("rødt hus", meaning="red house"))
        index = builder.build()
        entry = index.lookup("rødt hus")
        assert entry is not None
        assert entry.phrase == "rødt hus"
        assert entry.meaning == "red house"

    def test_rejects_empty_phrase(self) -> None:
        builder = LexiconIndexBuilder()
        assert not builder.add_phrase("123 (note)", _record("123"))
        assert builder.size == 0

    def test_first_insert_wins(self) -> None:
        builder = LexiconIndexBuilder()
        assert builder.add_phrase("hus", _record("hus", meaning="house"))
        assert not builder.add_phrase("HUS (n.)", _record("hus", meaning="building"))
        entry = builder.build().lookup("hus")
        assert entry is not None
        assert entry.meaning == "house"
        assert builder.size == 1

    def test_disabled_word_is_rejected(self) -> None:
        builder = LexiconIndexBuilder(disabled_words={"rødt hus"})
        assert not builder.add_phrase("Rødt hus", _record("rødt hus"))

    def test_disabled_level_is_rejected(self) -> None:
        builder = LexiconIndexBuilder(disabled_levels={1500})
        assert not builder.add_phrase("hus", _record("hus", level=1500))
        assert builder.add_phrase("bil", _record("bil", level=500))

    def test_unleveled_entries_ignore_level_filter(self) -> None:
        builder = LexiconIndexBuilder(disabled_levels={0})
        assert builder.add_phrase("hus", _record("hus"))

    def test_lengths_sorted_descending(self) -> None:
        builder = LexiconIndexBuilder()
        record = _record("sol")
        builder.add_phrase("sol", record)
        builder.add_phrase("sol skinn er", record)
        builder.add_phrase("sol skinn", record)
        bucket = builder.build().bucket("sol")
        assert bucket is not None
        assert bucket.lengths_desc == (3, 2, 1)


class TestAddRecord:
    """Tests for record expansion into base forms and inflection variants."""

    def test_base_word_and_inflections(self) -> None:
        index = build_index([{"word": "hus", "inflection": "huset, husene; hus"}])
        assert index.phrases() == ["hus", "husene", "huset"]

    def test_inflection_entries_carry_base_metadata(self) -> None:
        index = build_index([{"word": "gå", "meaning": "walk", "inflection": ["gikk", "har gått"], "level": 500}])
        entry = index.lookup("har gått")
        assert entry is not None
        assert entry.base_word == "gå"
        assert entry.meaning == "walk"
        assert entry.inflection == "gikk, har gått"
        assert entry.level == 500

    def test_base_word_variants_are_split(self) -> None:
        index = build_index([{"word": "han/ham", "meaning": "him"}])
        assert index.phrases() == ["ham", "han"]
        entry = index.lookup("ham")
        assert entry is not None
        assert entry.base_word == "han/ham"

    def test_record_without_usable_word_is_excluded(self) -> None:
        index = build_index([{"word": "", "inflection": "huset"}, {"word": "(en) 123", "inflection": "hus"}])
        assert index.phrases() == []
        assert len(index) == 0

    def test_disabled_base_word_keeps_inflections(self) -> None:
        index = build_index([{"word": "hus", "inflection": "huset"}], disabled_words=["hus"])
        assert index.phrases() == ["huset"]

    def test_tail_expansion_disabled_by_default(self) -> None:
        index = build_index([{"word": "gå", "inflection": "har gått"}])
        assert "gått" not in index

    def test_tail_expansion_adds_last_token(self) -> None:
        index = build_index([{"word": "gå", "inflection": "har gått, gikk"}], expand_inflection_tail=True)
        assert index.phrases() == ["gikk", "gå", "gått", "har gått"]
        entry = index.lookup("gått")
        assert entry is not None
        assert entry.base_word == "gå"

    def test_tail_expansion_not_applied_to_base_words(self) -> None:
        index = build_index([{"word": "rødt hus"}], expand_inflection_tail=True)
        assert index.phrases() == ["rødt hus"]

    def test_tail_expansion_respects_first_insert(self) -> None:
        records = [
            {"word": "gått", "meaning": "gone"},
            {"word": "gå", "meaning": "walk", "inflection": "har gått"},
        ]
        index = build_index(records, expand_inflection_tail=True)
        entry = index.lookup("gått")
        assert entry is not None
        assert entry.meaning == "gone"


class TestBuildIndex:
    """Tests for build_index."""

    def test_duplicate_records_keep_first(self) -> None:
        records = [{"word": "bank (penger)", "meaning": "bank"}, {"word": "bank (elv)", "meaning": "riverbank"}]
        entry = build_index(records).lookup("bank")
        assert entry is not None
        assert entry.meaning == "bank"

    def test_exclusions(self) -> None:
        records = [
            {"word": "hus", "level": 500},
            {"word": "rødt hus", "level": 1500},
            {"word": "bil", "level": 500},
        ]
        index = build_index(records, disabled_words={"bil"}, disabled_levels={1500})
        assert index.phrases() == ["hus"]

    def test_malformed_records_are_skipped(self) -> None:
        records = [None, "hus", 42, {"word": "bil"}, {"word": ["bad"]}]
        index = build_index(records)
        assert index.phrases() == ["bil"]

    @pytest.mark.parametrize("records", [None, "hus", {"word": "hus"}, 42])
    def test_non_list_records_yield_empty_index(self, records: object, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            index = build_index(records)
        assert index.size == 0
        assert "using an empty lexicon" in caplog.text

    def test_accepts_parsed_records(self) -> None:
        index = build_index([_record("hus")])
        assert "hus" in index

    def test_index_is_read_only(self) -> None:
        index = build_index([{"word": "hus"}])
        bucket = index.bucket("hus")
        assert bucket is not None
        assert isinstance(bucket.by_length, MappingProxyType)
        with pytest.raises(TypeError):
            bucket.by_length[1]["tak"] = bucket.by_length[1]["hus"]  # type: ignore[index]

    def test_builder_reuse_does_not_mutate_built_index(self) -> None:
        builder = LexiconIndexBuilder()
        builder.add_record(_record("hus"))
        first = builder.build()
        builder.add_record(_record("hund"))
        assert first.phrases() == ["hus"]
        assert first.size == 1

    def test_logs_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="lexhighlight.lexicon.index"):
            build_index([{"word": "hus"}, {"word": "hund"}])
        assert "2 phrases under 2 first tokens" in caplog.text


class TestCoerceRecord:
    """Tests for coerce_record."""

    def test_passes_through_records(self) -> None:
        record = _record("hus")
        assert coerce_record(record) is record

    def test_rejects_non_mappings(self) -> None:
        assert coerce_record(["hus"]) is None
        assert coerce_record(None) is None
