"""Tests for lemma queries over an imported database."""

import pytest

from wordnet_dict import db
from wordnet_dict.exceptions import ConfigError, LemmaNotFoundError, ValidationError
from wordnet_dict.query import QueryService, normalize_query


class TestNormalizeQuery:
    def test_normalizes(self):
        assert normalize_query("  Abstract_Entity ") == "abstract entity"

    @pytest.mark.parametrize("word", [None, "", "   ", "%1:05:00::"])
    def test_blank_raises(self, word):
        with pytest.raises(ValidationError):
            normalize_query(word)


class TestDefinitions:
    def test_entry_fields(self, service):
        entries = service.definitions_for("happy")
        assert [e.to_dict() for e in entries] == [{
            "offset": "01123456",
            "pos": "a",
            "definition": "enjoying or showing joy;",
            "examples": ["a happy smile"],
            "synonyms": [],
            "antonyms": ["sad", "unhappy"],
        }]

    def test_mixed_case_matches(self, service):
        assert service.definitions_for("HaPPy") == service.definitions_for("happy")

    def test_ordered_by_pos_then_offset(self, service):
        entries = service.definitions_for("sad")
        assert [(e.pos, e.offset) for e in entries] == [("a", "01125000"), ("n", "01125000")]
        assert entries[0].synonyms == ["unhappy"]
        assert entries[1].synonyms == ["blue devils"]
        assert entries[0].examples == ["sad news"]
        assert entries[1].examples == []

    def test_synonyms_exclude_query_lemma(self, service):
        (entry,) = service.definitions_for("abstraction")
        assert entry.synonyms == ["abstract entity"]
        (entry,) = service.definitions_for("abstract_entity")
        assert entry.synonyms == ["abstraction"]

    def test_existing_lemma_without_extras_has_empty_lists(self, service):
        (entry,) = service.definitions_for("feel")
        assert entry.definition == "undergo an emotional sensation"
        assert entry.examples == []
        assert entry.synonyms == []
        assert entry.antonyms == []

    def test_unknown_lemma(self, service):
        with pytest.raises(LemmaNotFoundError) as exc_info:
            service.definitions_for("zzzNotAWord")
        assert exc_info.value.lemma == "zzznotaword"

    def test_blank_lemma(self, service):
        with pytest.raises(ValidationError):
            service.definitions_for("  ")

    def test_empty_database(self, conn, db_path):
        with pytest.raises(LemmaNotFoundError):
            QueryService.for_path(db_path).definitions_for("happy")

    def test_in_memory_database_rejected(self):
        with pytest.raises(ConfigError):
            QueryService.for_path(":memory:")


class TestAntonyms:
    def test_antonyms_are_directional(self, service):
        assert service.antonyms_for("happiness") == [
            {"offset": "00100000", "pos": "n", "antonyms": ["unhappiness"]},
        ]
        assert service.antonyms_for("unhappiness") == [
            {"offset": "00100001", "pos": "n", "antonyms": []},
        ]

    def test_happy_sad(self, service):
        assert service.antonyms_for("happy")[0]["antonyms"] == ["sad", "unhappy"]
        assert all(e["antonyms"] == [] for e in service.antonyms_for("sad"))

    def test_target_pos_restricts_colliding_offset(self, service):
        # 01125000 is both an adjective and a noun synset.
        antonyms = service.antonyms_for("happy")[0]["antonyms"]
        assert "blue devils" not in antonyms

    def test_missing_target_pos_matches_every_pos(self, imported, service):
        with imported:
            imported.execute(
                "UPDATE relations SET target_pos = NULL WHERE relation_type = 'Antonym'"
            )
        antonyms = service.antonyms_for("happy")[0]["antonyms"]
        assert sorted(antonyms) == ["blue devils", "sad", "unhappy"]

    def test_satellite_target_matches_head_file(self, imported, service):
        with imported:
            imported.execute(
                "INSERT INTO relations (synset_id, relation_type, target_offset, target_pos) "
                "SELECT id, 'Antonym', '01123999', 'a' FROM synsets "
                "WHERE \"offset\" = '01125000' AND pos = 'a'"
            )
        entries = service.antonyms_for("sad")
        assert entries[0] == {"offset": "01125000", "pos": "a", "antonyms": ["glad"]}

    def test_dangling_target(self, imported, service):
        with imported:
            imported.execute(
                "UPDATE relations SET target_offset = '99999999' "
                "WHERE relation_type = 'Antonym'"
            )
        assert service.antonyms_for("happy")[0]["antonyms"] == []


class TestProjections:
    def test_synonyms_for(self, service):
        assert service.synonyms_for("unhappy") == [
            {"offset": "01125000", "pos": "a", "synonyms": ["sad"]},
        ]

    def test_parts_of_speech(self, service):
        assert service.parts_of_speech_for("sad") == ["a", "n"]
        assert service.parts_of_speech_for("glad") == ["s"]

    def test_parts_of_speech_unknown(self, service):
        with pytest.raises(LemmaNotFoundError):
            service.parts_of_speech_for("zzz")


class TestFetches:
    def test_fetch_synsets(self, service):
        rows = service.fetch_synsets("rejoice")
        assert [(r["offset"], r["pos"]) for r in rows] == [("00200000", "v")]

    def test_fetches_with_no_ids(self, service):
        assert service.fetch_examples([]) == {}
        assert service.fetch_synonyms([], "x") == {}
        assert service.fetch_antonyms([]) == {}

    def test_many_synset_ids_are_chunked(self, imported, service, monkeypatch):
        monkeypatch.setattr(db, "LOOKUP_BATCH_SIZE", 1)
        ids = [row[0] for row in imported.execute("SELECT id FROM synsets")]
        examples = service.fetch_examples(ids)
        assert sum(len(v) for v in examples.values()) == 6
