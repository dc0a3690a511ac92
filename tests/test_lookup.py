"""Tests for file-backed lookups."""

import logging

from wordnet_dict.lines import DictionaryFiles
from wordnet_dict.lookup import LookupService
from wordnet_dict.models import SynsetData, WordData

from conftest import write_dict_dir


class TestLookup:
    def test_lookup(self, files):
        data = LookupService(files).lookup("Happy", "a")
        assert data == WordData(
            lemma="happy",
            pos="a",
            synsets=[SynsetData(
                offset="01123456",
                definition="enjoying or showing joy;",
                examples=["a happy smile"],
                sense_key="happy%a:01123456::",
            )],
        )

    def test_satellite_found_in_adjective_file(self, files):
        data = LookupService(files).lookup("glad", "a")
        assert data.synsets[0].definition == "showing pleasure"

    def test_multiword(self, files):
        data = LookupService(files).lookup("abstract entity", "n")
        assert data.lemma == "abstract entity"
        assert [s.offset for s in data.synsets] == ["00002137"]

    def test_not_indexed(self, files):
        assert LookupService(files).lookup("zzz", "n") is None
        assert LookupService(files).lookup("", "n") is None

    def test_to_dict(self, files):
        body = LookupService(files).lookup("rejoice", "v").to_dict()
        assert body == {
            "lemma": "rejoice",
            "pos": "v",
            "synsets": [{
                "offset": "00200000",
                "definition": "feel happiness;",
                "examples": ["We rejoiced at the news"],
                "sense_key": "rejoice%v:00200000::",
            }],
        }

    def test_missing_offset_logged(self, tmp_path, caplog):
        dict_dir = write_dict_dir(tmp_path / "dict", index_files={
            "index.adv": "happily r 2 0 2 0 00300000 00399999\n",
        })
        with caplog.at_level(logging.WARNING):
            data = LookupService(DictionaryFiles(dict_dir)).lookup("happily", "r")
        assert [s.offset for s in data.synsets] == ["00300000", "00399999"]
        assert data.synsets[1].definition == ""
        assert "00399999" in caplog.text


class TestIndexScans:
    def test_iter_lemmas(self, files):
        assert list(LookupService(files).iter_lemmas("a")) == [
            "glad", "happy", "sad", "unhappy",
        ]

    def test_find_index_entry(self, files):
        entry = LookupService(files).find_index_entry("HAPPINESS", "n")
        assert entry.offsets == ("00100000",)
        assert entry.pointer_symbols == ("!",)

    def test_find_synsets(self, files):
        found = LookupService(files).find_synsets(["00100001", "00001740"], "n")
        assert set(found) == {"00100001", "00001740"}
        assert found["00001740"].lemmas == ["entity"]

    def test_find_synsets_empty(self, files):
        assert LookupService(files).find_synsets([], "n") == {}
