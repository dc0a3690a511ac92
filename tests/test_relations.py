"""Tests for the pointer symbol table."""

import pytest

from wordnet_dict.relations import (
    ANTONYM,
    POINTER_SYMBOL_RELATIONS,
    relation_type_for,
)


class TestRelationTypeFor:
    @pytest.mark.parametrize("symbol, expected", [
        ("!", "Antonym"),
        ("@", "Hypernym"),
        ("@i", "Instance Hypernym"),
        ("~", "Hyponym"),
        ("~i", "Instance Hyponym"),
        ("#m", "Holonym (member)"),
        ("%p", "Meronym (part)"),
        ("+", "Derivationally Related Form"),
        (";r", "Domain of synset - REGION"),
        ("-u", "Member of this domain - USAGE"),
        ("*", "Entailment"),
        (">", "Cause"),
        ("$", "Verb Group"),
        ("&", "Similar To"),
        ("<", "Participle of Verb"),
        ("\\", "Pertainym (derived from noun)"),
    ])
    def test_known_symbols(self, symbol, expected):
        assert relation_type_for(symbol) == expected

    @pytest.mark.parametrize("symbol", ["", "??", "#", "@ ", "!!"])
    def test_unknown_symbols(self, symbol):
        assert relation_type_for(symbol) is None

    def test_antonym_label(self):
        assert POINTER_SYMBOL_RELATIONS["!"] == ANTONYM

    def test_table_size(self):
        assert len(POINTER_SYMBOL_RELATIONS) == 26
