"""Pointer symbol to relation type mapping for wordnet-dict."""

from __future__ import annotations

ANTONYM = "Antonym"

# Complete mapping of WordNet data-file pointer symbols to relation labels.
# Symbols are whole whitespace-delimited tokens, so two-character variants
# (``@i``, ``#m``, ``;c``...) are looked up as exact keys.

POINTER_SYMBOL_RELATIONS: dict[str, str] = {
    "!": ANTONYM,
    "@": "Hypernym",
    "@i": "Instance Hypernym",
    "~": "Hyponym",
    "~i": "Instance Hyponym",
    "#m": "Holonym (member)",
    "#s": "Holonym (substance)",
    "#p": "Holonym (part)",
    "%m": "Meronym (member)",
    "%s": "Meronym (substance)",
    "%p": "Meronym (part)",
    "=": "Attribute",
    "+": "Derivationally Related Form",
    ";c": "Domain of synset - TOPIC",
    "-c": "Member of this domain - TOPIC",
    ";r": "Domain of synset - REGION",
    "-r": "Member of this domain - REGION",
    ";u": "Domain of synset - USAGE",
    "-u": "Member of this domain - USAGE",
    "*": "Entailment",
    ">": "Cause",
    "^": "Also See",
    "$": "Verb Group",
    "&": "Similar To",
    "<": "Participle of Verb",
    "\\": "Pertainym (derived from noun)",
}


def relation_type_for(symbol: str) -> str | None:
    """Get the relation label for a pointer symbol, or None if unmapped."""
    return POINTER_SYMBOL_RELATIONS.get(symbol)
