"""Domain model dataclasses and enums for wordnet-dict."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from wordnet_dict.relations import relation_type_for

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PartOfSpeech(str, Enum):
    """Synset types found in the ``pos`` field of WordNet data files."""

    NOUN = "n"
    VERB = "v"
    ADJECTIVE = "a"
    ADJECTIVE_SATELLITE = "s"
    ADVERB = "r"


# Fixed order in which the data files are ingested.
IMPORT_ORDER: tuple[PartOfSpeech, ...] = (
    PartOfSpeech.NOUN,
    PartOfSpeech.VERB,
    PartOfSpeech.ADJECTIVE,
    PartOfSpeech.ADVERB,
)

VALID_POS = frozenset(p.value for p in PartOfSpeech)


def file_pos(pos: str) -> str:
    """Map a synset type to the part of speech of the file holding it.

    Satellite adjectives live in ``data.adj`` together with head adjectives,
    which is also how pointers address them.
    """
    return PartOfSpeech.ADJECTIVE.value if pos == PartOfSpeech.ADJECTIVE_SATELLITE.value else pos


# ---------------------------------------------------------------------------
# Parsed source records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Pointer:
    """One entry of a data line's pointer table."""

    symbol: str
    target_offset: str
    target_pos: str
    source_word: int = 0
    target_word: int = 0


@dataclass
class SynsetRecord:
    """A parsed data-file line."""

    offset: str
    pos: str
    definition: str
    examples: list[str] = field(default_factory=list)
    lemmas: list[str] = field(default_factory=list)
    relations: dict[str, list[str]] = field(default_factory=dict)
    pointers: list[Pointer] = field(default_factory=list)
    lex_filenum: int = 0

    @property
    def key(self) -> tuple[str, str]:
        return (self.offset, self.pos)

    def relation_rows(self) -> list[tuple[str, str, str | None]]:
        """Return ``(relation_type, target_offset, target_pos)`` triples.

        One row per entry of :attr:`relations`; the target part of speech is
        taken from the first pointer carrying that type and offset.
        """
        target_pos: dict[tuple[str, str], str] = {}
        for ptr in self.pointers:
            rel_type = relation_type_for(ptr.symbol)
            if rel_type is not None:
                target_pos.setdefault((rel_type, ptr.target_offset), ptr.target_pos)

        return [
            (rel_type, offset, target_pos.get((rel_type, offset)))
            for rel_type, offsets in self.relations.items()
            for offset in offsets
        ]


@dataclass(frozen=True)
class IndexEntry:
    """A parsed index-file line."""

    lemma: str
    pos: str
    offsets: tuple[str, ...]
    pointer_symbols: tuple[str, ...] = ()
    sense_count: int = 0
    tagsense_count: int = 0


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------

@dataclass
class LemmaEntry:
    """One sense of a queried lemma."""

    offset: str
    pos: str
    definition: str
    examples: list[str] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    def to_dict(self, *fields: str) -> dict[str, Any]:
        """Serialize to a dict, optionally projected onto ``fields``."""
        data = asdict(self)
        if not fields:
            return data
        return {k: data[k] for k in fields}


@dataclass
class SynsetData:
    """Synset details read straight from the data files."""

    offset: str
    definition: str
    examples: list[str] = field(default_factory=list)
    sense_key: str = ""


@dataclass
class WordData:
    """File-backed lookup result for one lemma and part of speech."""

    lemma: str
    pos: str
    synsets: list[SynsetData] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
