"""Lookups straight from the WordNet index and data files, without a database."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from wordnet_dict.lines import DictionaryFiles, iter_lines
from wordnet_dict.models import IndexEntry, SynsetData, SynsetRecord, WordData
from wordnet_dict.parser import iter_index_entries, normalize_lemma, parse_data_line

logger = logging.getLogger(__name__)


class LookupService:
    """Answer single-word questions by scanning the dictionary files."""

    def __init__(
        self,
        files: DictionaryFiles,
        *,
        encoding: str = "utf-8",
        log: logging.Logger | None = None,
    ) -> None:
        self.files = files
        self.encoding = encoding
        self.log = log or logger

    def iter_lemmas(self, pos: str) -> Iterator[str]:
        """Yield every lemma listed in the index file of ``pos``."""
        for entry in iter_index_entries(self.files.index_path(pos), encoding=self.encoding):
            yield entry.lemma

    def find_index_entry(self, word: str, pos: str) -> IndexEntry | None:
        lemma = normalize_lemma(word)
        if lemma is None:
            return None
        for entry in iter_index_entries(self.files.index_path(pos), encoding=self.encoding):
            if entry.lemma == lemma:
                return entry
        return None

    def find_synsets(self, offsets: Iterable[str], pos: str) -> dict[str, SynsetRecord]:
        """Parse the data lines for ``offsets`` in a single pass over the file."""
        wanted = set(offsets)
        found: dict[str, SynsetRecord] = {}
        if not wanted:
            return found
        for line in iter_lines(self.files.data_path(pos), encoding=self.encoding):
            offset = line.split(" ", 1)[0]
            if offset not in wanted:
                continue
            record = parse_data_line(line, log=self.log)
            if record is not None:
                found[offset] = record
            if len(found) == len(wanted):
                break
        return found

    def lookup(self, word: str, pos: str) -> WordData | None:
        """Definitions and examples of ``word`` as ``pos``, or None if not indexed."""
        entry = self.find_index_entry(word, pos)
        if entry is None:
            return None

        records = self.find_synsets(entry.offsets, pos)
        synsets = []
        for offset in entry.offsets:
            record = records.get(offset)
            if record is None:
                self.log.warning(f"Offset {offset} of {entry.lemma!r} missing from data file")
            synsets.append(SynsetData(
                offset=offset,
                definition=record.definition if record else "",
                examples=list(record.examples) if record else [],
                sense_key=f"{entry.lemma}%{pos}:{offset}::",
            ))
        return WordData(lemma=entry.lemma, pos=pos, synsets=synsets)
