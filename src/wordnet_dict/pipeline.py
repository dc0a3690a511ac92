"""Import pipeline for wordnet-dict."""

from __future__ import annotations

import itertools
import logging
import sqlite3
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Protocol, TypeVar, runtime_checkable

from wordnet_dict import db as _db
from wordnet_dict.exceptions import DatabaseError
from wordnet_dict.lines import DictionaryFiles
from wordnet_dict.models import IMPORT_ORDER, VALID_POS, PartOfSpeech, SynsetRecord
from wordnet_dict.parser import iter_data_records, iter_index_entries

logger = logging.getLogger(__name__)

SYNSET_BATCH_SIZE = 750
INDEX_CHUNK_SIZE = 2000

_T = TypeVar("_T")

WordKey = tuple[str, str]
SynsetKey = tuple[str, str]


@runtime_checkable
class Importer(Protocol):
    """Anything that can be run as a named import step."""

    name: str

    def run(self) -> int:
        """Run the import and return the number of records processed."""
        ...


def _batched(items: Iterable[_T], size: int) -> Iterator[list[_T]]:
    it = iter(items)
    while batch := list(itertools.islice(it, size)):
        yield batch


class WordNetImporter:
    """Bulk import of ``data.*`` files into the relational store.

    Records are flushed in batches of ``batch_size``; each flush runs in
    its own transaction, so an aborted run keeps every earlier flush.
    """

    name = "wordnet-data"

    def __init__(
        self,
        conn: sqlite3.Connection,
        files: DictionaryFiles,
        *,
        batch_size: int = SYNSET_BATCH_SIZE,
        limit: int | None = None,
        parts_of_speech: Sequence[PartOfSpeech | str] = IMPORT_ORDER,
        encoding: str = "utf-8",
        log: logging.Logger | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        if limit is not None and limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")
        self.conn = conn
        self.files = files
        self.batch_size = batch_size
        self.limit = limit
        self.parts_of_speech = [PartOfSpeech(p).value for p in parts_of_speech]
        self.encoding = encoding
        self.log = log or logger

    def iter_records(self) -> Iterator[SynsetRecord]:
        """Stream parsed records of every part of speech, in import order."""
        for pos in self.parts_of_speech:
            path = self.files.data_path(pos)
            self.log.info(f"Reading {path}")
            yield from iter_data_records(path, encoding=self.encoding, log=self.log)

    def run(self) -> int:
        """Import every configured data file; return the records processed."""
        # Fail before the first flush if a file is missing.
        for pos in self.parts_of_speech:
            self.files.data_path(pos)
        return self.import_records(self.iter_records(), limit=self.limit)

    def import_records(
        self,
        records: Iterable[SynsetRecord],
        *,
        limit: int | None = None,
    ) -> int:
        """Persist ``records`` batch by batch, stopping after ``limit``."""
        if limit is not None:
            self.log.info(f"Starting limited WordNet import (limit={limit})")
        else:
            self.log.info("Starting full WordNet import")

        processed = 0
        batch: list[SynsetRecord] = []

        if limit is None or limit > 0:
            for record in records:
                batch.append(record)
                if limit is not None and processed + len(batch) >= limit:
                    break
                if len(batch) >= self.batch_size:
                    processed += self._flush(batch)
                    self.log.debug(f"Flushed batch ({processed} records processed)")
                    batch = []

        if batch:
            processed += self._flush(batch)
            self.log.debug(f"Flushed final batch ({processed} records processed)")

        self.log.info(f"Completed WordNet import ({processed} records)")
        return processed

    # ------------------------------------------------------------------
    # Flush
    # ------------------------------------------------------------------

    def _flush(self, batch: list[SynsetRecord]) -> int:
        words: dict[WordKey, None] = {}
        synsets: dict[SynsetKey, SynsetRecord] = {}
        for record in batch:
            synsets.setdefault(record.key, record)
        for record in synsets.values():
            for lemma in record.lemmas:
                words.setdefault((lemma, record.pos), None)

        try:
            with self.conn:
                self._persist(list(words), list(synsets.values()))
        except sqlite3.Error as e:
            raise DatabaseError(f"Flush of {len(batch)} records failed: {e}") from e

        return len(batch)

    def _persist(self, words: list[WordKey], records: list[SynsetRecord]) -> None:
        _db.insert_rows(
            self.conn,
            "INSERT INTO words (lemma, pos) VALUES (?, ?) "
            "ON CONFLICT (lemma, pos) DO NOTHING",
            words,
        )
        _db.insert_rows(
            self.conn,
            'INSERT INTO synsets ("offset", pos, definition, sense_key) '
            "VALUES (?, ?, ?, NULL) "
            'ON CONFLICT ("offset", pos) DO NOTHING',
            [(r.offset, r.pos, r.definition) for r in records],
        )

        word_ids = self._load_word_ids(words)
        synset_ids = self._load_synset_ids([r.key for r in records])

        links: dict[tuple[int, int], None] = {}
        for record in records:
            synset_id = synset_ids.get(record.key)
            if synset_id is None:
                continue
            for lemma in record.lemmas:
                word_id = word_ids.get((lemma, record.pos))
                if word_id is not None:
                    links.setdefault((word_id, synset_id), None)
        _db.insert_rows(
            self.conn,
            "INSERT INTO word_synsets (word_id, synset_id) VALUES (?, ?) "
            "ON CONFLICT (word_id, synset_id) DO NOTHING",
            list(links),
        )

        touched = [synset_ids[r.key] for r in records if r.key in synset_ids]
        _db.delete_by_synset_ids(self.conn, "examples", touched)
        _db.delete_by_synset_ids(self.conn, "relations", touched)

        example_rows = []
        relation_rows = []
        for record in records:
            synset_id = synset_ids.get(record.key)
            if synset_id is None:
                continue
            example_rows.extend((synset_id, text) for text in record.examples)
            relation_rows.extend(
                (synset_id, rel_type, target, target_pos or None)
                for rel_type, target, target_pos in record.relation_rows()
            )
        _db.insert_rows(
            self.conn,
            "INSERT INTO examples (synset_id, text) VALUES (?, ?)",
            example_rows,
        )
        _db.insert_rows(
            self.conn,
            "INSERT INTO relations (synset_id, relation_type, target_offset, target_pos) "
            "VALUES (?, ?, ?, ?)",
            relation_rows,
        )

    def _load_word_ids(self, words: list[WordKey]) -> dict[WordKey, int]:
        ids: dict[WordKey, int] = {}
        lemmas = list(dict.fromkeys(lemma for lemma, _ in words))
        for batch in _db.chunked(lemmas, _db.LOOKUP_BATCH_SIZE):
            for row in self.conn.execute(
                "SELECT id, lemma, pos FROM words "
                f"WHERE lemma IN ({_db.placeholders(len(batch))})",
                tuple(batch),
            ):
                ids[(row["lemma"], row["pos"])] = row["id"]
        return ids

    def _load_synset_ids(self, keys: list[SynsetKey]) -> dict[SynsetKey, int]:
        ids: dict[SynsetKey, int] = {}
        offsets = list(dict.fromkeys(offset for offset, _ in keys))
        for batch in _db.chunked(offsets, _db.LOOKUP_BATCH_SIZE):
            for row in self.conn.execute(
                'SELECT id, "offset", pos FROM synsets '
                f'WHERE "offset" IN ({_db.placeholders(len(batch))})',
                tuple(batch),
            ):
                ids[(row["offset"], row["pos"])] = row["id"]
        return ids


class IndexImporter:
    """Insert every lemma of the ``index.*`` files as a word."""

    name = "wordnet-index"

    def __init__(
        self,
        conn: sqlite3.Connection,
        files: DictionaryFiles,
        *,
        parts_of_speech: Sequence[PartOfSpeech | str] = IMPORT_ORDER,
        chunk_size: int = INDEX_CHUNK_SIZE,
        encoding: str = "utf-8",
        log: logging.Logger | None = None,
    ) -> None:
        self.conn = conn
        self.files = files
        self.parts_of_speech = [PartOfSpeech(p).value for p in parts_of_speech]
        self.chunk_size = chunk_size
        self.encoding = encoding
        self.log = log or logger

    def run(self) -> int:
        count = 0
        for pos in self.parts_of_speech:
            path = self.files.index_path(pos)
            self.log.info(f"Reading {path}")
            entries = iter_index_entries(path, encoding=self.encoding)
            for chunk in _batched(entries, self.chunk_size):
                try:
                    with self.conn:
                        self.conn.executemany(
                            "INSERT INTO words (lemma, pos) VALUES (?, ?) "
                            "ON CONFLICT (lemma, pos) DO NOTHING",
                            [(e.lemma, e.pos) for e in chunk if e.pos in VALID_POS],
                        )
                except sqlite3.Error as e:
                    raise DatabaseError(f"Index import failed for {path}: {e}") from e
                count += len(chunk)
        self.log.info(f"Completed index import ({count} lemmas)")
        return count


def import_dictionary(
    conn: sqlite3.Connection,
    dict_dir: str | Path,
    *,
    limit: int | None = None,
    batch_size: int = SYNSET_BATCH_SIZE,
    parts_of_speech: Sequence[PartOfSpeech | str] = IMPORT_ORDER,
    encoding: str = "utf-8",
) -> int:
    """Import the data files of a WordNet ``dict/`` directory into ``conn``."""
    importer = WordNetImporter(
        conn,
        DictionaryFiles(dict_dir),
        batch_size=batch_size,
        limit=limit,
        parts_of_speech=parts_of_speech,
        encoding=encoding,
    )
    return importer.run()
