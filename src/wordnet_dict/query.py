"""Read-only lemma queries over the relational store.

Queries open no explicit read transaction. While an import is running, a
query may observe the examples and relations of the synsets in the flush
being written as of that flush's commit boundary, so the relation graph
can look partially updated until the import finishes.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from pathlib import Path
from typing import Any

from wordnet_dict import db as _db
from wordnet_dict.exceptions import ConfigError, LemmaNotFoundError, ValidationError
from wordnet_dict.models import LemmaEntry, file_pos
from wordnet_dict.parser import normalize_lemma
from wordnet_dict.relations import ANTONYM

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[], sqlite3.Connection]


def normalize_query(word: str | None) -> str:
    """Normalize a requested lemma, raising ValidationError when blank."""
    lemma = normalize_lemma(word)
    if lemma is None:
        raise ValidationError('Missing required "word" query parameter')
    return lemma


def _rows_in(
    conn: sqlite3.Connection,
    sql: str,
    values: Sequence[Any],
    *params: Any,
) -> list[sqlite3.Row]:
    """Run ``sql`` with its ``{ids}`` slot bound to ``values`` in chunks."""
    rows: list[sqlite3.Row] = []
    for batch in _db.chunked(list(values), _db.LOOKUP_BATCH_SIZE):
        rows.extend(
            conn.execute(
                sql.format(ids=_db.placeholders(len(batch))),
                (*batch, *params),
            ).fetchall()
        )
    return rows


def _append_unique(bucket: list[str], values: Sequence[str]) -> None:
    for value in values:
        if value not in bucket:
            bucket.append(value)


class QueryService:
    """Answer definition, synonym, antonym and part-of-speech questions.

    ``connect`` must return a new connection on every call: sub-queries of
    one request run on separate threads.
    """

    def __init__(
        self,
        connect: ConnectionFactory,
        *,
        max_workers: int = 3,
        log: logging.Logger | None = None,
    ) -> None:
        self._connect = connect
        self.max_workers = max_workers
        self.log = log or logger

    @classmethod
    def for_path(cls, db_path: str | Path, **kwargs: Any) -> QueryService:
        """Create a service reading the database file at ``db_path``.

        Every sub-query opens its own connection, so an in-memory database
        would be a new empty one each time; ``":memory:"`` is rejected.
        """
        if str(db_path) == ":memory:":
            raise ConfigError("Queries need a database file, not ':memory:'")
        return cls(lambda: _db.connect(db_path), **kwargs)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def definitions_for(self, word: str | None) -> list[LemmaEntry]:
        """All senses of ``word`` with examples, synonyms and antonyms."""
        lemma = normalize_query(word)
        synsets = self.fetch_synsets(lemma)
        if not synsets:
            raise LemmaNotFoundError(lemma)
        synset_ids = [row["synset_id"] for row in synsets]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            examples_f = pool.submit(self.fetch_examples, synset_ids)
            synonyms_f = pool.submit(self.fetch_synonyms, synset_ids, lemma)
            antonyms_f = pool.submit(self.fetch_antonyms, synset_ids)
            examples = examples_f.result()
            synonyms = synonyms_f.result()
            antonyms = antonyms_f.result()

        return [
            LemmaEntry(
                offset=row["offset"],
                pos=row["pos"],
                definition=row["definition"],
                examples=examples.get(row["synset_id"], []),
                synonyms=synonyms.get(row["synset_id"], []),
                antonyms=antonyms.get(row["synset_id"], []),
            )
            for row in synsets
        ]

    def synonyms_for(self, word: str | None) -> list[dict[str, Any]]:
        return [e.to_dict("offset", "pos", "synonyms") for e in self.definitions_for(word)]

    def antonyms_for(self, word: str | None) -> list[dict[str, Any]]:
        return [e.to_dict("offset", "pos", "antonyms") for e in self.definitions_for(word)]

    def parts_of_speech_for(self, word: str | None) -> list[str]:
        """Distinct parts of speech of ``word``'s synsets, in sorted order."""
        lemma = normalize_query(word)
        synsets = self.fetch_synsets(lemma)
        if not synsets:
            raise LemmaNotFoundError(lemma)
        return list(dict.fromkeys(row["pos"] for row in synsets))

    # ------------------------------------------------------------------
    # Fetches
    # ------------------------------------------------------------------

    def fetch_synsets(self, lemma: str) -> list[sqlite3.Row]:
        """Synsets having ``lemma`` as a member, ordered by pos then offset."""
        with closing(self._connect()) as conn:
            return conn.execute(
                'SELECT s.id AS synset_id, s."offset" AS "offset", '
                "s.pos AS pos, s.definition AS definition "
                "FROM synsets s "
                "JOIN word_synsets ws ON ws.synset_id = s.id "
                "JOIN words w ON ws.word_id = w.id "
                "WHERE w.lemma = ? "
                'ORDER BY s.pos, s."offset"',
                (lemma,),
            ).fetchall()

    def fetch_examples(self, synset_ids: Sequence[int]) -> dict[int, list[str]]:
        result: dict[int, list[str]] = {}
        if not synset_ids:
            return result
        with closing(self._connect()) as conn:
            rows = _rows_in(
                conn,
                "SELECT synset_id, text FROM examples "
                "WHERE synset_id IN ({ids}) ORDER BY id",
                synset_ids,
            )
        for row in rows:
            result.setdefault(row["synset_id"], []).append(row["text"])
        return result

    def fetch_synonyms(
        self,
        synset_ids: Sequence[int],
        base_lemma: str,
    ) -> dict[int, list[str]]:
        """Other member lemmas of each synset, excluding ``base_lemma``."""
        result: dict[int, list[str]] = {}
        if not synset_ids:
            return result
        with closing(self._connect()) as conn:
            rows = self._members(conn, synset_ids)
        for row in rows:
            if not row["lemma"] or row["lemma"] == base_lemma:
                continue
            _append_unique(result.setdefault(row["synset_id"], []), [row["lemma"]])
        return result

    def fetch_antonyms(self, synset_ids: Sequence[int]) -> dict[int, list[str]]:
        """Resolve Antonym relations of each synset back into lemmas.

        Relations store only the target's offset, and offsets are unique per
        data file, not globally. When the relation carries the target's part
        of speech, only synsets from that file match; otherwise every synset
        with the offset does.
        """
        result: dict[int, list[str]] = {}
        if not synset_ids:
            return result

        with closing(self._connect()) as conn:
            relation_rows = _rows_in(
                conn,
                "SELECT synset_id, target_offset, target_pos FROM relations "
                "WHERE synset_id IN ({ids}) AND relation_type = ? ORDER BY id",
                synset_ids,
                ANTONYM,
            )
            offsets = list(dict.fromkeys(
                (row["target_offset"] or "").strip() for row in relation_rows
            ))
            offsets = [o for o in offsets if o]
            if not offsets:
                return result

            target_rows = _rows_in(
                conn,
                'SELECT id, "offset", pos FROM synsets WHERE "offset" IN ({ids})',
                offsets,
            )
            if not target_rows:
                return result

            targets_by_offset: dict[str, list[tuple[int, str]]] = {}
            for row in target_rows:
                targets_by_offset.setdefault(row["offset"], []).append((row["id"], row["pos"]))

            member_rows = self._members(conn, list(dict.fromkeys(row["id"] for row in target_rows)))

        lemmas_by_synset: dict[int, list[str]] = {}
        for row in member_rows:
            if row["lemma"]:
                _append_unique(lemmas_by_synset.setdefault(row["synset_id"], []), [row["lemma"]])

        for relation in relation_rows:
            targets = targets_by_offset.get((relation["target_offset"] or "").strip(), [])
            if relation["target_pos"]:
                wanted = file_pos(relation["target_pos"])
                targets = [t for t in targets if file_pos(t[1]) == wanted]
            antonyms = [
                lemma
                for target_id, _ in targets
                for lemma in lemmas_by_synset.get(target_id, [])
            ]
            if antonyms:
                _append_unique(result.setdefault(relation["synset_id"], []), antonyms)
        return result

    @staticmethod
    def _members(conn: sqlite3.Connection, synset_ids: Sequence[int]) -> list[sqlite3.Row]:
        return _rows_in(
            conn,
            "SELECT ws.synset_id AS synset_id, w.lemma AS lemma "
            "FROM word_synsets ws JOIN words w ON ws.word_id = w.id "
            "WHERE ws.synset_id IN ({ids}) ORDER BY ws.id",
            synset_ids,
        )
