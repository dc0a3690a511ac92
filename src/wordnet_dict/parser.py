"""Parsers for WordNet data and index file lines."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from wordnet_dict.lines import iter_lines
from wordnet_dict.models import VALID_POS, IndexEntry, Pointer, SynsetRecord
from wordnet_dict.relations import relation_type_for

logger = logging.getLogger(__name__)

_QUOTED_RE = re.compile(r'"([^"]+)"')
_ADJ_MARKER_RE = re.compile(r"\((?:a|p|ip)\)$")

# Fields before the first lemma: offset, lex_filenum, ss_type, w_cnt
_WORDS_START = 4
_POINTER_WIDTH = 4


def normalize_lemma(value: str | None) -> str | None:
    """Normalize a lemma for storage and lookup.

    Drops a ``%`` sense suffix, turns underscores into spaces, trims and
    lowercases. Returns None when nothing is left. Applying it twice gives
    the same result as applying it once.
    """
    if not value:
        return None
    base = value.split("%", 1)[0]
    normalized = base.replace("_", " ").strip().lower()
    return normalized or None


def split_gloss(gloss: str) -> tuple[str, list[str]]:
    """Split a gloss into its definition and quoted example sentences."""
    examples = [m.strip() for m in _QUOTED_RE.findall(gloss)]
    examples = [ex for ex in examples if ex]
    definition = _QUOTED_RE.sub("", gloss).strip()
    return definition, examples


def _is_offset(token: str) -> bool:
    return token.isascii() and token.isdigit()


def _parse_word_numbers(token: str) -> tuple[int, int]:
    """Decode the ``source/target`` hex field of a pointer."""
    try:
        return int(token[:2], 16), int(token[2:], 16)
    except ValueError:
        return 0, 0


def parse_data_line(
    line: str,
    *,
    log: logging.Logger | None = None,
) -> SynsetRecord | None:
    """Parse one line of a ``data.<pos>`` file.

    Returns None for lines that cannot be turned into a record: blank and
    license header lines, a missing or non-numeric offset, an unknown
    synset type, or a truncated word list. Skips other than header and
    blank lines are logged at WARNING.
    """
    log = log or logger

    if not line.strip() or line[0].isspace():
        return None

    left, _, gloss = line.partition("|")
    parts = left.split()

    offset = parts[0] if parts else ""
    if not _is_offset(offset):
        log.warning(f"Skipping line without a valid offset: {line[:40]!r}")
        return None

    if len(parts) < _WORDS_START:
        log.warning(f"Skipping truncated line for offset {offset}")
        return None

    pos = parts[2]
    if pos not in VALID_POS:
        log.warning(f"Unknown synset type {pos!r} at offset {offset}")
        return None

    try:
        lex_filenum = int(parts[1])
        word_count = int(parts[3], 16)
    except ValueError:
        log.warning(f"Skipping line with malformed counts at offset {offset}")
        return None

    pointer_index = _WORDS_START + word_count * 2
    if len(parts) <= pointer_index:
        log.warning(f"Skipping line with truncated word list at offset {offset}")
        return None

    lemmas: list[str] = []
    for token in parts[_WORDS_START:pointer_index:2]:
        lemma = normalize_lemma(_ADJ_MARKER_RE.sub("", token))
        if lemma and lemma not in lemmas:
            lemmas.append(lemma)

    try:
        pointer_count = int(parts[pointer_index])
    except ValueError:
        pointer_count = 0

    pointers: list[Pointer] = []
    relations: dict[str, list[str]] = {}
    start = pointer_index + 1
    for i in range(pointer_count):
        fields = parts[start + i * _POINTER_WIDTH:start + (i + 1) * _POINTER_WIDTH]
        if len(fields) < 2:
            break
        symbol, target = fields[0], fields[1]
        target_pos = fields[2] if len(fields) > 2 else ""
        source_word, target_word = _parse_word_numbers(fields[3]) if len(fields) > 3 else (0, 0)
        pointers.append(Pointer(symbol, target, target_pos, source_word, target_word))

        rel_type = relation_type_for(symbol)
        if rel_type is None:
            continue
        targets = relations.setdefault(rel_type, [])
        if target not in targets:
            targets.append(target)

    definition, examples = split_gloss(gloss)

    return SynsetRecord(
        offset=offset,
        pos=pos,
        definition=definition,
        examples=examples,
        lemmas=lemmas,
        relations=relations,
        pointers=pointers,
        lex_filenum=lex_filenum,
    )


def parse_index_line(line: str) -> IndexEntry | None:
    """Parse one line of an ``index.<pos>`` file, or None for headers."""
    if not line.strip() or line[0].isspace():
        return None

    parts = line.split()
    if len(parts) < 4:
        return None

    lemma = normalize_lemma(parts[0])
    if lemma is None:
        return None

    try:
        synset_count = int(parts[2])
        pointer_count = int(parts[3])
        symbols = tuple(parts[4:4 + pointer_count])
        sense_count = int(parts[4 + pointer_count])
        tagsense_count = int(parts[5 + pointer_count])
    except (ValueError, IndexError):
        return None

    offsets = tuple(parts[6 + pointer_count:6 + pointer_count + synset_count])
    return IndexEntry(
        lemma=lemma,
        pos=parts[1],
        offsets=offsets,
        pointer_symbols=symbols,
        sense_count=sense_count,
        tagsense_count=tagsense_count,
    )


def iter_data_records(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    log: logging.Logger | None = None,
) -> Iterator[SynsetRecord]:
    """Yield every parseable record of a data file, in file order."""
    for line in iter_lines(path, encoding=encoding):
        record = parse_data_line(line, log=log)
        if record is not None:
            yield record


def iter_index_entries(
    path: str | Path,
    *,
    encoding: str = "utf-8",
) -> Iterator[IndexEntry]:
    """Yield every entry of an index file, skipping header lines."""
    for line in iter_lines(path, encoding=encoding):
        entry = parse_index_line(line)
        if entry is not None:
            yield entry
