"""Lazy line reading for large dictionary files."""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from pathlib import Path

from wordnet_dict.exceptions import DataImportError

DEFAULT_CHUNK_SIZE = 64 * 1024


def iter_lines(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[str]:
    """Yield the lines of ``path`` without their line terminators.

    Bytes are read ``chunk_size`` at a time and decoded incrementally, so
    only the current chunk and one partial line are held in memory. Every
    call opens the file again; generators never share a cursor.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the content is not valid ``encoding``.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    decoder = codecs.getincrementaldecoder(encoding)()
    buffer = ""
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            final = not chunk
            buffer += decoder.decode(chunk, final=final)
            if buffer:
                lines = buffer.split("\n")
                buffer = lines.pop()
                for line in lines:
                    yield line.rstrip("\r")
            if final:
                break

    if buffer:
        yield buffer.rstrip("\r")


class DictionaryFiles:
    """Locations of the ``index.*`` and ``data.*`` files of a WordNet ``dict/``."""

    _SUFFIXES = {"n": "noun", "v": "verb", "a": "adj", "s": "adj", "r": "adv"}

    def __init__(self, dict_dir: str | Path) -> None:
        self.dict_dir = Path(dict_dir)

    def __repr__(self) -> str:
        return f"DictionaryFiles({str(self.dict_dir)!r})"

    def _path(self, kind: str, pos: str) -> Path:
        suffix = self._SUFFIXES.get(pos)
        if suffix is None:
            raise DataImportError(f"Unknown part of speech: {pos!r}")
        path = self.dict_dir / f"{kind}.{suffix}"
        if not path.is_file():
            raise DataImportError(f"WordNet file not found: {path}")
        return path

    def data_path(self, pos: str) -> Path:
        """Path of the data file holding synsets of ``pos``."""
        return self._path("data", pos)

    def index_path(self, pos: str) -> Path:
        """Path of the index file listing lemmas of ``pos``."""
        return self._path("index", pos)
