"""Shared test fixtures for wordnet-dict."""

import pytest

from wordnet_dict import db
from wordnet_dict.lines import DictionaryFiles
from wordnet_dict.pipeline import WordNetImporter
from wordnet_dict.query import QueryService

LICENSE_HEADER = (
    "  1 This software and database is being provided to you, the LICENSEE, by\n"
    "  2 Princeton University under the following license.\n"
)

# 01125000 exists both in data.noun and data.adj.
DATA_FILES = {
    "data.noun": (
        "00001740 03 n 01 entity 0 001 ~ 00002137 n 0000 "
        "| that which is perceived to exist; \"entities are everywhere\"\n"
        "00002137 03 n 02 abstraction 0 abstract_entity 0 001 @ 00001740 n 0000 "
        "| a general concept formed by extracting common features\n"
        "00100000 07 n 01 happiness 0 001 ! 00100001 n 0101 "
        "| state of well-being; \"she radiated happiness\"\n"
        "00100001 07 n 01 unhappiness 0 000 | state of being unhappy\n"
        "01125000 07 n 02 blue_devils 0 sad 0 000 | a state of low spirits\n"
    ),
    "data.verb": (
        "00200000 29 v 01 rejoice 0 001 @ 00200001 v 0000 01 + 08 00 "
        "| feel happiness; \"We rejoiced at the news\"\n"
        "00200001 29 v 01 feel 0 000 01 + 02 00 | undergo an emotional sensation\n"
    ),
    "data.adj": (
        "01123456 00 a 01 happy 0 002 ! 01125000 a 0101 & 01123999 s 0000 "
        "| enjoying or showing joy; \"a happy smile\"\n"
        "01123999 00 s 01 glad 0 001 & 01123456 a 0000 | showing pleasure\n"
        "01125000 00 a 02 sad 0 unhappy(p) 0 000 | experiencing sorrow; \"sad news\"\n"
    ),
    "data.adv": (
        "00300000 02 r 01 happily 0 001 \\ 01123456 a 0101 "
        "| in a happy manner; \"they lived happily\"\n"
    ),
}

INDEX_FILES = {
    "index.noun": (
        "abstract_entity n 1 1 @ 1 0 00002137\n"
        "abstraction n 1 1 @ 1 0 00002137\n"
        "blue_devils n 1 0 1 0 01125000\n"
        "entity n 1 1 ~ 1 0 00001740\n"
        "happiness n 1 1 ! 1 1 00100000\n"
        "sad n 1 0 1 0 01125000\n"
        "unhappiness n 1 0 1 0 00100001\n"
    ),
    "index.verb": (
        "feel v 1 0 1 0 00200001\n"
        "rejoice v 1 1 @ 1 0 00200000\n"
    ),
    "index.adj": (
        "glad a 1 1 & 1 0 01123999\n"
        "happy a 1 2 ! & 1 1 01123456\n"
        "sad a 1 0 1 0 01125000\n"
        "unhappy a 1 0 1 0 01125000\n"
    ),
    "index.adv": (
        "happily r 1 1 \\ 1 0 00300000\n"
    ),
}

# Records, words and rows produced by a full import of the files above.
TOTAL_RECORDS = 11
EXPECTED_COUNTS = {
    "words": 14,
    "synsets": 11,
    "word_synsets": 14,
    "examples": 6,
    "relations": 8,
}


def write_dict_dir(path, data_files=None, index_files=None):
    """Write WordNet data/index files (with license headers) into ``path``."""
    path.mkdir(parents=True, exist_ok=True)
    for name, body in {**DATA_FILES, **(data_files or {})}.items():
        (path / name).write_text(LICENSE_HEADER + body, encoding="utf-8")
    for name, body in {**INDEX_FILES, **(index_files or {})}.items():
        (path / name).write_text(LICENSE_HEADER + body, encoding="utf-8")
    return path


@pytest.fixture
def dict_dir(tmp_path):
    """A complete sample WordNet dict/ directory."""
    return write_dict_dir(tmp_path / "dict")


@pytest.fixture
def files(dict_dir):
    return DictionaryFiles(dict_dir)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "wordnet.sqlite"


@pytest.fixture
def conn(db_path):
    """An initialized file database connection."""
    connection = db.open_database(db_path)
    yield connection
    connection.close()


@pytest.fixture
def imported(conn, files):
    """Connection to a database holding the full sample import."""
    WordNetImporter(conn, files).run()
    return conn


@pytest.fixture
def service(imported, db_path):
    """Query service over the imported sample database."""
    return QueryService.for_path(db_path)
