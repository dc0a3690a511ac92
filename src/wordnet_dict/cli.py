"""
Command-line interface for wordnet-dict.
"""
from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Optional

from wordnet_dict import __version__
from wordnet_dict.config import Settings, load_settings
from wordnet_dict.db import open_database, table_counts
from wordnet_dict.exceptions import ConfigError, WordnetDictError
from wordnet_dict.lines import DictionaryFiles
from wordnet_dict.logging_setup import configure_logging
from wordnet_dict.lookup import LookupService
from wordnet_dict.models import IMPORT_ORDER, PartOfSpeech
from wordnet_dict.pipeline import IndexImporter, WordNetImporter
from wordnet_dict.query import QueryService, normalize_query


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the wordnet-dict CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.config, overrides=_overrides(args))
        configure_logging(settings.log_level)
        return args.func(args, settings)
    except WordnetDictError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def pos_list(value: str) -> list[str]:
    """Parse a comma-separated list such as ``n,v,a,r``."""
    result = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            result.append(PartOfSpeech(item).value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"unknown part of speech: {item!r}")
    if not result:
        raise argparse.ArgumentTypeError("expected at least one part of speech")
    return result


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wordnet-dict",
        description="Load WordNet dictionary files into SQLite and query lemmas",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # import command
    import_parser = subparsers.add_parser(
        "import",
        help="Import WordNet data files into the database",
    )
    _add_dict_dir(import_parser)
    _add_db(import_parser)
    import_parser.add_argument(
        "--limit",
        type=positive_int,
        help="Stop after this many synset records",
    )
    import_parser.add_argument(
        "--batch-size",
        type=positive_int,
        help="Records per transactional flush (default: 750)",
    )
    import_parser.add_argument(
        "--pos",
        type=pos_list,
        help="Comma-separated parts of speech to import (default: n,v,a,r)",
    )
    import_parser.set_defaults(func=cmd_import)

    # import-index command
    index_parser = subparsers.add_parser(
        "import-index",
        help="Import every lemma of the WordNet index files as a word",
    )
    _add_dict_dir(index_parser)
    _add_db(index_parser)
    index_parser.set_defaults(func=cmd_import_index)

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
    )
    _add_db(serve_parser)
    serve_parser.add_argument("--host", type=str, help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")
    serve_parser.set_defaults(func=cmd_serve)

    # query commands
    for name, help_text in (
        ("define", "Show definitions, examples, synonyms and antonyms"),
        ("synonyms", "Show synonyms per sense"),
        ("antonyms", "Show antonyms per sense"),
        ("pos", "Show the parts of speech of a word"),
    ):
        query_parser = subparsers.add_parser(name, help=help_text)
        query_parser.add_argument("word", type=str, help="Word to look up")
        _add_db(query_parser)
        query_parser.set_defaults(func=cmd_query)

    # lookup command
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Look a word up directly in the dictionary files",
    )
    lookup_parser.add_argument("word", type=str, help="Word to look up")
    lookup_parser.add_argument(
        "--pos",
        required=True,
        choices=["n", "v", "a", "r"],
        help="Part of speech",
    )
    _add_dict_dir(lookup_parser)
    lookup_parser.set_defaults(func=cmd_lookup)

    return parser


def _add_dict_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dict-dir",
        type=str,
        help="WordNet dict/ directory",
    )


def _add_db(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db",
        type=str,
        help="SQLite database file",
    )


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Settings given on the command line."""
    return {
        "db_path": getattr(args, "db", None),
        "dict_dir": getattr(args, "dict_dir", None),
        "host": getattr(args, "host", None),
        "port": getattr(args, "port", None),
        "batch_size": getattr(args, "batch_size", None),
        "log_level": args.log_level,
    }


def _require_dict_dir(settings: Settings) -> DictionaryFiles:
    if not settings.dict_dir:
        raise ConfigError("No WordNet dict directory given (use --dict-dir or WORDNET_DICT_DIR)")
    return DictionaryFiles(settings.dict_dir)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_import(args: argparse.Namespace, settings: Settings) -> int:
    """Handle import command."""
    files = _require_dict_dir(settings)
    print(f"\nImporting {files.dict_dir} into {settings.db_path}...")

    conn = open_database(settings.db_path)
    try:
        importer = WordNetImporter(
            conn,
            files,
            batch_size=settings.batch_size,
            limit=args.limit,
            parts_of_speech=args.pos or IMPORT_ORDER,
            encoding=settings.encoding,
        )
        start = time.perf_counter()
        processed = importer.run()
        elapsed = time.perf_counter() - start
        counts = table_counts(conn)
    finally:
        conn.close()

    print(f"  Processed {processed} synsets in {elapsed:.2f}s")
    for table, count in counts.items():
        print(f"  {table}: {count}")
    return 0


def cmd_import_index(args: argparse.Namespace, settings: Settings) -> int:
    """Handle import-index command."""
    files = _require_dict_dir(settings)
    conn = open_database(settings.db_path)
    try:
        count = IndexImporter(conn, files, encoding=settings.encoding).run()
        words = table_counts(conn)["words"]
    finally:
        conn.close()

    print(f"  Read {count} index lines ({words} words stored)")
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Handle serve command."""
    from wordnet_dict.server import run_server

    run_server(settings)
    return 0


def cmd_query(args: argparse.Namespace, settings: Settings) -> int:
    """Handle define, synonyms, antonyms and pos commands."""
    open_database(settings.db_path).close()
    service = QueryService.for_path(settings.db_path)
    lemma = normalize_query(args.word)

    if args.command == "define":
        payload = {
            "lemma": lemma,
            "entries": [e.to_dict() for e in service.definitions_for(lemma)],
        }
    elif args.command == "synonyms":
        payload = {"lemma": lemma, "entries": service.synonyms_for(lemma)}
    elif args.command == "antonyms":
        payload = {"lemma": lemma, "entries": service.antonyms_for(lemma)}
    else:
        payload = {"lemma": lemma, "partsOfSpeech": service.parts_of_speech_for(lemma)}

    _print_json(payload)
    return 0


def cmd_lookup(args: argparse.Namespace, settings: Settings) -> int:
    """Handle lookup command."""
    files = _require_dict_dir(settings)
    data = LookupService(files, encoding=settings.encoding).lookup(args.word, args.pos)
    if data is None:
        print(f"Error: {args.word!r} not found in the {args.pos} index", file=sys.stderr)
        return 1
    _print_json(data.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
