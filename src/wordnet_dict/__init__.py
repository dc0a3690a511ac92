__version__ = "1.0.0"

from .exceptions import (
    WordnetDictError as WordnetDictError,
    ConfigError as ConfigError,
    ValidationError as ValidationError,
    EntityNotFoundError as EntityNotFoundError,
    LemmaNotFoundError as LemmaNotFoundError,
    DataImportError as DataImportError,
    DatabaseError as DatabaseError,
)

from .models import (
    PartOfSpeech as PartOfSpeech,
    Pointer as Pointer,
    SynsetRecord as SynsetRecord,
    IndexEntry as IndexEntry,
    LemmaEntry as LemmaEntry,
    SynsetData as SynsetData,
    WordData as WordData,
)

from .lines import (
    iter_lines as iter_lines,
    DictionaryFiles as DictionaryFiles,
)

from .parser import (
    normalize_lemma as normalize_lemma,
    split_gloss as split_gloss,
    parse_data_line as parse_data_line,
    parse_index_line as parse_index_line,
)

from .relations import (
    relation_type_for as relation_type_for,
    POINTER_SYMBOL_RELATIONS as POINTER_SYMBOL_RELATIONS,
)

from .db import (
    connect as connect,
    open_database as open_database,
)

from .pipeline import (
    Importer as Importer,
    WordNetImporter as WordNetImporter,
    IndexImporter as IndexImporter,
    import_dictionary as import_dictionary,
)

from .query import (
    QueryService as QueryService,
)

from .lookup import (
    LookupService as LookupService,
)

from .config import (
    Settings as Settings,
    load_settings as load_settings,
)

__all__ = [
    "__version__",
    "WordnetDictError",
    "ConfigError",
    "ValidationError",
    "EntityNotFoundError",
    "LemmaNotFoundError",
    "DataImportError",
    "DatabaseError",
    "PartOfSpeech",
    "Pointer",
    "SynsetRecord",
    "IndexEntry",
    "LemmaEntry",
    "SynsetData",
    "WordData",
    "iter_lines",
    "DictionaryFiles",
    "normalize_lemma",
    "split_gloss",
    "parse_data_line",
    "parse_index_line",
    "relation_type_for",
    "POINTER_SYMBOL_RELATIONS",
    "connect",
    "open_database",
    "Importer",
    "WordNetImporter",
    "IndexImporter",
    "import_dictionary",
    "QueryService",
    "LookupService",
    "Settings",
    "load_settings",
]
