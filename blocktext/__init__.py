# blocktext/__init__.py
# Parse block-program notation into a typed syntax tree.
from __future__ import annotations

from .blocks import BlockDescriptor, Database, Disambiguator, build_database, default_database
from .errors import BlockTextError, DatabaseError, LanguageError, SchemaValidationError
from .index import LookupIndex, build_index
from .languages import Language, available_languages, load_translation
from .nodes import (
    Block, CMouth, CWrap, Comment, DefineHat, Icon, Insert, Label, Outline, Script,
    scripts_to_json, walk,
)
from .parser import ParseContext, parse_fragment, parse_line
from .pipeline import ParseOptions, parse, parse_with_context, read_code

__version__ = "0.3.0"

__all__ = [
    "Block", "BlockDescriptor", "BlockTextError", "CMouth", "CWrap", "Comment",
    "Database", "DatabaseError", "DefineHat", "Disambiguator", "Icon", "Insert",
    "Label", "Language", "LanguageError", "LookupIndex", "Outline", "ParseContext",
    "ParseOptions", "SchemaValidationError", "Script", "available_languages",
    "build_database", "build_index", "default_database", "load_translation",
    "parse", "parse_fragment", "parse_line", "parse_with_context", "read_code",
    "scripts_to_json", "walk",
]
