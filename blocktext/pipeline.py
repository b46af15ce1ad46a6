# blocktext/pipeline.py
# Text -> scripts: read_code -> build_index -> assemble -> resolve.
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from .assembler import assemble
from .blocks import Database
from .index import LookupIndex, build_index
from .languages import Language
from .nodes import Script
from .parser import ParseContext
from .resolver import resolve

_HOST_BREAKS = re.compile(r'<br\s*/?>|\r\n|\r', re.IGNORECASE)
_LINE_BREAKS = re.compile(r'\n')


@dataclass
class ParseOptions:
    languages: List[str] = field(default_factory=lambda: ["en"])  # merged in this order
    inline: bool = False
    line_separator: Optional[str] = None  # None: \n, \r\n, \r and <br> all break lines


def read_code(text: str, inline: bool = False) -> str:
    """Normalize host line breaks; inline code is a single line."""
    text = _HOST_BREAKS.sub("\n", text)
    if inline:
        text = _LINE_BREAKS.sub("", text)
    return text


def split_lines(code: str, options: ParseOptions) -> List[str]:
    if options.line_separator:
        if options.inline:
            code = code.replace(options.line_separator, "")
        return code.strip().split(options.line_separator)
    return read_code(code, options.inline).strip().split("\n")


def parse_with_context(
    code: str,
    options: Optional[ParseOptions] = None,
    *,
    index: Optional[LookupIndex] = None,
    database: Optional[Database] = None,
    translations: Optional[Mapping[str, Language]] = None,
) -> Tuple[List[Script], ParseContext]:
    options = options or ParseOptions()
    if index is None:
        index = build_index(options.languages, database, translations)
    scripts, context = assemble(split_lines(code, options), index)
    resolve(context)
    return scripts, context


def parse(
    code: str,
    options: Optional[ParseOptions] = None,
    *,
    languages: Optional[Sequence[str]] = None,
    index: Optional[LookupIndex] = None,
    database: Optional[Database] = None,
    translations: Optional[Mapping[str, Language]] = None,
) -> List[Script]:
    """
    Parse block notation into scripts.

    >>> [len(s) for s in parse("when flag clicked\\nmove (10) steps")]
    [2]

    `languages` is shorthand for ParseOptions(languages=...). A fresh lookup
    index is built for every call unless one is passed in.
    """
    if languages is not None:
        options = ParseOptions(
            languages=list(languages),
            inline=options.inline if options else False,
            line_separator=options.line_separator if options else None,
        )
    scripts, _ = parse_with_context(
        code, options, index=index, database=database, translations=translations
    )
    return scripts
