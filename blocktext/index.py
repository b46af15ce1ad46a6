# blocktext/index.py
# LookupIndex: minified block text -> (blockid, language), built per parse
# call from the immutable Database and the languages requested for it.
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .blocks import IMAGE_RE, Database, Disambiguator, default_database
from .languages import BASE_LANGUAGE, Language, load_languages
from .names import minify, normalize_spec
from .tokenizer import strip_brackets

logger = logging.getLogger(__name__)

_DROPDOWN_SUFFIX = re.compile(r' v$')
_DROPDOWN_LITERAL = re.compile(r'^\[.* v\]$')
_MATH_SPELLINGS = {"e^": "e ^", "10^": "10 ^"}

ELLIPSIS = "..."
ELLIPSIS_DISPLAY = ". . ."


@dataclass(frozen=True)
class IndexEntry:
    blockid: str
    language: str


@dataclass
class BlockInfo:
    """A matched block, cloned from its descriptor and open to overrides."""
    blockid: str
    category: str
    shape: Optional[str]
    flag: Optional[str]
    language: str
    spec: str
    image_token: Optional[str] = None


@dataclass
class LookupIndex:
    database: Database
    languages: List[str] = field(default_factory=list)
    entries: Dict[str, IndexEntry] = field(default_factory=dict)
    specs: Dict[str, Dict[str, str]] = field(default_factory=dict)  # language -> blockid -> spec
    define: List[str] = field(default_factory=list)
    ignorelt: List[str] = field(default_factory=list)
    math: List[str] = field(default_factory=list)
    osis: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    # ------------------------------ Building -------------------------------

    def _add(self, key: str, blockid: str, language: str) -> None:
        if not key:
            return
        prior = self.entries.get(key)
        if prior is not None and prior.blockid != blockid:
            # the two turn blocks share one image key per language; aliases tell them apart
            log = logger.debug if "@" in key else logger.warning
            log("'%s' in %s shadows %r from %s", key, language, prior.blockid, prior.language)
        self.entries[key] = IndexEntry(blockid, language)

    def merge(self, language: Language) -> None:
        specs = self.specs.setdefault(language.code, {})
        for blockid, spec in language.specs(self.database):
            # images are drawn, never typed, so they stay out of the key
            spec = IMAGE_RE.sub("@", spec, count=1)
            specs[blockid] = spec
            self._add(minify(normalize_spec(spec)), blockid, language.code)
        for text, blockid in language.aliases.items():
            self._add(minify(normalize_spec(text)), blockid, language.code)
        self.define.extend(minify(t) for t in language.define)
        self.ignorelt.extend(minify(t) for t in language.ignorelt)
        self.math.extend(minify(t) for t in language.math)
        self.osis.extend(minify(t) for t in language.osis)
        self.languages.append(language.code)

    # ------------------------------ Queries --------------------------------

    def lookup(self, text: str) -> Optional[IndexEntry]:
        return self.entries.get(minify(text))

    def spec_for(self, blockid: str, language: str = BASE_LANGUAGE) -> Optional[str]:
        """Spec of `blockid` in a loaded language, image markers restored."""
        spec = self.specs.get(language, {}).get(blockid)
        descriptor = self.database.get(blockid)
        if spec is None or descriptor is None:
            return None
        if descriptor.image_token:
            spec = spec.replace("@", "@" + descriptor.image_token, 1)
        return spec

    def find_block(self, spec: str, args: Sequence[str] = ()) -> Optional[BlockInfo]:
        entry = self.lookup(spec)
        if entry is None:
            if spec.replace(" ", "") == ELLIPSIS and spec != ELLIPSIS:
                return self.find_block(ELLIPSIS, args)
            return None
        descriptor = self.database.get(entry.blockid)
        if descriptor is None:
            return None
        if descriptor.image_token:
            text = (
                self.specs.get(entry.language, {}).get(entry.blockid)
                or self.specs[BASE_LANGUAGE][entry.blockid]
            )
        elif spec in (ELLIPSIS, "…"):
            text = ELLIPSIS_DISPLAY
        else:
            text = spec
        info = BlockInfo(
            blockid=descriptor.blockid,
            category=descriptor.category,
            shape=descriptor.shape,
            flag=descriptor.flag,
            language=entry.language,
            spec=text,
            image_token=descriptor.image_token,
        )
        if args:
            self._disambiguate(descriptor.disambiguator, info, args[0])
        return info

    def _disambiguate(self, kind: Disambiguator, info: BlockInfo, first: str) -> None:
        if kind is Disambiguator.OF_FUNCTION:
            func = minify(_DROPDOWN_SUFFIX.sub("", strip_brackets(first)))
            func = _MATH_SPELLINGS.get(func, func)
            info.category = "operators" if func in self.math else "sensing"
        elif kind is Disambiguator.LENGTH_OF:
            info.category = "list" if _DROPDOWN_LITERAL.match(first) else "operators"
        elif kind is Disambiguator.STOP_BLOCK:
            what = minify(_DROPDOWN_SUFFIX.sub("", strip_brackets(first)))
            info.shape = None if what in self.osis else "cap"


def build_index(
    languages: Sequence[str] = (),
    database: Optional[Database] = None,
    translations=None,
) -> LookupIndex:
    """Fresh index for one parse call: English first, then `languages` in order."""
    database = database or default_database()
    index = LookupIndex(database=database)
    for language in load_languages(languages, database, translations):
        index.merge(language)
    logger.debug("lookup index: %d keys over %s", len(index), ",".join(index.languages))
    return index
