# blocktext/languages.py
"""
Language records and translation-pack loading.

- English is the base language; its specs are the blockids themselves.
- Translation packs are JSON files in blocktext/translations/<code>.json.
- `load_languages(codes)` returns English first, then the requested packs in
  caller order. Later languages win when their index keys collide.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .blocks import Database, default_database
from .errors import LanguageError

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = Path(__file__).resolve().parent / "translations"

BASE_LANGUAGE = "en"
RTL_LANGUAGES = {"ar", "fa", "he"}

# ----------------------------
# English strings
# ----------------------------

ENGLISH_ALIASES: Dict[str, str] = {
    "turn left _ degrees": "turn @arrow-ccw _ degrees",
    "turn ccw _ degrees": "turn @arrow-ccw _ degrees",
    "turn ↺ _ degrees": "turn @arrow-ccw _ degrees",
    "turn right _ degrees": "turn @arrow-cw _ degrees",
    "turn cw _ degrees": "turn @arrow-cw _ degrees",
    "turn ↻ _ degrees": "turn @arrow-cw _ degrees",
    "when gf clicked": "when @green-flag clicked",
    "when flag clicked": "when @green-flag clicked",
    "when green flag clicked": "when @green-flag clicked",
    "when ⚑ clicked": "when @green-flag clicked",
}

ENGLISH_DEFINE = ["define"]
# Hat specs that contain a literal "<"
ENGLISH_IGNORELT = ["when distance"]
ENGLISH_MATH = [
    "abs", "floor", "ceiling", "sqrt", "sin", "cos", "tan", "asin", "acos",
    "atan", "ln", "log", "e ^", "10 ^",
]
ENGLISH_OSIS = ["other scripts in sprite", "other scripts in stage"]

# ----------------------------
# Data classes
# ----------------------------

@dataclass
class Language:
    code: str
    name: str = ""
    blocks: List[Optional[str]] = field(default_factory=list)  # aligned with Database.blockids
    aliases: Dict[str, str] = field(default_factory=dict)      # text -> blockid
    define: List[str] = field(default_factory=list)
    ignorelt: List[str] = field(default_factory=list)
    math: List[str] = field(default_factory=list)
    osis: List[str] = field(default_factory=list)
    rtl: Optional[bool] = None

    @property
    def is_rtl(self) -> bool:
        if self.rtl is not None:
            return bool(self.rtl)
        return self.code in RTL_LANGUAGES

    def specs(self, database: Database) -> Iterator[Tuple[str, str]]:
        """Yield (blockid, localized spec) for every translated position."""
        for blockid, spec in zip(database.blockids, self.blocks):
            if spec:
                yield blockid, spec

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], database: Optional[Database] = None) -> "Language":
        database = database or default_database()
        code = data.get("code")
        if not isinstance(code, str) or not code:
            raise LanguageError(str(code), "Language pack is missing a 'code'")
        raw_blocks = data.get("blocks", [])
        if isinstance(raw_blocks, dict):
            unknown = [b for b in raw_blocks if b not in database]
            if unknown:
                raise LanguageError(code, f"Language pack '{code}' translates unknown blocks: {', '.join(unknown)}")
            blocks = [raw_blocks.get(b) for b in database.blockids]
        elif isinstance(raw_blocks, list):
            if len(raw_blocks) > len(database.blockids):
                raise LanguageError(code, f"Language pack '{code}' has more block specs than the base table")
            blocks = list(raw_blocks)
        else:
            raise LanguageError(code, f"Language pack '{code}' has malformed 'blocks'")
        aliases = dict(data.get("aliases", {}))
        for text, target in aliases.items():
            if target not in database:
                raise LanguageError(code, f"Alias {text!r} in '{code}' names unknown block {target!r}")
        return cls(
            code=code,
            name=str(data.get("name", "")),
            blocks=blocks,
            aliases=aliases,
            define=list(data.get("define", [])),
            ignorelt=list(data.get("ignorelt", [])),
            math=list(data.get("math", [])),
            osis=list(data.get("osis", [])),
            rtl=data.get("rtl"),
        )


def english(database: Optional[Database] = None) -> Language:
    database = database or default_database()
    return Language(
        code=BASE_LANGUAGE,
        name="English",
        blocks=list(database.blockids),
        aliases=dict(ENGLISH_ALIASES),
        define=list(ENGLISH_DEFINE),
        ignorelt=list(ENGLISH_IGNORELT),
        math=list(ENGLISH_MATH),
        osis=list(ENGLISH_OSIS),
        rtl=False,
    )

# ----------------------------
# Loader
# ----------------------------

def _load_pack_file(path: Path) -> Dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LanguageError(path.stem, f"Language pack {path} is not valid JSON: {e}") from e


def _resolve_pack_path(code: str) -> Path:
    # code "de" -> translations/de.json
    return TRANSLATIONS_DIR / f"{code}.json"


def available_languages() -> List[str]:
    codes = {BASE_LANGUAGE}
    if TRANSLATIONS_DIR.is_dir():
        codes.update(p.stem for p in TRANSLATIONS_DIR.glob("*.json"))
    return sorted(codes)


def load_translation(code: str, database: Optional[Database] = None) -> Language:
    path = _resolve_pack_path(code)
    if not path.is_file():
        raise LanguageError(code)
    language = Language.from_dict(_load_pack_file(path), database)
    if language.code != code:
        raise LanguageError(code, f"Language pack {path} declares code '{language.code}'")
    return language


def load_languages(
    codes: Sequence[str],
    database: Optional[Database] = None,
    translations: Optional[Mapping[str, Language]] = None,
) -> List[Language]:
    """
    English plus any requested translations, in load order.
    Caller-supplied `translations` shadow packaged packs with the same code.
    """
    database = database or default_database()
    loaded = [english(database)]
    seen = {BASE_LANGUAGE}
    for code in codes:
        if code in seen:
            continue
        seen.add(code)
        if translations and code in translations:
            loaded.append(translations[code])
        else:
            loaded.append(load_translation(code, database))
        logger.debug("loaded language %s", code)
    return loaded
