# blocktext/blocks.py
# Base (English) block table and the immutable Database built from it.
#
# Each row is either a bare spec, or a tuple (spec, flag, ...) where flags
# are shape tokens ("hat", "cap") or one structural flag ("cstart", "celse",
# "cend", "ring"). The spec text doubles as the language-independent blockid.
from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import DatabaseError

logger = logging.getLogger(__name__)

# ------------------------------ Vocabularies ---------------------------------

CATEGORIES = (
    "motion", "looks", "sound", "pen", "variables", "list", "events",
    "control", "sensing", "operators", "custom", "custom-arg", "extension",
    "grey", "obsolete",
)
STRUCTURAL_FLAGS = ("cstart", "celse", "cend", "ring")
BLOCK_SHAPES = ("hat", "cap", "stack", "embedded", "boolean", "reporter")
TABLE_SHAPES = ("hat", "cap")

# "@green-flag" etc.; the hyphenated name after "@" is the icon token.
IMAGE_RE = re.compile(r'@([-A-Za-z]+)')


class Disambiguator(enum.Enum):
    NONE = "none"
    OF_FUNCTION = "of-function"    # "_ of _": math function vs sensing attribute
    LENGTH_OF = "length-of"        # "length of _": list vs string
    STOP_BLOCK = "stop-block"      # "stop _": cap unless it stops other scripts


DISAMBIGUATORS: Dict[str, Disambiguator] = {
    "_ of _": Disambiguator.OF_FUNCTION,
    "length of _": Disambiguator.LENGTH_OF,
    "stop _": Disambiguator.STOP_BLOCK,
}

# blockid -> index of the argument that names a list
LIST_ARGUMENT_INDEX: Dict[str, int] = {
    "add _ to _": 1,
    "delete _ of _": 1,
    "insert _ at _ of _": 2,
    "replace item _ of _ with _": 1,
    "item _ of _": 1,
    "length of _": 0,
    "_ contains _": 0,
    "show list _": 0,
    "hide list _": 0,
}

# ------------------------------ Base table -----------------------------------

ENGLISH_BLOCKS: Dict[str, List] = {
    "motion": [
        "move _ steps",
        "turn @arrow-ccw _ degrees",
        "turn @arrow-cw _ degrees",
        "point in direction _",
        "point towards _",
        "go to x:_ y:_",
        "go to _",
        "glide _ secs to x:_ y:_",
        "change x by _",
        "set x to _",
        "change y by _",
        "set y to _",
        "if on edge, bounce",
        "set rotation style _",
        "x position",
        "y position",
        "direction",
    ],
    "looks": [
        "say _ for _ secs",
        "say _",
        "think _ for _ secs",
        "think _",
        "show",
        "hide",
        "switch costume to _",
        "next costume",
        "switch backdrop to _",
        "change _ effect by _",
        "set _ effect to _",
        "clear graphic effects",
        "change size by _",
        "set size to _%",
        "go to front",
        "go back _ layers",
        "costume #",
        "backdrop name",
        "size",
        # stage
        "switch backdrop to _ and wait",
        "next backdrop",
        "backdrop #",
        # pre-2.0 names
        "switch to costume _",
        "switch to background _",
        "next background",
        "background #",
    ],
    "sound": [
        "play sound _",
        "play sound _ until done",
        "stop all sounds",
        "play drum _ for _ beats",
        "rest for _ beats",
        "play note _ for _ beats",
        "set instrument to _",
        "change volume by _",
        "set volume to _%",
        "volume",
        "change tempo by _",
        "set tempo to _ bpm",
        "tempo",
    ],
    "pen": [
        "clear",
        "stamp",
        "pen down",
        "pen up",
        "set pen color to _",
        "change pen color by _",
        "set pen color to _",
        "change pen shade by _",
        "set pen shade to _",
        "change pen size by _",
        "set pen size to _",
    ],
    "variables": [
        "set _ to _",
        "change _ by _",
        "show variable _",
        "hide variable _",
    ],
    "list": [
        "add _ to _",
        "delete _ of _",
        "insert _ at _ of _",
        "replace item _ of _ with _",
        "item _ of _",
        "length of _",
        "_ contains _",
        "show list _",
        "hide list _",
    ],
    "events": [
        ("when @green-flag clicked", "hat"),
        ("when _ key pressed", "hat"),
        ("when this sprite clicked", "hat"),
        ("when Stage clicked", "hat"),
        ("when backdrop switches to _", "hat"),
        ("when _ > _", "hat"),
        ("when I receive _", "hat"),
        "broadcast _",
        "broadcast _ and wait",
    ],
    "control": [
        "wait _ secs",
        ("repeat _", "cstart"),
        ("forever", "cstart", "cap"),
        ("if _ then", "cstart"),
        ("else", "celse"),
        ("end", "cend"),
        "wait until _",
        ("repeat until _", "cstart"),
        ("stop _", "cap"),
        ("when I start as a clone", "hat"),
        "create clone of _",
        ("delete this clone", "cap"),
        # pre-2.0
        ("if _", "cstart"),
        ("forever if _", "cstart", "cap"),
        ("stop script", "cap"),
        ("stop all", "cap"),
    ],
    "sensing": [
        "touching _?",
        "touching color _?",
        "color _ is touching _?",
        "distance to _",
        "ask _ and wait",
        "answer",
        "key _ pressed?",
        "mouse down?",
        "mouse x",
        "mouse y",
        "loudness",
        "video _ on _",
        "turn video _",
        "set video transparency to _%",
        "timer",
        "reset timer",
        "_ of _",
        "current _",
        "days since 2000",
        "username",
        # pre-2.0
        "loud?",
    ],
    "operators": [
        "_ + _",
        "_ - _",
        "_ * _",
        "_ / _",
        "pick random _ to _",
        "_ < _",
        "_ = _",
        "_ > _",
        "_ and _",
        "_ or _",
        "not _",
        "join _ _",
        "letter _ of _",
        "length of _",
        "_ mod _",
        "round _",
        "_ of _",
    ],
    "extension": [
        ("when _", "hat"),
        ("when _ _ _", "hat"),
        "sensor _?",
        "_ sensor value",
        "turn _ on for _ secs",
        "turn _ on",
        "turn _ off",
        "set _ power _",
        "set _ direction _",
        ("when distance _ _", "hat"),
        ("when tilt _ _", "hat"),
        "distance",
        "tilt",
        # pre-2.0
        "turn motor on for _ secs",
        "turn motor on",
        "turn motor off",
        "set motor power _",
        "set motor direction _",
        ("when distance < _", "hat"),
        ("when tilt = _", "hat"),
        "motor on",
        "motor off",
        "motor on for _ secs",
        "motor power _",
        "motor direction _",
    ],
    "grey": [
        "…",
        "...",
    ],
}

# ------------------------------ Descriptors ----------------------------------


@dataclass(frozen=True)
class BlockDescriptor:
    blockid: str
    category: str
    shape: Optional[str] = None
    flag: Optional[str] = None
    image_token: Optional[str] = None
    disambiguator: Disambiguator = Disambiguator.NONE


@dataclass(frozen=True)
class Database:
    """Base block table: ordered blockids plus one descriptor per blockid.

    `blockids` keeps table order including repeated rows, since translations
    are aligned to it positionally. Where a blockid repeats, the later row's
    descriptor wins.
    """
    blockids: Tuple[str, ...]
    descriptors: Dict[str, BlockDescriptor] = field(default_factory=dict)

    def get(self, blockid: str) -> Optional[BlockDescriptor]:
        return self.descriptors.get(blockid)

    def __contains__(self, blockid: object) -> bool:
        return blockid in self.descriptors

    def __len__(self) -> int:
        return len(self.descriptors)

    def unique_blockids(self) -> List[str]:
        seen: Dict[str, None] = {}
        for b in self.blockids:
            seen.setdefault(b, None)
        return list(seen)


def _split_row(row) -> Tuple[str, Tuple[str, ...]]:
    if isinstance(row, str):
        return row, ()
    spec, *flags = row
    return spec, tuple(flags)


def describe(spec: str, category: str, flags: Iterable[str] = ()) -> BlockDescriptor:
    shape: Optional[str] = None
    flag: Optional[str] = None
    for token in flags:
        if token in TABLE_SHAPES:
            shape = token
        elif token in STRUCTURAL_FLAGS:
            if flag is not None:
                raise DatabaseError(spec, f"two structural flags ({flag}, {token})")
            flag = token
        else:
            raise DatabaseError(spec, f"unknown flag {token!r}")
    m = IMAGE_RE.search(spec)
    return BlockDescriptor(
        blockid=spec,
        category=category,
        shape=shape,
        flag=flag,
        image_token=m.group(1) if m else None,
        disambiguator=DISAMBIGUATORS.get(spec, Disambiguator.NONE),
    )


def build_database(table: Optional[Dict[str, List]] = None) -> Database:
    table = ENGLISH_BLOCKS if table is None else table
    blockids: List[str] = []
    descriptors: Dict[str, BlockDescriptor] = {}
    for category, rows in table.items():
        if category not in CATEGORIES:
            raise DatabaseError(category, "unknown category")
        for row in rows:
            spec, flags = _split_row(row)
            blockids.append(spec)
            descriptors[spec] = describe(spec, category, flags)
    logger.debug("block database: %d rows, %d blockids", len(blockids), len(descriptors))
    return Database(blockids=tuple(blockids), descriptors=descriptors)


_DEFAULT: Optional[Database] = None


def default_database() -> Database:
    """The English database, built on first use and shared afterwards (it is immutable)."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = build_database()
    return _DEFAULT
