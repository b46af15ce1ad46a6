# blocktext/nodes.py
# Syntax tree produced by the parser: one dataclass per node kind, each with
# a `to_dict()` giving plain JSON data tagged by "type".
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Union


@dataclass
class Label:
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "label", "value": self.value}


@dataclass
class Icon:
    name: str  # image token, e.g. "green-flag"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "icon", "name": self.name}


@dataclass
class Insert:
    """Literal argument slot: string, number, dropdown, number-dropdown or color."""
    shape: str
    value: str = ""
    is_ringed: bool = False

    @property
    def pieces(self) -> List[Label]:
        return [Label(self.value)] if self.value else []

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": "insert", "shape": self.shape, "value": self.value}
        if self.is_ringed:
            out["ringed"] = True
        return out


@dataclass
class Block:
    blockid: Optional[str]          # None for custom-arg reporters inside a define hat
    category: str
    shape: str
    pieces: List["Piece"] = field(default_factory=list)
    language: str = "en"
    flag: Optional[str] = None
    comment: Optional[str] = None
    image_token: Optional[str] = None
    is_ringed: bool = False

    @property
    def args(self) -> List["Argument"]:
        return [p for p in self.pieces if isinstance(p, (Block, Insert, DefineHat))]

    @property
    def text(self) -> str:
        """Label text with "_" for each argument and "@" for an icon."""
        return piece_text(self.pieces)

    @property
    def is_empty_slot(self) -> bool:
        # "<>" and "{}" parse to blocks with no text
        return self.blockid == "" and not self.pieces

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": "block",
            "blockid": self.blockid,
            "category": self.category,
            "shape": self.shape,
            "flag": self.flag,
            "language": self.language,
            "pieces": [p.to_dict() for p in self.pieces],
        }
        if self.image_token:
            out["image"] = self.image_token
        if self.is_ringed:
            out["ringed"] = True
        if self.comment is not None:
            out["comment"] = self.comment
        return out


@dataclass
class Outline:
    """Declared text of a custom block: labels and custom-arg blocks."""
    pieces: List[Union[Label, Block]] = field(default_factory=list)

    @property
    def args(self) -> List[Block]:
        return [p for p in self.pieces if isinstance(p, Block)]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "outline", "pieces": [p.to_dict() for p in self.pieces]}


@dataclass
class DefineHat:
    keyword: str
    outline: Outline
    comment: Optional[str] = None
    is_ringed: bool = False

    blockid: ClassVar[Optional[str]] = None
    category: ClassVar[str] = "custom"
    shape: ClassVar[str] = "define-hat"
    flag: ClassVar[Optional[str]] = None

    @property
    def pieces(self) -> List[Union[Label, Outline]]:
        return [Label(self.keyword), self.outline]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": "define-hat",
            "category": self.category,
            "shape": self.shape,
            "keyword": self.keyword,
            "outline": self.outline.to_dict(),
        }
        if self.comment is not None:
            out["comment"] = self.comment
        return out


@dataclass
class CMouth:
    """Body of one branch of a C block. `capend` marks a body ending in a cap."""
    category: str
    contents: List["Node"] = field(default_factory=list)
    capend: bool = False

    shape: ClassVar[Optional[str]] = None
    flag: ClassVar[Optional[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "cmouth",
            "category": self.category,
            "capend": self.capend,
            "contents": [n.to_dict() for n in self.contents],
        }


@dataclass
class CWrap:
    """Whole C block: header, mouth, then (else header, mouth)* and an end marker."""
    shape: str
    contents: List[Union[Block, CMouth]] = field(default_factory=list)

    flag: ClassVar[Optional[str]] = None
    comment: ClassVar[Optional[str]] = None

    @property
    def header(self) -> Block:
        return self.contents[0]  # type: ignore[return-value]

    @property
    def category(self) -> str:
        return self.header.category

    @property
    def mouths(self) -> List[CMouth]:
        return [c for c in self.contents if isinstance(c, CMouth)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "cwrap",
            "shape": self.shape,
            "category": self.category,
            "contents": [c.to_dict() for c in self.contents],
        }


@dataclass
class Comment:
    """A line holding nothing but a comment."""
    text: str

    shape: ClassVar[Optional[str]] = None
    flag: ClassVar[Optional[str]] = None
    pieces: ClassVar[List[Any]] = []

    @property
    def comment(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "comment", "comment": self.text}


Argument = Union[Block, Insert, DefineHat]
Piece = Union[Label, Icon, Block, Insert, DefineHat]
Node = Union[Block, Insert, DefineHat, CWrap, CMouth, Comment]


@dataclass
class Script:
    blocks: List[Node] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    @property
    def is_final(self) -> bool:
        """True when nothing can be attached below the last block."""
        return bool(self.blocks) and self.blocks[-1].shape == "cap"

    def __iter__(self) -> Iterator[Node]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "script", "blocks": [b.to_dict() for b in self.blocks]}


def piece_text(pieces) -> str:
    text = ""
    for p in pieces:
        if isinstance(p, Label):
            text += p.value
        elif isinstance(p, Icon):
            text += "@"
        else:
            text += "_"
    return text


def walk(node) -> Iterator[Any]:
    """Depth-first over a node and everything nested in it."""
    yield node
    if isinstance(node, Script):
        children = node.blocks
    elif isinstance(node, (CWrap, CMouth)):
        children = node.contents
    elif isinstance(node, DefineHat):
        children = node.outline.pieces
    elif isinstance(node, Block):
        children = node.pieces
    else:
        children = []
    for child in children:
        if isinstance(child, (Label, Icon)):
            continue
        yield from walk(child)


def scripts_to_json(scripts: List[Script]) -> List[Dict[str, Any]]:
    return [s.to_dict() for s in scripts]
