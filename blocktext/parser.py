# blocktext/parser.py
# Fragment and line parsing: one line of notation -> one syntax node.
#
# parse_fragment handles a (possibly bracketed) fragment recursively;
# parse_line adds comment extraction and free-floating reporter handling.
# Both are total: unknown text degrades to an obsolete/variables block.
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .blocks import BLOCK_SHAPES, CATEGORIES, LIST_ARGUMENT_INDEX, STRUCTURAL_FLAGS
from .index import BlockInfo, LookupIndex
from .names import minify, normalize_spec
from .nodes import (
    Block, Comment, DefineHat, Icon, Insert, Label, Outline, piece_text,
)
from .tokenizer import (
    filter_pieces, is_block_piece, is_open_bracket, split_into_pieces, strip_brackets,
)

logger = logging.getLogger(__name__)

# ------------------------------ Patterns -------------------------------------

NUMBER_RE = re.compile(r'^([0-9e.-]+( v)?)?$', re.IGNORECASE)
COLOR_RE = re.compile(r'^#[a-f0-9]{3}([a-f0-9]{3})?$', re.IGNORECASE)

# "say [hi] :: looks ring"
OVERRIDES_RE = re.compile(r'^(.*)::([A-Za-z\- ]*)$')

# Deprecated "// category=pen" comment annotation
CATEGORY_COMMENT_RE = re.compile(r'(^| )category=([a-z]+)($| )')

# Spec text splits around placeholders, icons and arrow glyphs; "+" is also
# split out except in the addition block, where it is the operator itself.
_SPEC_PARTS = re.compile(r'([_@▶◀▸◂+])')
_SPEC_PARTS_PLUS = re.compile(r'([_@▶◀▸◂])')

_BLOCK_SHAPE_BY_BRACKET = {"(": "embedded", "<": "boolean"}
_BLOCK_LIKE = ("reporter", "boolean", "stack")

# ------------------------------ Context --------------------------------------


@dataclass
class ParseContext:
    """Cross-reference facts collected while assembling one document."""
    obsolete_blocks: Dict[str, List[Block]] = field(default_factory=dict)
    define_hats: List[str] = field(default_factory=list)
    custom_args: List[str] = field(default_factory=list)
    variable_reporters: Dict[str, List[Block]] = field(default_factory=dict)
    lists: List[str] = field(default_factory=list)

    def add_variable_reporter(self, name: str, block: Block) -> None:
        self.variable_reporters.setdefault(name, []).append(block)

    def add_obsolete(self, text: str, block: Block) -> None:
        self.obsolete_blocks.setdefault(text, []).append(block)

# ------------------------------ Shapes ---------------------------------------


def insert_shape(bracket: str, code: str) -> str:
    if bracket == "(":
        if NUMBER_RE.match(code):
            return "number-dropdown" if code.endswith(" v") else "number"
        if code.endswith(" v"):
            # rounded dropdown
            return "number-dropdown"
        return "reporter"
    if bracket == "[":
        if COLOR_RE.match(code):
            return "color"
        return "dropdown" if code.endswith(" v") else "string"
    if bracket == "<":
        return "boolean"
    return "stack"


def block_shape(bracket: str) -> str:
    return _BLOCK_SHAPE_BY_BRACKET.get(bracket, "stack")

# ------------------------------ Helpers --------------------------------------


def filter_nodes(pieces) -> Tuple[str, list]:
    """Node-piece counterpart of tokenizer.filter_pieces."""
    args = [p for p in pieces if not isinstance(p, (Label, Icon))]
    return normalize_spec(piece_text(pieces)), args


def _split_overrides(spec: str) -> Tuple[str, List[str]]:
    m = OVERRIDES_RE.match(spec)
    if not m:
        return spec, []
    return m.group(1).rstrip(), m.group(2).split()


def _define_hat(code: str, pieces: List[str], keyword: str) -> DefineHat:
    rest = [pieces[0][len(keyword):].lstrip()] + pieces[1:] if pieces else []
    outline: List[Union[Label, Block]] = []
    for piece in rest:
        if is_block_piece(piece):
            outline.append(Block(
                blockid=None,
                category="custom-arg",
                shape="boolean" if piece[0] == "<" else "reporter",
                pieces=[Label(strip_brackets(piece).strip())],
            ))
        elif piece:
            outline.append(Label(piece))
    return DefineHat(keyword=code[:len(keyword)], outline=Outline(outline))


def _unknown(spec: str, shape: str) -> BlockInfo:
    return BlockInfo(
        blockid=spec,
        category="variables" if shape == "reporter" else "obsolete",
        shape=shape,
        flag=None,
        language="en",
        spec=spec,
    )


def _build_pieces(info: BlockInfo, args: List[str], index: LookupIndex, context: ParseContext) -> list:
    splitter = _SPEC_PARTS_PLUS if info.blockid == "_ + _" else _SPEC_PARTS
    remaining = list(args)
    pieces: list = []
    for part in splitter.split(info.spec):
        if not part:
            continue
        if part == "_" and remaining:
            pieces.append(parse_fragment(remaining.pop(0), index, context))
        elif part == "@" and info.image_token:
            pieces.append(Icon(info.image_token))
        else:
            # a "_" with no argument left is a literal underscore
            pieces.append(Label(part))
    return pieces


def _apply_overrides(block: Block, overrides: Sequence[str]) -> None:
    for token in overrides:
        if token in CATEGORIES:
            block.category = token
        elif token in STRUCTURAL_FLAGS:
            block.flag = token
        elif token in BLOCK_SHAPES:
            block.shape = token
    if block.flag == "ring":
        for arg in block.args:
            arg.is_ringed = True


def _record_list_argument(block: Block, context: ParseContext) -> None:
    position = LIST_ARGUMENT_INDEX.get(block.blockid or "")
    if position is None:
        return
    args = block.args
    if position < len(args):
        arg = args[position]
        if isinstance(arg, Insert) and arg.shape == "dropdown":
            context.lists.append(arg.value)

# ------------------------------ Fragments ------------------------------------


def parse_fragment(
    code: str,
    index: LookupIndex,
    context: ParseContext,
    strip_outer_bracket: bool = True,
) -> Union[Block, Insert, DefineHat]:
    """Parse one fragment such as "(x position)" or "say [hi] for (2) secs"."""
    bracket = ""
    if strip_outer_bracket:
        bracket = code[:1]
        code = strip_brackets(code)

    pieces = split_into_pieces(code, index.ignorelt)

    for keyword in index.define:
        if code.lower() == keyword or (pieces and pieces[0].lower().startswith(keyword + " ")):
            return _define_hat(code, pieces, keyword)

    if len(pieces) > 1 and bracket != "[":
        shape = block_shape(bracket)
    else:
        shape = insert_shape(bracket, code)
        if shape.endswith("dropdown"):
            code = code[:-2]
        if shape not in _BLOCK_LIKE:
            return Insert(shape=shape, value=code)

    if pieces:
        pieces[0] = pieces[0].lstrip()
        pieces[-1] = pieces[-1].rstrip()

    spec, args = filter_pieces(pieces)
    spec, overrides = _split_overrides(spec)

    info = index.find_block(spec, args) if spec else None
    unknown = info is None
    if info is not None:
        if not info.shape:
            info.shape = shape
        if info.flag == "cend":
            info.spec = ""
    else:
        info = _unknown(spec, shape)
        logger.debug("unknown %s block %r", shape, spec)

    block = Block(
        blockid=info.blockid,
        category=info.category,
        shape=info.shape or shape,
        pieces=_build_pieces(info, args, index, context),
        language=info.language,
        flag=info.flag,
        image_token=info.image_token,
    )

    if unknown and block.shape in ("reporter", "boolean"):
        context.add_variable_reporter(spec, block)

    if overrides:
        _apply_overrides(block, overrides)
    else:
        _record_list_argument(block, context)
    return block

# ------------------------------ Lines ----------------------------------------


def _split_comment(line: str) -> Tuple[str, Optional[str]]:
    i = line.find("//")
    # "http://..." inside a dropdown is not a comment
    if i != -1 and (i == 0 or line[i - 1] != ":"):
        return line[:i].strip(), line[i + 2:]
    return line, None


def parse_line(line: str, index: LookupIndex, context: ParseContext):
    """Parse one line; always returns exactly one node."""
    line, comment = _split_comment(line.strip())
    if comment is not None and not line:
        return Comment(comment.strip())

    if is_open_bracket(line[:1]) and len(split_into_pieces(line, index.ignorelt)) == 1:
        node = parse_fragment(line, index, context)
        if isinstance(node, Insert):
            # free-floating literal still draws as a line of its own
            node = Block(blockid="_", category="obsolete", shape="stack", pieces=[node])
    else:
        node = parse_fragment(line, index, context, strip_outer_bracket=False)

    if comment and not isinstance(node, DefineHat):
        m = CATEGORY_COMMENT_RE.search(comment)
        if m and m.group(2) in CATEGORIES:
            node.category = m.group(2)
            comment = comment.replace(m.group(0), " ", 1).strip()

    if isinstance(node, DefineHat):
        spec, args = filter_nodes(node.outline.pieces)
        context.define_hats.append(minify(spec))
        for arg in args:
            context.custom_args.append(arg.pieces[0].value)
    elif node.shape == "stack" and node.category == "obsolete":
        spec, args = filter_nodes(node.pieces)
        context.add_obsolete(minify(spec), node)
        if not args and spec.strip():
            # a bare word on its own line reads as a variable: "mylist"
            context.add_variable_reporter(spec.strip(), node)

    if comment is not None and comment.strip():
        node.comment = comment.strip()
    return node
