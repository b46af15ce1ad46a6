# blocktext/assembler.py
# Groups parsed lines into scripts and nests C blocks.
#
# Each open C block is a frame owning its CWrap and the CMouth being filled.
# Closing a frame moves the finished wrap into the enclosing contents, so
# nothing outside the top frame is appended to while it is open.
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .index import LookupIndex
from .nodes import Block, CMouth, CWrap, Script
from .parser import ParseContext, parse_line

logger = logging.getLogger(__name__)

# Dispatch kinds that stand alone as one-node scripts
_FREE_FLOATING = {"reporter", "boolean", "embedded", "ring"}


def _end_marker() -> Block:
    return Block(blockid="end", category="control", shape="stack", flag="cend", pieces=[])


def _ends_in_cap(contents) -> bool:
    return bool(contents) and contents[-1].shape == "cap"


@dataclass
class _Frame:
    wrap: CWrap
    mouth: CMouth


@dataclass
class ScriptAssembler:
    index: LookupIndex
    context: ParseContext = field(default_factory=ParseContext)
    scripts: List[Script] = field(default_factory=list)
    top: list = field(default_factory=list)
    frames: List[_Frame] = field(default_factory=list)

    # ------------------------------ State ----------------------------------

    @property
    def depth(self) -> int:
        # the top-level list counts as depth 1
        return len(self.frames) + 1

    def _contents(self) -> list:
        return self.frames[-1].mouth.contents if self.frames else self.top

    def _push(self, node) -> None:
        self._contents().append(node)

    def seal(self) -> None:
        """Close any open C blocks and move pending top-level nodes into a script."""
        if not (self.top or self.frames):
            return
        if self.frames:
            logger.debug("force-closing %d open C block(s)", len(self.frames))
        while self.frames:
            self._close(_end_marker())
        self.scripts.append(Script(self.top))
        self.top = []

    # ------------------------------ C blocks -------------------------------

    def _open(self, header: Block) -> None:
        wrap = CWrap(shape=header.shape, contents=[header])
        header.shape = "stack"
        self.frames.append(_Frame(wrap=wrap, mouth=CMouth(category=header.category)))

    def _else(self, node: Block) -> None:
        frame = self.frames[-1]
        frame.mouth.capend = _ends_in_cap(frame.mouth.contents)
        frame.wrap.contents.append(frame.mouth)
        node.category = frame.wrap.category
        frame.wrap.contents.append(node)
        frame.mouth = CMouth(category=frame.wrap.category)

    def _close(self, node: Block) -> None:
        frame = self.frames.pop()
        frame.mouth.capend = _ends_in_cap(frame.mouth.contents)
        frame.wrap.contents.append(frame.mouth)
        node.category = frame.wrap.category
        node.pieces = []
        frame.wrap.contents.append(node)
        self._push(frame.wrap)

    # ------------------------------ Lines ----------------------------------

    def feed(self, raw_line: str) -> None:
        if not raw_line.strip():
            # blank lines inside a C block do not split the script
            if self.depth <= 1:
                self.seal()
            return

        node = parse_line(raw_line, self.index, self.context)

        if not node.pieces and node.comment is not None and self.depth <= 1:
            self.seal()
            self._push(node)
            self.seal()
            return

        kind = node.flag or node.shape
        if kind in ("hat", "define-hat"):
            self.seal()
            self._push(node)
        elif kind == "cap":
            self._push(node)
            if self.depth <= 1:
                self.seal()
        elif kind == "cstart":
            self._open(node)
        elif kind == "celse":
            if self.depth <= 1:
                self._push(node)
            else:
                self._else(node)
        elif kind == "cend":
            if self.depth <= 1:
                self._push(node)
            else:
                self._close(node)
        elif kind in _FREE_FLOATING:
            self.seal()
            self._push(node)
            self.seal()
        else:
            self._push(node)

    def finish(self) -> List[Script]:
        self.seal()
        return self.scripts


def assemble(lines: Iterable[str], index: LookupIndex) -> Tuple[List[Script], ParseContext]:
    """Assemble phase: provisional scripts plus the cross-reference context."""
    assembler = ScriptAssembler(index=index)
    for line in lines:
        assembler.feed(line)
    return assembler.finish(), assembler.context
