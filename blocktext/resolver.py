# blocktext/resolver.py
# Resolve phase: reclassify blocks once the whole document has been seen.
from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .nodes import Block
from .parser import ParseContext

logger = logging.getLogger(__name__)


def _reclassify(names: Iterable[str], table: Dict[str, List[Block]], category: str) -> int:
    count = 0
    for name in names:
        for block in table.get(name, ()):
            block.category = category
            count += 1
    return count


def resolve_custom_blocks(context: ParseContext) -> int:
    """Calls whose text matches a define hat in the same document."""
    return _reclassify(context.define_hats, context.obsolete_blocks, "custom")


def resolve_lists(context: ParseContext) -> int:
    """Variable reporters named as a list elsewhere."""
    return _reclassify(context.lists, context.variable_reporters, "list")


def resolve_custom_args(context: ParseContext) -> int:
    """Variable reporters named after a define hat's parameter."""
    return _reclassify(context.custom_args, context.variable_reporters, "custom-arg")


def resolve(context: ParseContext) -> None:
    custom = resolve_custom_blocks(context)
    lists = resolve_lists(context)
    args = resolve_custom_args(context)
    logger.debug("resolved %d custom block(s), %d list(s), %d custom arg(s)", custom, lists, args)
