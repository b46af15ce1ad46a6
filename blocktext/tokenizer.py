# blocktext/tokenizer.py
# Splits one line of block notation into literal text and bracketed pieces.
#   "say [hi] for (2) secs" -> ["say ", "[hi]", " for ", "(2)", " secs"]
# A "<" or ">" between two delimited operands is a comparison, not a bracket.

from __future__ import annotations
from typing import List, Sequence, Tuple

from .names import minify, normalize_spec

# ------------------------------ Config ---------------------------------------

BRACKETS = "([<{)]>}"
OPEN_BRACKETS = BRACKETS[:4]
CLOSE_BRACKETS = BRACKETS[4:]

# --------------------------- Bracket helpers ---------------------------------

def is_open_bracket(ch: str) -> bool:
    return bool(ch) and ch in OPEN_BRACKETS


def is_close_bracket(ch: str) -> bool:
    return bool(ch) and ch in CLOSE_BRACKETS


def matching_bracket(ch: str) -> str:
    return BRACKETS[BRACKETS.index(ch) + 4]


def strip_brackets(code: str) -> str:
    """Drop one outer bracket pair; an unterminated open bracket is dropped alone."""
    if code and is_open_bracket(code[0]):
        if code[-1] == matching_bracket(code[0]):
            code = code[:-1]
        code = code[1:]
    return code


def is_block_piece(piece: str) -> bool:
    return bool(piece) and is_open_bracket(piece[0])

# ------------------------------ lt / gt --------------------------------------

def is_lt_gt(code: str, index: int, ignorelt: Sequence[str] = ()) -> bool:
    """True when code[index] is a comparison operator rather than a bracket."""
    if index <= 0 or index >= len(code) or code[index] not in "<>":
        return False

    # hat blocks whose own text has a "<"
    head = minify(code[:index])
    for phrase in ignorelt:
        if head.startswith(phrase):
            return True

    for ch in code[index + 1:]:
        if is_open_bracket(ch):
            break
        if ch != " ":
            return False

    for ch in reversed(code[:index]):
        if is_close_bracket(ch):
            break
        if ch != " ":
            return False

    # ") < [" and friends
    return True

# ------------------------------ Splitting ------------------------------------

def split_into_pieces(code: str, ignorelt: Sequence[str] = ()) -> List[str]:
    pieces: List[str] = []
    piece = ""
    closer = ""
    nesting: List[str] = []

    for i, ch in enumerate(code):
        if nesting:
            piece += ch
            if is_open_bracket(ch) and not is_lt_gt(code, i, ignorelt) and nesting[-1] != "[":
                nesting.append(ch)
                closer = matching_bracket(ch)
            elif ch == closer and not is_lt_gt(code, i, ignorelt):
                nesting.pop()
                if not nesting:
                    pieces.append(piece)
                    piece = ""
                else:
                    closer = matching_bracket(nesting[-1])
        else:
            if is_open_bracket(ch) and not is_lt_gt(code, i, ignorelt):
                nesting.append(ch)
                closer = matching_bracket(ch)
                if piece:
                    pieces.append(piece)
                piece = ""
            piece += ch

    if piece:
        pieces.append(piece)
    return pieces


def filter_pieces(pieces: Sequence[str]) -> Tuple[str, List[str]]:
    """Collapse pieces into (spec with "_" per bracketed piece, bracketed pieces)."""
    spec = ""
    args: List[str] = []
    for piece in pieces:
        if is_block_piece(piece):
            spec += "_"
            args.append(piece)
        else:
            spec += piece
    return normalize_spec(spec), args
