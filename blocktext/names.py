# blocktext/names.py
# Text folding used for block lookup: "minify" for index keys and
# "normalize_spec" for placeholder spacing.
from __future__ import annotations
import re

# Punctuation that never takes part in matching.
_PUNCT = re.compile(r'[.,%?:▶◀▸◂]')
_WS = re.compile(r'[ \t]+')
_SPACES = re.compile(r' ')

# Underscore placeholders always stand apart from their neighbours.
_BEFORE_PLACEHOLDER = re.compile(r'([^ ])_')
_AFTER_PLACEHOLDER = re.compile(r'_([^ ])')

# Small set of letters folded so German input matches with or without them.
_FOLDS = (("ß", "ss"), ("ü", "u"), ("ö", "o"), ("ä", "a"))


def minify(text: str | None) -> str:
    """Case, punctuation and whitespace insensitive lookup key.

    >>> minify("Go to X: (0) Y:")
    'go to x (0) y'

    All-punctuation text that spells an ellipsis keeps matching the grey
    ellipsis block.
    """
    if not isinstance(text, str):
        return ""
    s = _PUNCT.sub("", text).lower()
    s = _WS.sub(" ", s).strip()
    for src, dst in _FOLDS:
        s = s.replace(src, dst)
    if not s and _SPACES.sub("", text) == "...":
        return "..."
    return s


def normalize_spec(spec: str) -> str:
    # Two passes: the first can leave "_x" behind when it splits "a_x".
    spec = _BEFORE_PLACEHOLDER.sub(r'\1 _', spec)
    return _AFTER_PLACEHOLDER.sub(r'_ \1', spec)
