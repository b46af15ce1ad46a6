# blocktext/errors.py
# Exception hierarchy. Parsing text never raises; these cover misbuilt
# block tables, bad language configuration and schema mismatches.
from __future__ import annotations

from typing import List, Optional


class BlockTextError(Exception):
    pass


class DatabaseError(BlockTextError):
    def __init__(self, blockid: str, message: str):
        super().__init__(f"Bad block table entry {blockid!r}: {message}")
        self.blockid = blockid


class LanguageError(BlockTextError):
    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or f"Unknown language: {code}")
        self.code = code


class SchemaValidationError(BlockTextError):
    def __init__(self, message: str, path: Optional[List] = None):
        super().__init__(message)
        self.path = list(path or [])
