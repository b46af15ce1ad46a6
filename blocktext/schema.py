# blocktext/schema.py
# Validate serialized scripts against the bundled JSON Schema (offline).
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from .errors import SchemaValidationError

SCHEMAS = Path(__file__).resolve().parent / "schemas"
SCRIPTS_SCHEMA = SCHEMAS / "scripts.schema.json"


def load_schema(path: Path = SCRIPTS_SCHEMA) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def schema_errors(data: Any) -> List[str]:
    """All validation messages for `data`, shallowest first."""
    validator = Draft202012Validator(load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: len(e.path))
    return [f"{'/'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors]


def validate_scripts(data: Any) -> None:
    """Raise SchemaValidationError when `data` is not a valid scripts document."""
    validator = Draft202012Validator(load_schema())
    error = next(iter(sorted(validator.iter_errors(data), key=lambda e: len(e.path))), None)
    if error is not None:
        raise SchemaValidationError(f"Schema validation failed: {error.message}", list(error.path))
