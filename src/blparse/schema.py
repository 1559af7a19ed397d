# src/blparse/schema.py
# JSON form of a parsed program, checked against the packaged schema.
from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Dict

from jsonschema import Draft202012Validator

from .ast_nodes import Program
from .config import SCHEMA_DIR

PROGRAM_SCHEMA_PATH = SCHEMA_DIR / "bl-program.schema.json"


@lru_cache(maxsize=1)
def program_validator() -> Draft202012Validator:
    schema = json.loads(PROGRAM_SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def validate_program_dict(doc: Dict[str, Any]) -> None:
    """Raise jsonschema.ValidationError if doc is not a well-formed program AST."""
    program_validator().validate(doc)


def program_to_json(program: Program, validate: bool = False) -> str:
    doc = program.to_dict()
    if validate:
        validate_program_dict(doc)
    return json.dumps(doc, ensure_ascii=False, sort_keys=True, indent=2)
