# src/blparse/config.py
# Parser vocabulary that is injected rather than global: the reserved primitive
# instruction names and the conditions a program may test.
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet

import jsonschema

from .ast_nodes import Condition
from .tokenizer import is_condition, is_identifier

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
CONFIG_SCHEMA_PATH = SCHEMA_DIR / "bl-config.schema.json"

PRIMITIVE_INSTRUCTIONS = frozenset({"move", "turnleft", "turnright", "infect", "skip"})


@dataclass(frozen=True)
class ParserConfig:
    primitive_instructions: FrozenSet[str] = PRIMITIVE_INSTRUCTIONS
    conditions: FrozenSet[Condition] = field(default_factory=lambda: frozenset(Condition))

    def __post_init__(self):
        # Accept any iterable from callers, store frozensets.
        object.__setattr__(self, "primitive_instructions", frozenset(self.primitive_instructions))
        object.__setattr__(self, "conditions", frozenset(self.conditions))
        bad = sorted(p for p in self.primitive_instructions if not is_identifier(p))
        if bad:
            raise ValueError(f"primitive instruction names must be identifiers: {', '.join(bad)}")

    def is_primitive(self, name: str) -> bool:
        return name in self.primitive_instructions


DEFAULT_CONFIG = ParserConfig()


def _load_schema() -> Dict[str, Any]:
    return json.loads(CONFIG_SCHEMA_PATH.read_text(encoding="utf-8"))


def config_from_dict(doc: Dict[str, Any]) -> ParserConfig:
    jsonschema.validate(instance=doc, schema=_load_schema())
    prims = doc.get("primitiveInstructions", DEFAULT_CONFIG.primitive_instructions)
    conds = set()
    for word in doc.get("conditions", [c.word for c in Condition]):
        if not is_condition(word):
            raise ValueError(f"unknown condition: {word!r}")
        conds.add(Condition.from_token(word))
    return ParserConfig(primitive_instructions=frozenset(prims), conditions=frozenset(conds))


def load_config(path: str | Path) -> ParserConfig:
    """Read a JSON config: {"primitiveInstructions": [...], "conditions": [...]}."""
    p = Path(path)
    return config_from_dict(json.loads(p.read_text(encoding="utf-8")))
