# tests/test_config.py
import dataclasses
import json

import jsonschema
import pytest

from blparse.ast_nodes import Condition
from blparse.config import DEFAULT_CONFIG, ParserConfig, config_from_dict, load_config


def test_default_config():
    assert DEFAULT_CONFIG.primitive_instructions == {"move", "turnleft", "turnright", "infect", "skip"}
    assert DEFAULT_CONFIG.conditions == frozenset(Condition)
    assert DEFAULT_CONFIG.is_primitive("infect")
    assert not DEFAULT_CONFIG.is_primitive("f")


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.primitive_instructions = frozenset()


def test_primitives_must_be_identifiers():
    with pytest.raises(ValueError):
        ParserConfig(primitive_instructions={"move", "IF"})


def test_load_config_file(data_dir):
    config = load_config(data_dir / "config_no_random.json")
    assert config.is_primitive("jump")
    assert Condition.RANDOM not in config.conditions
    assert Condition.TRUE in config.conditions


def test_partial_config_keeps_defaults():
    config = config_from_dict({"primitiveInstructions": ["walk"]})
    assert config.primitive_instructions == {"walk"}
    assert config.conditions == DEFAULT_CONFIG.conditions


def test_unknown_condition_rejected():
    with pytest.raises(ValueError):
        config_from_dict({"conditions": ["next-is-lava"]})


def test_schema_rejects_bad_shapes(tmp_path):
    with pytest.raises(jsonschema.ValidationError):
        config_from_dict({"primitiveInstructions": "move"})
    with pytest.raises(jsonschema.ValidationError):
        config_from_dict({"keywords": ["IF"]})
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"conditions": [1]}), encoding="utf-8")
    with pytest.raises(jsonschema.ValidationError):
        load_config(bad)


def test_condition_words_must_be_hyphenated():
    with pytest.raises(ValueError):
        config_from_dict({"conditions": ["NEXT_IS_WALL"]})
    with pytest.raises(ValueError):
        config_from_dict({"conditions": ["next_is_wall"]})
    assert config_from_dict({"conditions": ["next-is-wall"]}).conditions == {Condition.NEXT_IS_WALL}


def test_primitive_with_trailing_newline_rejected():
    with pytest.raises(jsonschema.ValidationError):
        config_from_dict({"primitiveInstructions": ["move\n"]})
