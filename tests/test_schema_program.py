# tests/test_schema_program.py
import json

import jsonschema
import pytest

from blparse.parser import parse_program_file, parse_program_text
from blparse.schema import program_to_json, validate_program_dict


def base_program(body, context=None):
    return {
        "type": "Program",
        "name": "p",
        "context": context or {},
        "body": body,
    }


def test_parsed_program_validates(data_dir):
    program = parse_program_file(data_dir / "program_valid.bl")
    validate_program_dict(program.to_dict())  # should NOT raise


def test_program_to_json_is_sorted_and_loadable():
    program = parse_program_text("PROGRAM p IS INSTRUCTION f IS move END f BEGIN f END p")
    doc = json.loads(program_to_json(program, validate=True))
    assert doc["context"]["f"] == {"kind": "BLOCK", "statements": [{"kind": "CALL", "instruction": "move"}]}
    assert doc["body"]["statements"][0]["instruction"] == "f"


def test_minimal_block_valid():
    validate_program_dict(base_program({"kind": "BLOCK", "statements": []}))


def test_unknown_condition_rejected():
    bad = base_program({"kind": "WHILE", "condition": "SUNNY", "body": {"kind": "BLOCK", "statements": []}})
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(bad)


def test_if_else_requires_else_branch():
    bad = base_program({"kind": "IF_ELSE", "condition": "TRUE", "body": {"kind": "BLOCK", "statements": []}})
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(bad)


def test_call_needs_identifier():
    bad = base_program({"kind": "CALL", "instruction": "2fast"})
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(bad)


def test_no_extra_fields():
    bad = base_program({"kind": "CALL", "instruction": "move", "args": []})
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(bad)


def test_identifier_with_trailing_newline_rejected():
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(base_program({"kind": "CALL", "instruction": "move\n"}))
    bad_name = base_program({"kind": "BLOCK", "statements": []})
    bad_name["name"] = "p\n"
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(bad_name)
    with pytest.raises(jsonschema.ValidationError):
        validate_program_dict(base_program({"kind": "BLOCK", "statements": []},
                                           context={"f\n": {"kind": "BLOCK", "statements": []}}))
