# src/blparse/errors.py
# Syntax errors raised by the BL parsers. The first violation aborts the parse;
# nothing in the package catches these, callers decide how to report them.

from __future__ import annotations
from typing import Any, Dict, Optional


class BLSyntaxError(Exception):
    rule = "syntax"

    def __init__(self, message: str, token: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.token = token
        self.position = position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule,
            "reason": self.message,
            "token": self.token,
            "position": self.position,
        }


class MissingKeywordError(BLSyntaxError):
    rule = "missing-keyword"

class MalformedIdentifierError(BLSyntaxError):
    rule = "malformed-identifier"

class ReservedNameError(BLSyntaxError):
    rule = "reserved-name"

class DuplicateInstructionError(BLSyntaxError):
    rule = "duplicate-instruction"

    def __init__(self, name: str, position: Optional[int] = None):
        super().__init__(f"instruction '{name}' is already defined", token=name, position=position)
        self.name = name

class NameMismatchError(BLSyntaxError):
    rule = "name-mismatch"

    def __init__(self, construct: str, expected: str, got: str, position: Optional[int] = None):
        super().__init__(
            f"{construct} '{expected}' must be closed with END {expected}, got END {got}",
            token=got,
            position=position,
        )
        self.expected = expected

class MissingTerminatorError(BLSyntaxError):
    rule = "missing-terminator"

class InvalidConditionError(BLSyntaxError):
    rule = "invalid-condition"

class UnexpectedEndOfInputError(BLSyntaxError):
    rule = "unexpected-end-of-input"
