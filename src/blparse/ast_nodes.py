# src/blparse/ast_nodes.py
# BL abstract syntax: Condition, Statement (five variants), Program.
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Condition(Enum):
    NEXT_IS_EMPTY = "next-is-empty"
    NEXT_IS_NOT_EMPTY = "next-is-not-empty"
    NEXT_IS_WALL = "next-is-wall"
    NEXT_IS_NOT_WALL = "next-is-not-wall"
    NEXT_IS_FRIEND = "next-is-friend"
    NEXT_IS_NOT_FRIEND = "next-is-not-friend"
    NEXT_IS_ENEMY = "next-is-enemy"
    NEXT_IS_NOT_ENEMY = "next-is-not-enemy"
    RANDOM = "random"
    TRUE = "true"

    @classmethod
    def from_token(cls, word: str) -> "Condition":
        """'next-is-wall' (any case) -> Condition.NEXT_IS_WALL. KeyError if unknown."""
        return cls[word.replace("-", "_").upper()]

    @property
    def word(self) -> str:
        return self.value


class StatementKind(Enum):
    BLOCK = "BLOCK"
    IF = "IF"
    IF_ELSE = "IF_ELSE"
    WHILE = "WHILE"
    CALL = "CALL"


@dataclass
class Statement:
    """
    Tagged BL statement tree. A new Statement is an empty BLOCK; one of the
    assemble_* methods gives it its final shape, replacing whatever it held.
    """
    kind: StatementKind = StatementKind.BLOCK
    condition: Optional[Condition] = None
    children: List["Statement"] = field(default_factory=list)
    call_name: Optional[str] = None

    def __len__(self) -> int:
        if self.kind is not StatementKind.BLOCK:
            raise TypeError(f"len() of a {self.kind.value} statement")
        return len(self.children)

    def __bool__(self) -> bool:
        # A parsed statement is always truthy, empty blocks and calls included.
        return True

    def _reset(self, kind: StatementKind, condition: Optional[Condition] = None,
               children: Tuple["Statement", ...] = (), call_name: Optional[str] = None) -> None:
        for child in children:
            if child is self:
                raise ValueError("a statement cannot contain itself")
        self.kind = kind
        self.condition = condition
        self.children = list(children)
        self.call_name = call_name

    # ----------------------------- assembly ----------------------------------

    def add_to_block(self, position: int, statement: "Statement") -> None:
        if self.kind is not StatementKind.BLOCK:
            raise TypeError(f"add_to_block on a {self.kind.value} statement")
        if statement is self:
            raise ValueError("a statement cannot contain itself")
        if not 0 <= position <= len(self.children):
            raise IndexError(f"block position {position} out of range 0..{len(self.children)}")
        self.children.insert(position, statement)

    def assemble_if(self, condition: Condition, body: "Statement") -> None:
        self._reset(StatementKind.IF, condition, (body,))

    def assemble_if_else(self, condition: Condition, then_body: "Statement", else_body: "Statement") -> None:
        self._reset(StatementKind.IF_ELSE, condition, (then_body, else_body))

    def assemble_while(self, condition: Condition, body: "Statement") -> None:
        self._reset(StatementKind.WHILE, condition, (body,))

    def assemble_call(self, name: str) -> None:
        self._reset(StatementKind.CALL, call_name=name)

    # ----------------------------- accessors ---------------------------------

    @property
    def body(self) -> "Statement":
        """Body of IF / WHILE, then-branch of IF_ELSE."""
        if self.kind not in (StatementKind.IF, StatementKind.IF_ELSE, StatementKind.WHILE):
            raise TypeError(f"{self.kind.value} statement has no body")
        return self.children[0]

    @property
    def else_body(self) -> "Statement":
        if self.kind is not StatementKind.IF_ELSE:
            raise TypeError(f"{self.kind.value} statement has no else branch")
        return self.children[1]

    def to_dict(self) -> Dict[str, Any]:
        k = self.kind
        if k is StatementKind.BLOCK:
            return {"kind": k.value, "statements": [c.to_dict() for c in self.children]}
        if k is StatementKind.CALL:
            return {"kind": k.value, "instruction": self.call_name}
        out: Dict[str, Any] = {"kind": k.value, "condition": self.condition.name, "body": self.body.to_dict()}
        if k is StatementKind.IF_ELSE:
            out["else"] = self.else_body.to_dict()
        return out


@dataclass
class Program:
    name: str = ""
    context: Dict[str, Statement] = field(default_factory=dict)
    body: Statement = field(default_factory=Statement)

    @staticmethod
    def new_context() -> Dict[str, Statement]:
        return {}

    @staticmethod
    def new_body() -> Statement:
        return Statement()

    def swap_context(self, context: Dict[str, Statement]) -> Dict[str, Statement]:
        old, self.context = self.context, context
        return old

    def swap_body(self, body: Statement) -> Statement:
        old, self.body = self.body, body
        return old

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "Program",
            "name": self.name,
            "context": {n: s.to_dict() for n, s in self.context.items()},
            "body": self.body.to_dict(),
        }
