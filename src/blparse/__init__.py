# src/blparse/__init__.py
"""Recursive-descent parser and AST builder for the BL robot language."""

from .ast_nodes import Condition, Program, Statement, StatementKind
from .config import DEFAULT_CONFIG, ParserConfig, load_config
from .errors import BLSyntaxError
from .parser import (
    parse_block,
    parse_instruction,
    parse_program,
    parse_program_file,
    parse_program_text,
    parse_statement,
)
from .tokenizer import END_OF_INPUT, TokenStream, tokenize

__all__ = [
    "BLSyntaxError",
    "Condition",
    "DEFAULT_CONFIG",
    "END_OF_INPUT",
    "ParserConfig",
    "Program",
    "Statement",
    "StatementKind",
    "TokenStream",
    "load_config",
    "parse_block",
    "parse_instruction",
    "parse_program",
    "parse_program_file",
    "parse_program_text",
    "parse_statement",
    "tokenize",
]

__version__ = "1.0.0"
