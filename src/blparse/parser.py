# src/blparse/parser.py
# Recursive-descent parser for BL. Consumes a token stream ending in
# END_OF_INPUT and builds Statement / Program trees.
#
#   program     -> PROGRAM id IS instruction* BEGIN block END id <EOF>
#   instruction -> INSTRUCTION id IS block END id
#   block       -> statement*            (stops before ELSE | END | <EOF>)
#   statement   -> IF cond THEN block [ELSE block] END IF
#                | WHILE cond DO block END WHILE
#                | id
#
# Every check peeks before dequeuing, so a failure never consumes past the
# offending token. The first failure raises and the parse is abandoned.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Tuple, Type, Union

from .ast_nodes import Condition, Program, Statement
from .config import DEFAULT_CONFIG, ParserConfig
from .errors import (
    BLSyntaxError,
    DuplicateInstructionError,
    InvalidConditionError,
    MalformedIdentifierError,
    MissingKeywordError,
    MissingTerminatorError,
    NameMismatchError,
    ReservedNameError,
)
from .tokenizer import END_OF_INPUT, TokenStream, is_condition, is_identifier, tokenize

LOG = logging.getLogger(__name__)

Tokens = Union[TokenStream, Iterable[str]]

# ----------------------------- token helpers ----------------------------------

def _shown(tok: str) -> str:
    return "end of input" if tok == END_OF_INPUT else repr(tok)


def _expect(tokens: TokenStream, keyword: str, what: str,
            err: Type[BLSyntaxError] = MissingKeywordError) -> None:
    tok = tokens.front()
    if tok != keyword:
        raise err(f"expected {keyword} {what}, got {_shown(tok)}",
                  token=tok, position=tokens.consumed)
    tokens.dequeue()


def _expect_identifier(tokens: TokenStream, what: str) -> str:
    tok = tokens.front()
    if not is_identifier(tok):
        raise MalformedIdentifierError(f"{what} must be an identifier, got {_shown(tok)}",
                                       token=tok, position=tokens.consumed)
    return tokens.dequeue()


def _expect_closing_name(tokens: TokenStream, construct: str, name: str) -> None:
    tok = tokens.front()
    if tok != name:
        raise NameMismatchError(construct, name, tok, position=tokens.consumed)
    tokens.dequeue()


def _parse_condition(tokens: TokenStream, config: ParserConfig) -> Condition:
    tok = tokens.front()
    if not is_condition(tok):
        raise InvalidConditionError(f"{_shown(tok)} is not a condition",
                                    token=tok, position=tokens.consumed)
    cond = Condition.from_token(tok)
    if cond not in config.conditions:
        raise InvalidConditionError(f"condition {tok!r} is not enabled",
                                    token=tok, position=tokens.consumed)
    tokens.dequeue()
    return cond


def _expect_end(tokens: TokenStream, closer: str) -> None:
    _expect(tokens, "END", f"to close {closer}", MissingTerminatorError)
    _expect(tokens, closer, f"after END closing {closer}", MissingTerminatorError)

# ----------------------------- statements -------------------------------------

def _parse_if(tokens: TokenStream, config: ParserConfig) -> Statement:
    tokens.dequeue()  # IF
    cond = _parse_condition(tokens, config)
    _expect(tokens, "THEN", "after IF condition")
    then_body = parse_block(tokens, config)

    s = Statement()
    if tokens.front() == "ELSE":
        tokens.dequeue()
        else_body = parse_block(tokens, config)
        _expect_end(tokens, "IF")
        s.assemble_if_else(cond, then_body, else_body)
    else:
        _expect_end(tokens, "IF")
        s.assemble_if(cond, then_body)
    return s


def _parse_while(tokens: TokenStream, config: ParserConfig) -> Statement:
    tokens.dequeue()  # WHILE
    cond = _parse_condition(tokens, config)
    _expect(tokens, "DO", "after WHILE condition")
    body = parse_block(tokens, config)
    _expect_end(tokens, "WHILE")

    s = Statement()
    s.assemble_while(cond, body)
    return s


def _parse_call(tokens: TokenStream) -> Statement:
    # Lookahead already confirmed an identifier. Whether it names a known
    # instruction is not checked here.
    s = Statement()
    s.assemble_call(tokens.dequeue())
    return s


def parse_statement(tokens: Tokens, config: ParserConfig = DEFAULT_CONFIG) -> Statement:
    """Consume exactly one statement (IF, WHILE or a call) from the front of tokens."""
    tokens = TokenStream.of(tokens)
    front = tokens.front()
    if front == "IF":
        return _parse_if(tokens, config)
    if front == "WHILE":
        return _parse_while(tokens, config)
    if is_identifier(front):
        return _parse_call(tokens)
    raise MalformedIdentifierError(
        f"expected IF, WHILE or an instruction name, got {_shown(front)}",
        token=front, position=tokens.consumed,
    )


def parse_block(tokens: Tokens, config: ParserConfig = DEFAULT_CONFIG) -> Statement:
    """
    Parse statements until ELSE, END or END_OF_INPUT is at the front.
    The terminator is left in the stream for the caller. May return an empty BLOCK.
    """
    tokens = TokenStream.of(tokens)
    block = Statement()
    while not tokens.at_block_end():
        block.add_to_block(len(block), parse_statement(tokens, config))
    return block

# ----------------------------- program ----------------------------------------

def parse_instruction(tokens: Tokens, config: ParserConfig = DEFAULT_CONFIG) -> Tuple[str, Statement]:
    """INSTRUCTION name IS block END name -> (name, body)."""
    tokens = TokenStream.of(tokens)
    _expect(tokens, "INSTRUCTION", "to start an instruction definition")

    tok = tokens.front()
    if is_identifier(tok) and config.is_primitive(tok):
        raise ReservedNameError(f"instruction '{tok}' redefines a primitive instruction",
                                token=tok, position=tokens.consumed)
    name = _expect_identifier(tokens, "instruction name")

    _expect(tokens, "IS", f"after INSTRUCTION {name}")
    body = parse_block(tokens, config)
    _expect(tokens, "END", f"to close INSTRUCTION {name}")
    _expect_closing_name(tokens, "instruction", name)
    return name, body


def parse_program(tokens: Tokens, config: ParserConfig = DEFAULT_CONFIG) -> Program:
    """Parse a whole BL program; the token stream is drained on success."""
    tokens = TokenStream.of(tokens)
    program = Program()

    _expect(tokens, "PROGRAM", "at start of program")
    name = _expect_identifier(tokens, "program name")
    program.name = name
    _expect(tokens, "IS", f"after PROGRAM {name}")

    context = program.new_context()
    while tokens.front() == "INSTRUCTION":
        start = tokens.consumed
        instr_name, instr_body = parse_instruction(tokens, config)
        if instr_name in context:
            raise DuplicateInstructionError(instr_name, position=start)
        context[instr_name] = instr_body
        LOG.debug("program %s: instruction %s (%d statements)", name, instr_name, len(instr_body))
    program.swap_context(context)

    _expect(tokens, "BEGIN", "to start the main body")
    body = parse_block(tokens, config)
    program.swap_body(body)

    _expect(tokens, "END", "to close the main body")
    _expect_closing_name(tokens, "program", name)
    tok = tokens.front()
    if tok != END_OF_INPUT:
        raise MissingTerminatorError(f"expected end of input after END {name}, got {tok!r}",
                                     token=tok, position=tokens.consumed)
    tokens.dequeue()

    LOG.debug("program %s: %d instructions, %d body statements", name, len(context), len(body))
    return program


def parse_program_text(text: str, config: ParserConfig = DEFAULT_CONFIG) -> Program:
    return parse_program(tokenize(text), config)


def parse_program_file(path: Union[str, Path], config: ParserConfig = DEFAULT_CONFIG) -> Program:
    p = Path(path)
    LOG.debug("parsing %s", p)
    return parse_program_text(p.read_text(encoding="utf-8"), config)
