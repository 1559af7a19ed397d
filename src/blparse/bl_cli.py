# src/blparse/bl_cli.py
# CLI: parse a BL source file and report the AST or the first syntax error.

from __future__ import annotations

import argparse
import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .config import DEFAULT_CONFIG, load_config
from .errors import BLSyntaxError
from .parser import parse_block, parse_program, parse_statement
from .schema import program_to_json, validate_program_dict
from .tokenizer import TokenStream, tokenize

LOG = logging.getLogger("blparse")


def _source_info(path: Path, text: str) -> Dict[str, Any]:
    h = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return {"path": str(path), "hash": f"sha256:{h}"}


def _dump(doc: Dict[str, Any]) -> str:
    return json.dumps(doc, ensure_ascii=False, sort_keys=True, indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="blparse",
        description="Parse a BL program (or a statement/block) and print its AST or the first syntax error.",
    )
    p.add_argument("source", help="Path to BL source (.bl).")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--statement", action="store_true", help="Parse a single statement instead of a program.")
    mode.add_argument("--block", action="store_true", help="Parse a statement block instead of a program.")
    p.add_argument("--config", metavar="PATH", help="JSON parser config (primitive instructions, enabled conditions).")
    p.add_argument("--emit-ast", metavar="PATH", help="Write the AST JSON to PATH.")
    p.add_argument("--print-ast", action="store_true", help="Print the AST JSON instead of a summary.")
    p.add_argument("--validate", action="store_true", help="Check the program AST against the JSON schema.")
    p.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    path = Path(args.source)
    if not path.is_file():
        p.error(f"source not found: {path}")
    if args.validate and (args.statement or args.block):
        p.error("--validate checks a program AST; it cannot be combined with --statement or --block")

    config = DEFAULT_CONFIG
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError, jsonschema.ValidationError) as e:
            p.error(f"bad config {args.config}: {e}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        p.error(f"source is not valid UTF-8: {path} ({e.reason})")
    source = _source_info(path, text)
    tokens = TokenStream(tokenize(text))

    try:
        if args.statement or args.block:
            stmt = parse_statement(tokens, config) if args.statement else parse_block(tokens, config)
            doc = stmt.to_dict()
            out = _dump(doc)
            summary = f"parsed {stmt.kind.value} from {path} ({len(tokens) - 1} tokens left)"
        else:
            program = parse_program(tokens, config)
            if args.validate:
                validate_program_dict(program.to_dict())
            out = program_to_json(program)
            summary = (f"parsed program {program.name} from {path}: "
                       f"{len(program.context)} instructions, {len(program.body)} body statements")
    except BLSyntaxError as e:
        LOG.debug("syntax error in %s", path, exc_info=True)
        err = {"status": "error", "source": source, **e.to_dict()}
        print(_dump(err))
        return 1
    except jsonschema.ValidationError as e:
        LOG.error("AST failed schema validation: %s", e.message)
        return 1

    if args.print_ast:
        print(out)
    else:
        print(summary)
    if args.emit_ast:
        Path(args.emit_ast).parent.mkdir(parents=True, exist_ok=True)
        Path(args.emit_ast).write_text(out + "\n", encoding="utf-8")
        LOG.info("wrote AST: %s", args.emit_ast)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
