"""
Monkey REPL - reads lines, parses them, prints the tree back.

Each line is parsed on its own. Well-formed input is echoed in canonical
form (fully parenthesized); otherwise every error message is printed on
its own tab-indented line and the tree is skipped.

Usage:
    monkey                 # interactive
    monkey --ast           # print an indented node tree instead
    monkey --tokens        # print the token stream instead
    monkey program.mk      # parse a whole file once
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from . import __version__
from .lexer import Lexer, TokenType
from .parser import Parser, Program, dump_tree

LOG = logging.getLogger(__name__)

PROMPT = ">> "


def start(input_stream: TextIO, output_stream: TextIO, prompt: str = PROMPT,
          show_ast: bool = False, show_tokens: bool = False):
    """Run the read-parse-print loop until ``input_stream`` is exhausted."""
    while True:
        output_stream.write(prompt)
        output_stream.flush()

        line = input_stream.readline()
        if not line:
            return

        line = line.rstrip("\r\n")

        if show_tokens:
            for token in Lexer(line):
                if token.type == TokenType.EOF:
                    break
                output_stream.write(f"{token}\n")
            continue

        parser = Parser(Lexer(line))
        program = parser.parse()

        if parser.errors:
            print_parser_errors(output_stream, parser.errors)
            continue

        output_stream.write(render(program, show_ast) + "\n")


def render(program: Program, show_ast: bool = False) -> str:
    if show_ast:
        return dump_tree(program)
    return str(program)


def print_parser_errors(output_stream: TextIO, errors: List[str]):
    for message in errors:
        output_stream.write(f"\t{message}\n")


def run_file(path: str, output_stream: TextIO, show_ast: bool = False,
             show_tokens: bool = False) -> int:
    """Parse a whole file, or just tokenize it; returns a process exit code."""
    with open(path, "r", encoding="utf-8") as f:
        source = f.read()

    if show_tokens:
        for token in Lexer(source, path):
            if token.type == TokenType.EOF:
                break
            output_stream.write(f"{token}\n")
        return 0

    parser = Parser(Lexer(source, path))
    program = parser.parse()

    if parser.has_errors():
        LOG.error("%s: %d syntax error(s)", path, len(parser.diagnostics))
        for error in parser.diagnostics:
            LOG.debug("%s %s (%s) at %s", error.code, error.category, error.message, error.location)
            output_stream.write(error.report())
        return 1

    output_stream.write(render(program, show_ast) + "\n")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="monkey", description="Monkey parser shell")
    parser.add_argument("file", nargs="?", help="Monkey source file to parse once. If omitted, start the REPL")
    parser.add_argument("--prompt", type=str, default=PROMPT, help="REPL prompt string")
    parser.add_argument("--ast", action="store_true", help="Print an indented node tree instead of rendered source")
    parser.add_argument("--tokens", action="store_true", help="Print the token stream instead of parsing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    if args.verbose:
        LOG.debug("Verbose mode enabled")

    if args.file:
        return run_file(args.file, sys.stdout, show_ast=args.ast, show_tokens=args.tokens)

    sys.stdout.write(f"Monkey {__version__}. Type an expression; Ctrl-D exits.\n")
    try:
        start(sys.stdin, sys.stdout, prompt=args.prompt,
              show_ast=args.ast, show_tokens=args.tokens)
    except KeyboardInterrupt:
        sys.stdout.write("\n")
        LOG.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
