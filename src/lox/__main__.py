#!/usr/bin/env python3
"""
CLI for the Lox expression interpreter.

Usage:
    python -m lox [SCRIPT] [--tokens] [--ast] [--json] [--hints] [--config FILE] [-v]

With no script an interactive prompt is started. With a script the file is
scanned, parsed and evaluated and the resulting value printed.

Exit codes follow sysexits.h:
    0   success
    64  usage error
    65  lexical or syntax error in the input
    66  script file not found
    70  runtime error during evaluation
    78  invalid configuration

Examples:
    # Evaluate a file
    python -m lox examples/arith.lox

    # Show the tokens and the parsed tree as well
    python -m lox examples/arith.lox --tokens --ast

    # Interactive prompt with a custom configuration
    LOX_CONFIG=~/.lox.yaml python -m lox
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70
EX_CONFIG = 78

logger = logging.getLogger("lox")


def exit_code(result) -> int:
    """Map a pipeline result to a process exit code."""
    if result.success:
        return EX_OK
    if result.had_runtime_error:
        return EX_SOFTWARE
    return EX_DATAERR


def run_file(path: Path, config) -> int:
    """Run a script file."""
    from .runtime import run
    from .shell import print_result

    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return EX_NOINPUT

    source = path.read_text(encoding="utf-8")
    logger.debug("running %s (%d characters)", path, len(source))
    result = run(source)
    print_result(result, config)
    return exit_code(result)


def run_prompt(config) -> int:
    """Run the interactive prompt until exit or end of input."""
    from .shell import Shell

    shell = Shell(config)
    try:
        shell.cmdloop()
    except KeyboardInterrupt:
        print()
    return EX_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lox',
        description='Lox expression interpreter',
    )
    parser.add_argument('script', nargs='?', help='Lox source file (omit for a prompt)')
    parser.add_argument('--tokens', action='store_true', default=None,
                        help='Print the scanned tokens')
    parser.add_argument('--ast', action='store_true', default=None,
                        help='Print the parsed tree in prefix form')
    parser.add_argument('--json', action='store_true', default=None,
                        help='Report diagnostics as JSON')
    parser.add_argument('--hints', action='store_true', default=None,
                        help='Show hints under each diagnostic')
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML configuration file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    from .config import ConfigError, load_config

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on bad usage
        return EX_USAGE if e.code else EX_OK

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EX_CONFIG

    overrides = {
        'show_tokens': args.tokens,
        'show_ast': args.ast,
        'json_diagnostics': args.json,
        'show_hints': args.hints,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    if args.verbose:
        config = replace(config, log_level='DEBUG')

    logging.basicConfig(
        level=config.logging_level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.script:
        return run_file(Path(args.script), config)
    return run_prompt(config)


if __name__ == '__main__':
    sys.exit(main())
