"""Interactive prompt for the Lox interpreter. Uses cmd as backend."""

import cmd
import json
import sys
from typing import Optional, TextIO

from .ast import print_ast
from .config import LoxConfig
from .runtime import RunResult, run


def print_result(result: RunResult, config: LoxConfig,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
    """Write a run's value to ``out`` and its diagnostics to ``err``."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    if config.show_tokens:
        for token in result.tokens:
            print(token, file=out)
    if config.show_ast and result.expression is not None:
        print(print_ast(result.expression), file=out)

    if result.success:
        print(result.value, file=out)
    elif config.json_diagnostics:
        print(json.dumps(result.to_json(), indent=2), file=err)
    else:
        print(result.format_diagnostics(config.show_hints), file=err)


class Shell(cmd.Cmd):
    """Read-eval-print loop. Every line is run on its own."""
    intro = "Lox expression interpreter\nType 'help' for more information, 'exit' to quit."

    def __init__(self, config: Optional[LoxConfig] = None,
                 stderr: Optional[TextIO] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.config = config or LoxConfig()
        self.prompt = self.config.prompt
        self.stderr = stderr or sys.stderr
        self.last_result: Optional[RunResult] = None

    def parseline(self, line):
        """Only words name commands; a leading ? is source, not help."""
        stripped = line.strip()
        if stripped.startswith("?"):
            return None, None, stripped
        return super().parseline(line)

    def default(self, line):
        """Runs a line of source."""
        self.last_result = run(line)
        print_result(self.last_result, self.config, self.stdout, self.stderr)

    def do_help(self, arg):
        """Short intro rather than per-command docs."""
        print("Type an expression to evaluate it, e.g. (1 + 2) * 3 or \"foo\" + \"bar\".\n"
              "Numbers, strings, true, false and nil can be combined with\n"
              "! - + * / == != < <= > >= and parentheses.\n"
              "Lines are evaluated independently. Type 'exit' or press Ctrl-D to quit.",
              file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
