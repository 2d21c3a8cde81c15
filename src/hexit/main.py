from .reader import read_lines
from .interpreter import evaluate_exps, DEFAULT_DEPTH_LIMIT
from .constants import Table


def split_lines(source):
    """Split source text into lines, dropping the line terminators."""
    return [line[:-1] if line.endswith('\r') else line for line in source.split('\n')]


class Program:
    """A Hexit program that has been read and is ready to run."""

    def __init__(self, exps):
        self.exps = exps

    @classmethod
    def read(cls, lines):
        """Read a program from a list of lines, or from a single string.

        Raises ReadErrors if any line cannot be read.
        """
        if isinstance(lines, str):
            lines = split_lines(lines)
        return cls(read_lines(lines))

    def run(self, constants, limit=None, depth_limit=DEFAULT_DEPTH_LIMIT):
        """Evaluate the program, returning its output bytes.

        Raises an EvalError if evaluation fails.
        """
        return evaluate_exps(self.exps, constants, limit, depth_limit)


def run_hexit(code, constants=None, limit=None):
    """Run a Hexit program.

    Args:
        code (str): The source code to run
        constants (Table): Constants to look names up in; the built-in set if None
        limit (int): Maximum size of a repetition's output, or None for no limit

    Returns:
        bytes: The program's output
    """
    if constants is None:
        constants = Table.builtin_set()
    program = Program.read(code)
    return program.run(constants, limit)
