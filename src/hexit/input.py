import logging
import sys

from .main import split_lines

logger = logging.getLogger(__name__)


# Where a program's source comes from: an expression given on the command
# line, standard input, or a file
class Input:
    def __init__(self, expression=None, path=None):
        self.expression = expression
        self.path = path

    @classmethod
    def from_expression(cls, expression):
        return cls(expression=expression)

    @classmethod
    def from_path(cls, path):
        """A path of '-' means standard input."""
        if path == '-':
            return cls()
        return cls(path=path)

    def read(self):
        """Return the source as a list of lines. Raises OSError for unreadable files
        and UnicodeDecodeError for files that are not UTF-8."""
        if self.expression is not None:
            logger.info("Reading from expression")
            return split_lines(self.expression)
        if self.path is None:
            logger.info("Reading from standard input")
            source = sys.stdin.read()
        else:
            logger.info("Reading from file %s", self.path)
            with open(self.path, 'r', encoding='utf-8') as file:
                source = file.read()
        if source.endswith('\n'):
            source = source[:-1]
        return split_lines(source)

    def __str__(self):
        if self.expression is not None:
            return '<expression>'
        if self.path is None:
            return '<stdin>'
        return self.path
