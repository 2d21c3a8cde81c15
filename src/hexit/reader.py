# reader.py
# Reads a whole program: every line is lexed on its own, front comments are
# removed, and the tokens of all good lines are parsed together as one stream.

import logging

from .lexer import lex_source
from .parser import parse_tokens
from .tokens import Token
from .errors import LexError, ParseError, UnknownChar, ReadErrors

logger = logging.getLogger(__name__)


def strip_front_comment(tokens):
    """Drop every token up to and including the last colon on the line."""
    for index in range(len(tokens) - 1, -1, -1):
        if tokens[index].is_colon():
            return tokens[index + 1:]
    return tokens


def read_line(line_number, line):
    """Lex one line and check it for characters the language does not use.

    Returns the line's tokens, or raises a LexError or UnknownChar.
    """
    tokens = strip_front_comment(lex_source(line_number, line))
    for token in tokens:
        stray = token.as_stray()
        if stray is not None:
            raise UnknownChar(stray)
    return tokens


def read_lines(lines):
    """Read the lines of a program into a list of expressions.

    Every line that fails to lex, or holds an unknown character, contributes
    one error; if there are any, a ReadErrors carrying all of them is raised.
    Otherwise the tokens are parsed once, and a parse error is raised as a
    ReadErrors holding just that error.
    """
    stream = []
    errors = []

    for line_number, line in enumerate(lines, start=1):
        try:
            tokens = read_line(line_number, line)
        except (LexError, UnknownChar) as e:
            logger.debug("Line %d: %s", line_number, e)
            errors.append(e)
            continue
        stream.extend(tokens)
        stream.append(Token.whitespace())

    if errors:
        raise ReadErrors(errors)

    try:
        return parse_tokens(stream)
    except ParseError as e:
        raise ReadErrors([e]) from e
