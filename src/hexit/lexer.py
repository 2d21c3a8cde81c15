import logging

from .pos import Placed
from .tokens import Token, ALPHANUM, FORM, OPEN, CLOSE, QUOTED, STRAY
from .errors import UnclosedString, UnclosedForm

logger = logging.getLogger(__name__)

# Lexer states
READY = 'READY'                    # ready for anything
READ_WHITESPACE = 'READ_WHITESPACE'
READ_ALPHANUM = 'READ_ALPHANUM'
READ_FORM = 'READ_FORM'
READ_QUOTE = 'READ_QUOTE'
DONE = 'DONE'                      # the rest of the line is a comment


def is_alphanum(char):
    return (char.isascii() and char.isalnum()) or char == '_'


def lex_source(line_number, text):
    """Tokenise one line of Hexit.

    Args:
        line_number (int): The 1-based number of the line, used in positions
        text (str): The line, without its line terminator

    Returns:
        list: The tokens of the line

    Raises:
        UnclosedString, UnclosedForm: If the line ends inside a string or form
    """
    lexer = Lexer(line_number, text)
    return lexer.tokenize()


# Lexer class turns one line of source into tokens, one character at a time.
# Characters it does not understand become stray tokens; whether they are an
# error is decided later, once front comments have been removed.
class Lexer:
    def __init__(self, line_number, text):
        self.line_number = line_number
        self.text = text
        self.state = READY
        self.column = 0         # Column of the character being looked at
        self.anchor = 0         # Column where the current run, form or string began
        self.backslash = False  # Whether the previous string character was a backslash
        self.tokens = []

    def tokenize(self):
        for column, char in enumerate(self.text):
            self.column = column
            self._next_char(char)
        self.column = len(self.text)
        self._last_token()
        logger.debug("Line %d: %s", self.line_number, [str(t) for t in self.tokens])
        return self.tokens

    def _next_char(self, char):
        state = self.state

        # Inside a string, only an unescaped quote ends it
        if state == READ_QUOTE:
            if char == '\\' and not self.backslash:
                self.backslash = True
            elif char == '"' and not self.backslash:
                self.tokens.append(self._delimited(QUOTED))
                self.state = READY
            else:
                self.backslash = False
            return

        # Inside a form, everything up to the closing bracket is kept
        if state == READ_FORM:
            if char == ']':
                self.tokens.append(self._delimited(FORM))
                self.state = READY
            return

        if state == DONE:
            return

        if is_alphanum(char):
            if state != READ_ALPHANUM:
                self._flush()
                self.anchor = self.column
                self.state = READ_ALPHANUM
            return

        if char.isspace():
            if state != READ_WHITESPACE:
                self._flush()
                self.state = READ_WHITESPACE
            return

        self._flush()

        if char == '[':
            self.anchor = self.column
            self.state = READ_FORM
        elif char == '"':
            self.anchor = self.column
            self.backslash = False
            self.state = READ_QUOTE
        elif char == '#':
            self.state = DONE
        elif char == '(':
            self.tokens.append(self._single(OPEN))
        elif char == ')':
            self.tokens.append(self._single(CLOSE))
        else:
            self.tokens.append(self._single(STRAY))

    # Emits the token for a pending alphanumeric run or whitespace
    def _flush(self):
        if self.state == READ_ALPHANUM:
            run = Placed(self.text[self.anchor:self.column], self.line_number, self.anchor)
            self.tokens.append(Token(ALPHANUM, run))
        elif self.state == READ_WHITESPACE:
            self.tokens.append(Token.whitespace())
        self.state = READY

    def _last_token(self):
        if self.state == READ_QUOTE:
            raise UnclosedString(self._rest())
        if self.state == READ_FORM:
            raise UnclosedForm(self._rest())
        if self.state == READ_ALPHANUM:
            self._flush()

    def _single(self, type):
        return Token(type, Placed(self.text[self.column], self.line_number, self.column))

    # Forms and strings are placed at their opening delimiter but hold only
    # what is between the delimiters
    def _delimited(self, type):
        contents = self.text[self.anchor + 1:self.column]
        return Token(type, Placed(contents, self.line_number, self.anchor))

    def _rest(self):
        return Placed(self.text[self.anchor:], self.line_number, self.anchor)
