from .pos import Placed

# Token types produced by the lexer
WHITESPACE = 'WHITESPACE'
ALPHANUM = 'ALPHANUM'
FORM = 'FORM'
OPEN = 'OPEN'
CLOSE = 'CLOSE'
QUOTED = 'QUOTED'
STRAY = 'STRAY'


# Token class represents a single token of one source line
# Every token except whitespace remembers where it came from
class Token:
    def __init__(self, type, placed=None):
        self.type = type      # One of the token types above
        self.placed = placed  # Placed contents, None for whitespace

    @classmethod
    def whitespace(cls):
        return cls(WHITESPACE)

    def is_colon(self):
        return self.type == STRAY and self.placed.contents == ':'

    def as_stray(self):
        """Return the placed character if this is a stray token, otherwise None."""
        if self.type == STRAY:
            return self.placed
        return None

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and self.placed == other.placed

    def __hash__(self):
        return hash((self.type, self.placed))

    def __repr__(self):
        if self.placed is None:
            return f"Token({self.type})"
        return f"Token({self.type}, {self.placed.contents!r}, line={self.placed.line_number}, col={self.placed.column_number})"

    __str__ = __repr__


def at(type, contents, line_number, column_number):
    """Shorthand for building a placed token."""
    return Token(type, Placed(contents, line_number, column_number))
