# Source positions attached to tokens, expressions and errors
# Line numbers start at 1, column numbers start at 0 and count characters
class Placed:
    def __init__(self, contents, line_number, column_number):
        self.contents = contents
        self.line_number = line_number
        self.column_number = column_number

    def substring(self, start, length):
        """Return the piece of this span starting `start` characters in."""
        return Placed(self.contents[start:start + length],
                      self.line_number, self.column_number + start)

    def __eq__(self, other):
        if not isinstance(other, Placed):
            return NotImplemented
        return (self.contents == other.contents
                and self.line_number == other.line_number
                and self.column_number == other.column_number)

    def __hash__(self):
        return hash((self.contents, self.line_number, self.column_number))

    def __repr__(self):
        return f"Placed({self.contents!r}, line={self.line_number}, col={self.column_number})"
