# errors.py
# The exception hierarchy shared by every stage of the pipeline. Each error
# knows where in the source it happened (when that is known) and may carry a
# note with a hint for the user.


def quoted(text):
    """Render text between double quotes with quotes and control characters escaped."""
    escaped = (text.replace('\\', '\\\\').replace('"', '\\"')
               .replace('\n', '\\n').replace('\r', '\\r').replace('\t', '\\t'))
    return f'"{escaped}"'


class HexitError(Exception):
    """Base class for all Hexit errors."""

    def __init__(self, placed=None):
        self.placed = placed
        super().__init__(self.message())

    def message(self):
        raise NotImplementedError

    def source_pos(self):
        """Return the Placed span the error points at, or None."""
        return self.placed

    def note(self):
        return None

    def __str__(self):
        return self.message()

    def __eq__(self, other):
        return (type(self) is type(other)
                and self.placed == other.placed
                and self.message() == other.message())

    def __hash__(self):
        return hash((type(self).__name__, self.message()))

    def __repr__(self):
        return f"{type(self).__name__}({self.message()!r}, {self.placed!r})"


# Errors raised while lexing a single line

class LexError(HexitError):
    pass


class UnclosedString(LexError):
    def message(self):
        return f"Unclosed string {quoted(self.placed.contents)}"


class UnclosedForm(LexError):
    def message(self):
        return f"Unclosed form {quoted(self.placed.contents)}"


# Errors raised while parsing the token stream

class ParseError(HexitError):
    pass


class SingleHex(ParseError):
    def message(self):
        return f"Unpaired hex character {quoted(self.placed.contents)}"


class StrayCharacter(ParseError):
    def message(self):
        return f"Stray character {quoted(self.placed.contents)}"


class StrayFunctionName(ParseError):
    def message(self):
        return f"Function name {quoted(self.placed.contents)} not followed by arguments"


class InvalidFunctionName(ParseError):
    def message(self):
        return f"Invalid function name {quoted(self.placed.contents)}"


class InvalidRepeatAmount(ParseError):
    def message(self):
        return f"Invalid repeat amount {quoted(self.placed.contents)}"


class InvalidForm(ParseError):
    def message(self):
        return f"Could not interpret form {quoted(self.placed.contents)}"


class UnclosedFunction(ParseError):
    # placed points at the opening parenthesis
    def message(self):
        return "Unclosed function"


class NestedTooDeeply(ParseError):
    def message(self):
        return "Nested too deeply!"


# Errors raised while reading whole programs

class ReadError(HexitError):
    pass


class UnknownChar(ReadError):
    def message(self):
        return f"Unknown character {quoted(self.placed.contents)}"


class ReadErrors(HexitError):
    """Every error found while reading a program, at most one per line."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(self.errors[0].placed if self.errors else None)

    def message(self):
        return '; '.join(e.message() for e in self.errors)

    def __eq__(self, other):
        return isinstance(other, ReadErrors) and self.errors == other.errors

    def __hash__(self):
        return hash(tuple(self.errors))


# Reasons a number was too big, used by the evaluation errors below

class LargeNumber:
    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash(str(self))

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"


class Known(LargeNumber):
    """A value with a known width was too big for its target."""

    def __init__(self, width, number):
        self.width = width
        self.number = number

    def __str__(self):
        return f"{self.width}-byte number ‘{self.number}’"


class FoundRawNumber(LargeNumber):
    def __init__(self, text):
        self.text = text

    def __str__(self):
        return f"Decimal number ‘{self.text}’"


class FoundRawFloat(LargeNumber):
    def __init__(self, text):
        self.text = text

    def __str__(self):
        return f"Floating-point number ‘{self.text}’"


class FoundBits(LargeNumber):
    def __init__(self, length):
        self.length = length

    def __str__(self):
        return f"Bit set of length {self.length}"


# Errors raised while evaluating expressions

class EvalError(HexitError):
    pass


class TopLevelBigDecimal(EvalError):
    def __init__(self, reason, placed=None):
        self.reason = reason
        super().__init__(placed)

    def message(self):
        return f"{self.reason} does not fit in one byte"

    def note(self):
        if isinstance(self.reason, FoundRawNumber):
            return ("Top-level multi-byte values must be given an endianness "
                    "using a function such as ‘be16’ or ‘le32’")
        if isinstance(self.reason, FoundRawFloat):
            return ("Top-level floating point values must be given an endianness "
                    "and width using a function such as ‘be32’ or ‘le64’")
        return None


class TooBigDecimal(EvalError):
    def __init__(self, reason, placed=None):
        self.reason = reason
        super().__init__(placed)

    def message(self):
        return f"{self.reason} is too big for target"


class UnknownConstant(EvalError):
    def __init__(self, name, placed=None):
        self.name = name
        super().__init__(placed)

    def message(self):
        return f"Unknown constant ‘{self.name}’"


class InvalidArgs(EvalError):
    def __init__(self, reason, placed=None):
        self.reason = reason
        super().__init__(placed)

    def message(self):
        return f"Invalid arguments: {self.reason}"


class TooMuchOutput(EvalError):
    def message(self):
        return "Too much output!"


class TooMuchRecursion(EvalError):
    def message(self):
        return "Nested too deeply!"
