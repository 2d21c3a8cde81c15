import ipaddress
import logging
import re
from datetime import datetime, timedelta, timezone

from .tokens import WHITESPACE, ALPHANUM, FORM, OPEN, CLOSE, QUOTED, STRAY
from .ast import (
    Char, Dec, Constant, Function, StringLiteral, IPv4, IPv6, Timestamp, Float, Bits,
    MultiByteType, BitwiseFold,
    MultiByteFunction, BitwiseFunction, BitwiseNotFunction, RepeatFunction,
)
from .errors import (
    SingleHex, StrayCharacter, StrayFunctionName, InvalidFunctionName,
    InvalidRepeatAmount, InvalidForm, UnclosedFunction, NestedTooDeeply,
)

logger = logging.getLogger(__name__)

# How many argument lists may be open at once
MAX_NESTING = 128

MAX_REPEAT = 0xFFFF

FUNCTION_NAMES = {
    'be16': MultiByteFunction(MultiByteType.BE16),
    'be32': MultiByteFunction(MultiByteType.BE32),
    'be64': MultiByteFunction(MultiByteType.BE64),
    'le16': MultiByteFunction(MultiByteType.LE16),
    'le32': MultiByteFunction(MultiByteType.LE32),
    'le64': MultiByteFunction(MultiByteType.LE64),
    'and': BitwiseFunction(BitwiseFold.AND),
    'or': BitwiseFunction(BitwiseFold.OR),
    'xor': BitwiseFunction(BitwiseFold.XOR),
    'not': BitwiseNotFunction(),
}

REPEAT_PATTERN = re.compile(r'x([0-9]+)')
DECIMAL_PATTERN = re.compile(r'[0-9]+')
BITS_PATTERN = re.compile(r'b[01_]*')
FLOAT_PATTERN = re.compile(
    r'[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)', re.I)
TIMESTAMP_PATTERN = re.compile(
    r'([0-9]{4})-([0-9]{2})-([0-9]{2})[T ]([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.[0-9]{1,9})?Z?')

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_tokens(tokens):
    """Parse a flat list of tokens into a list of expressions.

    Raises the first ParseError found.
    """
    parser = Parser(tokens)
    return parser.parse()


# Parser class converts tokens into a list of expressions in a single pass.
# An argument list is read by a sub-parser that shares the token list and
# hands its position back when it reaches the closing parenthesis.
class Parser:
    def __init__(self, tokens, pos=0, function_start=None, depth=0):
        self.tokens = tokens
        self.pos = pos
        self.function_start = function_start  # Placed '(' when reading arguments
        self.depth = depth
        self.exps = []
        self.alphanum = None  # Placed run waiting for the next token

    def parse(self):
        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            logger.debug("Read token %s", token)

            if token.type == ALPHANUM:
                self._flush_alphanum()
                self.alphanum = token.placed

            elif token.type == OPEN:
                if self.alphanum is None:
                    raise StrayCharacter(token.placed)
                name = self._function_name()
                args = self._arguments(token.placed)
                self.exps.append(Function(name, args, placed=self.alphanum))
                self.alphanum = None

            elif token.type == CLOSE:
                if self.function_start is None:
                    raise StrayCharacter(token.placed)
                self._flush_alphanum()
                return self.exps

            elif token.type == FORM:
                form = parse_form(token.placed)
                if self.alphanum is None:
                    self.exps.append(form)
                else:
                    name = self._function_name()
                    self.exps.append(Function(name, [form], placed=self.alphanum))
                    self.alphanum = None

            elif token.type == QUOTED:
                self._flush_alphanum()
                chars = parse_backslashes(token.placed.contents)
                self.exps.append(StringLiteral(chars.encode('utf-8'), placed=token.placed))

            elif token.type == WHITESPACE:
                self._flush_alphanum()

            elif token.type == STRAY:
                raise StrayCharacter(token.placed)

        if self.function_start is not None:
            raise UnclosedFunction(self.function_start)

        self._flush_alphanum()
        return self.exps

    def _function_name(self):
        name = parse_function_name(self.alphanum)
        if name is None:
            raise InvalidFunctionName(self.alphanum)
        return name

    def _arguments(self, open_paren):
        if self.depth + 1 > MAX_NESTING:
            raise NestedTooDeeply(open_paren)
        sub_parser = Parser(self.tokens, self.pos, open_paren, self.depth + 1)
        args = sub_parser.parse()
        self.pos = sub_parser.pos
        return args

    # Turns a pending alphanumeric run into bytes or a constant reference
    def _flush_alphanum(self):
        if self.alphanum is None:
            return
        span = self.alphanum
        self.alphanum = None
        self.exps.extend(parse_alphanums(span))


def parse_alphanums(span):
    """Interpret an alphanumeric run that is not followed by arguments.

    A run is a constant name, or pairs of hex digits giving one byte each.
    A bare function name is an error here.
    """
    text = span.contents

    if is_constant_name(text):
        return [Constant(text, placed=span)]

    if parse_function_name(span) is not None:
        raise StrayFunctionName(span)

    exps = []
    for index in range(0, len(text), 2):
        first = text[index]
        if not is_hex_digit(first):
            raise StrayCharacter(span.substring(index, 1))
        if index + 1 == len(text):
            raise SingleHex(span.substring(index, 1))
        second = text[index + 1]
        if not is_hex_digit(second):
            raise StrayCharacter(span.substring(index + 1, 1))
        exps.append(Char(int(first + second, 16), placed=span.substring(index, 2)))
    return exps


def is_hex_digit(char):
    return char in '0123456789abcdefABCDEF'


def is_constant_name(text):
    """Whether text is an uppercase name containing an underscore, like DNS_AAAA."""
    return (len(text) >= 3
            and '_' in text
            and 'A' <= text[0] <= 'Z'
            and all('A' <= c <= 'Z' or '0' <= c <= '9' or c == '_' for c in text[1:]))


def parse_function_name(span):
    """Return the FunctionName for a run, or None if it names no function.

    Raises InvalidRepeatAmount for a repeat count of zero or one too large.
    """
    text = span.contents
    match = REPEAT_PATTERN.fullmatch(text)
    if match:
        digits = match.group(1).lstrip('0')
        if not digits or len(digits) > len(str(MAX_REPEAT)) or int(digits) > MAX_REPEAT:
            logger.warning("Invalid repeat amount %r", text)
            raise InvalidRepeatAmount(span)
        return RepeatFunction(int(digits))
    return FUNCTION_NAMES.get(text)


def parse_form(span):
    """Parse the contents of a [form] into an expression.

    The kinds of form are tried in order: decimal number, IPv4 address,
    IPv6 address, bits, floating-point number and timestamp.
    """
    text = span.contents

    if not text:
        raise InvalidForm(span)

    if DECIMAL_PATTERN.fullmatch(text):
        return Dec(text, placed=span)

    try:
        return IPv4(ipaddress.IPv4Address(text).packed, placed=span)
    except ValueError:
        pass

    # zone indices are not addresses
    if '%' not in text:
        try:
            return IPv6(ipaddress.IPv6Address(text).packed, placed=span)
        except ValueError:
            pass

    bits = parse_bit_form(text)
    if bits is not None:
        return Bits(bits, placed=span)

    number = parse_float_form(text)
    if number is not None:
        return Float(number, placed=span)

    seconds = parse_timestamp_form(text)
    if seconds is not None:
        return Timestamp(seconds, placed=span)

    raise InvalidForm(span)


def parse_bit_form(text):
    if not BITS_PATTERN.fullmatch(text):
        return None
    bits = [c == '1' for c in text[1:] if c != '_']
    return bits or None


def parse_float_form(text):
    if text.startswith('f') and FLOAT_PATTERN.fullmatch(text[1:]):
        return text[1:]
    return None


def parse_timestamp_form(text):
    match = TIMESTAMP_PATTERN.fullmatch(text)
    if not match:
        return None
    try:
        moment = datetime(*(int(g) for g in match.groups()), tzinfo=timezone.utc)
    except ValueError:
        return None
    if moment < UNIX_EPOCH:
        return None
    seconds = (moment - UNIX_EPOCH) // timedelta(seconds=1)
    return seconds & 0xFFFFFFFF


def parse_backslashes(text):
    """Unescape a quoted string: \\n, \\r and \\t are control characters, any
    other escaped character stands for itself."""
    if '\\' not in text:
        return text

    result = []
    chars = iter(text)
    for char in chars:
        if char != '\\':
            result.append(char)
            continue
        escaped = next(chars)
        result.append({'n': '\n', 'r': '\r', 't': '\t'}.get(escaped, escaped))
    return ''.join(result)
