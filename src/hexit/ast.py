# Abstract Syntax Tree (AST) Node classes
# These classes represent a Hexit program after parsing. Every node may
# remember the span of source it came from; the span is not part of equality.
from enum import Enum


class Node:
    def __init__(self, placed=None):
        self.placed = placed

    def _fields(self):
        return {k: v for k, v in vars(self).items() if k != 'placed'}

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash((type(self).__name__, repr(self._fields())))

    def __repr__(self):
        fields = ', '.join(f"{k}={v!r}" for k, v in self._fields().items())
        return f"{type(self).__name__}({fields})"


# A single byte given as a pair of hex digits (e.g. AB)
class Char(Node):
    def __init__(self, byte, placed=None):
        super().__init__(placed)
        self.byte = byte


# A decimal number in a form, not yet sized (e.g. [256])
class Dec(Node):
    def __init__(self, text, placed=None):
        super().__init__(placed)
        self.text = text


# A reference to a named constant (e.g. IP_TCP)
class Constant(Node):
    def __init__(self, name, placed=None):
        super().__init__(placed)
        self.name = name


# A function call with its arguments (e.g. be16[256] or x4(AB))
class Function(Node):
    def __init__(self, name, args, placed=None):
        super().__init__(placed)
        self.name = name  # One of the FunctionName classes below
        self.args = args  # List of argument nodes


# A quoted string, already unescaped and encoded as UTF-8
class StringLiteral(Node):
    def __init__(self, chars, placed=None):
        super().__init__(placed)
        self.chars = chars  # bytes


# An IPv4 address in a form (e.g. [127.0.0.1])
class IPv4(Node):
    def __init__(self, octets, placed=None):
        super().__init__(placed)
        self.octets = octets  # 4 bytes in network order


# An IPv6 address in a form (e.g. [::1])
class IPv6(Node):
    def __init__(self, octets, placed=None):
        super().__init__(placed)
        self.octets = octets  # 16 bytes in network order


# A timestamp in a form, stored as Unix seconds (e.g. [2017-12-31T21:36:45])
class Timestamp(Node):
    def __init__(self, seconds, placed=None):
        super().__init__(placed)
        self.seconds = seconds


# A floating-point number in a form, not yet sized (e.g. [f0.5])
class Float(Node):
    def __init__(self, text, placed=None):
        super().__init__(placed)
        self.text = text


# A sequence of bits in a form, most significant first (e.g. [b1010])
class Bits(Node):
    def __init__(self, bits, placed=None):
        super().__init__(placed)
        self.bits = bits  # List of bools


class MultiByteType(Enum):
    """Endianness casts, as (byte order, width in bytes)."""
    BE16 = ('big', 2)
    BE32 = ('big', 4)
    BE64 = ('big', 8)
    LE16 = ('little', 2)
    LE32 = ('little', 4)
    LE64 = ('little', 8)

    @property
    def byteorder(self):
        return self.value[0]

    @property
    def width(self):
        return self.value[1]


class BitwiseFold(Enum):
    AND = 'and'
    OR = 'or'
    XOR = 'xor'


# Function names. Each is a small value class so names compare by value.
class FunctionName:
    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self).__name__, tuple(sorted(vars(self).items()))))

    def __repr__(self):
        fields = ', '.join(f"{v!r}" for v in vars(self).values())
        return f"{type(self).__name__}({fields})"


class MultiByteFunction(FunctionName):
    def __init__(self, type):
        self.type = type


class BitwiseFunction(FunctionName):
    def __init__(self, fold):
        self.fold = fold


class BitwiseNotFunction(FunctionName):
    pass


class RepeatFunction(FunctionName):
    def __init__(self, amount):
        self.amount = amount  # 1 to 65535
