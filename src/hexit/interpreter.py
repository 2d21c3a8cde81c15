# interpreter.py
# Evaluates a list of expressions into bytes. Before a value reaches the
# output its width may not be known yet (a decimal in a form, a float), so
# expressions first become "values in flight", which are turned into bytes at
# the top level or given a width and byte order by a cast function.
#
# Programs such as x9999(x9999(x9999(FF))) are short but produce huge output,
# so repetition checks an optional output limit before building anything.

import logging
import struct

import pyarrow as pa
import pyarrow.compute as pc

from .ast import (
    Char, Dec, Constant, Function, StringLiteral, IPv4, IPv6, Timestamp, Float, Bits,
    BitwiseFold, MultiByteFunction, BitwiseFunction, BitwiseNotFunction, RepeatFunction,
)
from .constants import UnknownConstantName
from .errors import (
    EvalError, TopLevelBigDecimal, TooBigDecimal, UnknownConstant, InvalidArgs,
    TooMuchOutput, TooMuchRecursion, Known, FoundRawNumber, FoundRawFloat, FoundBits,
)

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_LIMIT = 64

# Arrow integer types for each width in bytes
ARROW_TYPES = {1: pa.uint8(), 2: pa.uint16(), 4: pa.uint32(), 8: pa.uint64()}

BITWISE_KERNELS = {
    BitwiseFold.AND: pc.bit_wise_and,
    BitwiseFold.OR: pc.bit_wise_or,
    BitwiseFold.XOR: pc.bit_wise_xor,
}

WIDTH_WORDS = {2: 'two', 4: 'four', 8: 'eight'}

FLOAT_FORMATS = {4: 'f', 8: 'd'}


def evaluate_exps(exps, constants, limit=None, depth_limit=DEFAULT_DEPTH_LIMIT):
    """Evaluate expressions into the bytes they produce.

    Args:
        exps (list): Top-level expressions, as returned by the parser
        constants (Table): The constants that names are looked up in
        limit (int): Maximum number of bytes a repetition may produce, or None
        depth_limit (int): Maximum number of nested function calls

    Returns:
        bytes: The output of every expression, in order

    Raises:
        EvalError: For the first expression that cannot be evaluated
    """
    evaluator = Evaluator(constants, limit, depth_limit)
    output = bytearray()
    for exp in exps:
        logger.debug("Evaluating %r", exp)
        output.extend(evaluator.evaluate_to_bytes(exp))
    return bytes(output)


def bitwise(fold, left, right, type):
    """Apply a bitwise fold element-wise to two equal-length integer lists."""
    result = BITWISE_KERNELS[fold](pa.array(left, type=type), pa.array(right, type=type))
    return result.to_pylist()


def bitwise_not(data):
    if not data:
        return b''
    return bytes(pc.bit_wise_not(pa.array(list(data), type=pa.uint8())).to_pylist())


def parse_unsigned(text, width):
    """Parse a decimal string as an unsigned number of the given width, or None."""
    largest = (1 << (8 * width)) - 1
    digits = text.lstrip('0') or '0'
    # too many digits is rejected before int() sees them
    if len(digits) > len(str(largest)) or int(digits) > largest:
        logger.warning("Number %s does not fit in %d bytes", text, width)
        return None
    return int(digits)


def pack_float(text, width, byteorder):
    prefix = '>' if byteorder == 'big' else '<'
    number = float(text)
    try:
        return struct.pack(prefix + FLOAT_FORMATS[width], number)
    except OverflowError:
        # too large for single precision, which rounds to infinity
        infinity = float('-inf') if number < 0 else float('inf')
        return struct.pack(prefix + FLOAT_FORMATS[width], infinity)


# Values in flight

class Value:
    def to_bytes(self):
        """Turn this value into output bytes at the top level."""
        raise NotImplementedError

    def widen(self, width, byteorder):
        """Give this value a width and byte order, as the cast functions do."""
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        fields = ', '.join(f"{v!r}" for v in vars(self).values())
        return f"{type(self).__name__}({fields})"


class Byte(Value):
    def __init__(self, byte):
        self.byte = byte

    def to_bytes(self):
        return bytes([self.byte])

    def widen(self, width, byteorder):
        return VariableBytes(self.byte.to_bytes(width, byteorder))


class VariableBytes(Value):
    """A sequence of bytes of known length. It has no byte order to change."""

    def __init__(self, data):
        self.data = bytes(data)

    def to_bytes(self):
        return self.data

    def widen(self, width, byteorder):
        raise InvalidArgs(f"Tried to turn variable bytes ({list(self.data)}) into {width} bytes")


class MultiByte(Value):
    """A number of known width (2, 4 or 8 bytes) but no byte order yet."""

    def __init__(self, width, number):
        self.width = width
        self.number = number

    def to_bytes(self):
        raise TopLevelBigDecimal(Known(self.width, self.number))

    def widen(self, width, byteorder):
        if self.width > width:
            raise InvalidArgs(
                f"Tried to turn {WIDTH_WORDS[self.width]} bytes ({self.number}) into {width} bytes")
        return VariableBytes(self.number.to_bytes(width, byteorder))


class RawNumber(Value):
    """A decimal number whose width is decided by where it is used."""

    def __init__(self, text):
        self.text = text

    def to_bytes(self):
        number = parse_unsigned(self.text, 1)
        if number is None:
            raise TopLevelBigDecimal(FoundRawNumber(self.text))
        return bytes([number])

    def widen(self, width, byteorder):
        number = parse_unsigned(self.text, width)
        if number is None:
            raise TooBigDecimal(FoundRawNumber(self.text))
        return VariableBytes(number.to_bytes(width, byteorder))


class RawFloat(Value):
    """A floating-point number; it can only become 4 or 8 bytes wide."""

    def __init__(self, text):
        self.text = text

    def to_bytes(self):
        raise TopLevelBigDecimal(FoundRawFloat(self.text))

    def widen(self, width, byteorder):
        if width not in FLOAT_FORMATS:
            raise TooBigDecimal(FoundRawFloat(self.text))
        return VariableBytes(pack_float(self.text, width, byteorder))


def apply_bitwise(fold, left, right):
    """Combine two values with a bitwise fold.

    Bytes combine with bytes, multi-byte numbers with numbers of the same
    width, and byte sequences with sequences of the same length.
    """
    verb = f"{fold.name}ing"

    if isinstance(left, Byte) and isinstance(right, Byte):
        result, = bitwise(fold, [left.byte], [right.byte], ARROW_TYPES[1])
        return Byte(result)

    if isinstance(left, MultiByte) and isinstance(right, MultiByte) and left.width == right.width:
        result, = bitwise(fold, [left.number], [right.number], ARROW_TYPES[left.width])
        return MultiByte(left.width, result)

    if isinstance(left, VariableBytes) and isinstance(right, VariableBytes):
        if len(left.data) != len(right.data):
            raise InvalidArgs(
                f"{verb} together bytestrings of different lengths "
                f"({len(left.data)} and {len(right.data)})")
        if not left.data:
            return VariableBytes(b'')
        return VariableBytes(bitwise(fold, list(left.data), list(right.data), ARROW_TYPES[1]))

    if isinstance(left, RawNumber) and isinstance(right, RawNumber):
        raise InvalidArgs(f"{verb} together two raw numbers ({left.text} and {right.text})")

    raise InvalidArgs(f"{verb} together two weird things ({left!r} and {right!r})")


# Evaluator walks the expression tree, turning each expression into a value
class Evaluator:
    def __init__(self, constants, limit=None, depth_limit=DEFAULT_DEPTH_LIMIT):
        self.constants = constants
        self.limit = limit
        self.depth_limit = depth_limit

    def evaluate_to_bytes(self, exp, depth=0):
        value = self.evaluate(exp, depth)
        try:
            return value.to_bytes()
        except EvalError as e:
            self._place(e, exp)
            raise

    def evaluate(self, exp, depth=0):
        """Turn one expression into a value in flight."""
        try:
            return self._evaluate(exp, depth)
        except EvalError as e:
            self._place(e, exp)
            raise

    def _place(self, error, exp):
        # errors point at the innermost expression that knows its position
        if error.placed is None:
            error.placed = exp.placed

    def _evaluate(self, exp, depth):
        if isinstance(exp, Char):
            return Byte(exp.byte)

        if isinstance(exp, Dec):
            return RawNumber(exp.text)

        if isinstance(exp, Constant):
            try:
                constant = self.constants.lookup(exp.name)
            except UnknownConstantName:
                raise UnknownConstant(exp.name) from None
            if constant.bits == 8:
                return Byte(constant.value)
            return MultiByte(2, constant.value)

        if isinstance(exp, Function):
            return self.run_function(exp.name, exp.args, depth + 1)

        if isinstance(exp, StringLiteral):
            return VariableBytes(exp.chars)

        if isinstance(exp, (IPv4, IPv6)):
            return VariableBytes(exp.octets)

        if isinstance(exp, Timestamp):
            return MultiByte(4, exp.seconds)

        if isinstance(exp, Float):
            return RawFloat(exp.text)

        if isinstance(exp, Bits):
            return self._bits(exp.bits)

        raise TypeError(f"Cannot evaluate {exp!r}")

    def _bits(self, bits):
        number = 0
        for bit in bits:
            number = (number << 1) | int(bit)

        length = len(bits)
        if length <= 8:
            return Byte(number)
        for width in (2, 4, 8):
            if length <= width * 8:
                return MultiByte(width, number)
        raise TopLevelBigDecimal(FoundBits(length))

    def run_function(self, name, args, depth):
        """Run a function on its arguments, which are evaluated here."""
        if depth > self.depth_limit:
            raise TooMuchRecursion()

        logger.debug("Running function %r with %d arguments", name, len(args))

        if isinstance(name, MultiByteFunction):
            if len(args) != 1:
                raise InvalidArgs(f"Pass only 1 arg, not {len(args)}")
            value = self.evaluate(args[0], depth)
            try:
                return value.widen(name.type.width, name.type.byteorder)
            except EvalError as e:
                self._place(e, args[0])
                raise

        if isinstance(name, RepeatFunction):
            template = self._concatenate(args, depth)
            if self.limit is not None and self.limit <= len(template) * name.amount:
                raise TooMuchOutput()
            return VariableBytes(template * name.amount)

        if isinstance(name, BitwiseFunction):
            if not args:
                raise InvalidArgs(f"No arguments for {name.fold.value} function")
            result = self.evaluate(args[0], depth)
            for arg in args[1:]:
                result = apply_bitwise(name.fold, result, self.evaluate(arg, depth))
            return result

        if isinstance(name, BitwiseNotFunction):
            return VariableBytes(bitwise_not(self._concatenate(args, depth)))

        raise TypeError(f"Unknown function {name!r}")

    def _concatenate(self, args, depth):
        data = bytearray()
        for arg in args:
            data.extend(self.evaluate_to_bytes(arg, depth))
        return bytes(data)
