import argparse
import logging
import os
import sys

from . import __version__
from .constants import Table
from .console import UseColours
from .errors import ReadErrors, EvalError
from .input import Input
from .main import Program
from .style import Style
from .verify import Verification, VerificationFailed

logger = logging.getLogger(__name__)

# Exit codes
SUCCESS = 0
IO_ERROR = 1                   # input could not be read, or output written
PROGRAM_ERROR = 2              # the program failed to read or run
OPTIONS_ERROR = 3
LENGTH_VERIFICATION_ERROR = 4
NO_CONSTANTS_FOUND = 4

# Largest output a single repetition may produce unless told otherwise
DEFAULT_LIMIT = 1024 * 1024


class OptionsError(Exception):
    pass


class ArgumentParser(argparse.ArgumentParser):
    """An argument parser that raises instead of exiting, so the exit code is ours."""

    def error(self, message):
        raise OptionsError(message)


def positive_int(text):
    try:
        number = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number {text!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"number must be positive, not {number}")
    return number


def build_parser():
    parser = ArgumentParser(
        prog='hexit', add_help=False, allow_abbrev=False,
        description='Hexit: a language for writing out bytes')
    parser.add_argument('files', nargs='*', metavar='FILE',
                        help="program to run, or '-' for standard input")

    meta = parser.add_argument_group('meta options')
    meta.add_argument('-?', '--help', action='store_true', help='show list of command-line options')
    meta.add_argument('-v', '--version', action='store_true', help='show version of hexit')
    meta.add_argument('--color', '--colour', dest='colour', metavar='WHEN',
                      help='when to use terminal colours (always, automatic, never)')
    meta.add_argument('--list-constants', action='store_true',
                      help='print the list of available constants, optionally filtered by FILE')
    meta.add_argument('--debug', action='store_true', help='print debug logging to standard error')

    running = parser.add_argument_group('running options')
    running.add_argument('-c', '--check-syntax', action='store_true',
                         help='instead of running, check that syntax is valid')
    running.add_argument('-e', '--expression', metavar='EXPR',
                         help='evaluate this expression instead of reading from a file')
    running.add_argument('-o', '--output', metavar='PATH',
                         help='output to this file instead of printing the results')
    running.add_argument('--limit', type=positive_int, default=DEFAULT_LIMIT, metavar='NUM',
                         help='largest number of bytes a repetition may produce')
    running.add_argument('--no-limit', action='store_true', help='do not limit repetition output')

    formatting = parser.add_argument_group('formatting options')
    formatting.add_argument('-r', '--raw', action='store_true', help='print raw bytes without formatting')
    formatting.add_argument('-P', '--prefix', metavar='STR',
                            help='string to print before each pair of hex characters')
    formatting.add_argument('-S', '--suffix', metavar='STR',
                            help='string to print after each pair of hex characters')
    formatting.add_argument('-s', '--separator', metavar='STR',
                            help='string to print between successive pairs of hex characters')
    formatting.add_argument('-l', '--lowercase', action='store_true', help='print hex characters in lowercase')

    verification = parser.add_argument_group('verification options')
    verification.add_argument('--verify-length', type=positive_int, metavar='NUM',
                              help='ensure that the output has this exact length')
    verification.add_argument('--verify-boundary', type=positive_int, metavar='NUM',
                              help='ensure that the output has a length with a given multiple')
    return parser


def configure_logging(debug=False):
    """Log debug messages to standard error if asked to, either with --debug or
    by setting HEXIT_DEBUG. Otherwise the package stays quiet."""
    if debug or os.environ.get('HEXIT_DEBUG'):
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format='%(levelname)s %(name)s: %(message)s')
        logging.getLogger('hexit').setLevel(logging.DEBUG)


def deduce_input(args):
    if args.expression is not None:
        if args.files:
            raise OptionsError("Too many input files")
        return Input.from_expression(args.expression)
    if not args.files:
        raise OptionsError("No input files")
    if len(args.files) > 1:
        raise OptionsError("Too many input files")
    return Input.from_path(args.files[0])


def deduce_verification(args):
    if args.verify_length is not None and args.verify_boundary is not None:
        raise OptionsError("Too much verification")
    if args.verify_length is not None:
        return Verification.exact_length(args.verify_length)
    if args.verify_boundary is not None:
        return Verification.multiple(args.verify_boundary)
    return Verification.anything_goes()


def location(source, error):
    placed = error.source_pos()
    if placed is None:
        return f"{source}"
    return f"{source}:{placed.line_number}:{placed.column_number}"


def read_source(source, palette):
    try:
        return source.read()
    except OSError as e:
        print(f"{source}: {palette.paint(palette.error, 'error')}: {e.strerror or e}", file=sys.stderr)
        return None
    except UnicodeDecodeError as e:
        print(f"{source}: {palette.paint(palette.error, 'error')}: not valid UTF-8 ({e.reason})",
              file=sys.stderr)
        return None


def check_syntax(source, palette):
    lines = read_source(source, palette)
    if lines is None:
        return IO_ERROR
    try:
        Program.read(lines)
    except ReadErrors as es:
        for e in es.errors:
            print(f"{location(source, e)}: {palette.paint(palette.error, 'syntax error')}: {e}")
        return PROGRAM_ERROR
    print(f"{source}: {palette.paint(palette.ok, 'Syntax OK')}")
    return SUCCESS


def run_program(source, args, palette):
    lines = read_source(source, palette)
    if lines is None:
        return IO_ERROR

    try:
        program = Program.read(lines)
    except ReadErrors as es:
        for e in es.errors:
            print(f"{location(source, e)}: {palette.paint(palette.error, 'syntax error')}: {e}",
                  file=sys.stderr)
        return PROGRAM_ERROR

    limit = None if args.no_limit else args.limit
    try:
        data = program.run(Table.builtin_set(), limit)
    except EvalError as e:
        print(f"{location(source, e)}: {palette.paint(palette.error, 'runtime error')}: {e}",
              file=sys.stderr)
        note = e.note()
        if note:
            print(f"{source}: {palette.paint(palette.note, 'note')}: {note}", file=sys.stderr)
        return PROGRAM_ERROR

    verification = deduce_verification(args)
    style = Style(args.prefix, args.suffix, args.separator, args.lowercase)

    try:
        count = write_output(data, args, style)
    except OSError as e:
        target = args.output or '<stdout>'
        print(f"{target}: {palette.paint(palette.error, 'error writing output')}: {e.strerror or e}",
              file=sys.stderr)
        return IO_ERROR

    try:
        verification.verify(count)
    except VerificationFailed as e:
        print(f"{source}: {palette.paint(palette.error, 'validation failed')}: {e}", file=sys.stderr)
        return LENGTH_VERIFICATION_ERROR

    return SUCCESS


def write_output(data, args, style):
    """Write the output bytes as requested, returning how many bytes were written."""
    if args.output:
        if args.raw:
            with open(args.output, 'wb') as file:
                return file.write(data)
        with open(args.output, 'w', encoding='utf-8') as file:
            return style.format(data, file)

    if args.raw:
        sys.stdout.flush()
        count = sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return count
    return style.format(data, sys.stdout)


def list_constants(name_filter, palette):
    found_any = False
    for name, constant in Table.builtin_set().all():
        if name_filter and name_filter not in name:
            continue
        print(f"{name} => {constant.value} ({constant.bits}-bit)")
        found_any = True

    if not found_any:
        print(f"hexit: {palette.paint(palette.error, 'No constants found')} containing {name_filter!r}",
              file=sys.stderr)
        return NO_CONSTANTS_FOUND
    return SUCCESS


def run(argv=None):
    """Run hexit with the given command-line arguments, returning the exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except OptionsError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        return OPTIONS_ERROR

    configure_logging(args.debug)
    logger.debug("Options: %s", args)
    palette = UseColours.deduce(args.colour).palette(sys.stderr)

    if args.help:
        print(parser.format_help(), end='')
        return SUCCESS

    if args.version:
        print(f"hexit v{__version__}")
        return SUCCESS

    try:
        if args.list_constants:
            if len(args.files) > 1:
                raise OptionsError("Too many constant searches")
            return list_constants(args.files[0] if args.files else None, palette)

        if args.expression is None and not args.files:
            print(parser.format_help(), end='')
            return OPTIONS_ERROR

        source = deduce_input(args)
        if args.check_syntax:
            return check_syntax(source, palette)
        deduce_verification(args)
    except OptionsError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        return OPTIONS_ERROR

    return run_program(source, args, palette)


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
