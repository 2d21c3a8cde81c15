# Deciding whether to colour messages, and colouring them
import logging
import sys

from colorama import Fore, Style

logger = logging.getLogger(__name__)


class UseColours:
    ALWAYS = 'always'
    AUTOMATIC = 'automatic'
    NEVER = 'never'

    CHOICES = {
        'always': ALWAYS, 'yes': ALWAYS,
        'automatic': AUTOMATIC, 'auto': AUTOMATIC, '': AUTOMATIC,
        'never': NEVER, 'no': NEVER,
    }

    def __init__(self, setting=AUTOMATIC):
        self.setting = setting

    @classmethod
    def deduce(cls, value):
        """Interpret a --colour value; None or an unknown value means automatic."""
        value = value or ''
        if value not in cls.CHOICES:
            logger.warning("Unknown colour setting %r", value)
        return cls(cls.CHOICES.get(value, cls.AUTOMATIC))

    def should_use_colours(self, stream=None):
        stream = stream if stream is not None else sys.stderr
        if self.setting == self.ALWAYS:
            return True
        if self.setting == self.NEVER:
            return False
        return hasattr(stream, 'isatty') and stream.isatty()

    def palette(self, stream=None):
        if self.should_use_colours(stream):
            return Palette.pretty()
        return Palette.plain()


class Palette:
    def __init__(self, error='', note='', ok='', reset=''):
        self.error = error
        self.note = note
        self.ok = ok
        self.reset = reset

    @classmethod
    def pretty(cls):
        return cls(Fore.RED + Style.BRIGHT, Fore.YELLOW, Fore.GREEN, Style.RESET_ALL)

    @classmethod
    def plain(cls):
        return cls()

    def paint(self, colour, text):
        if not colour:
            return text
        return f"{colour}{text}{self.reset}"
