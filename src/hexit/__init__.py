"""
Hexit

A small language for writing out bytes: hex pairs, strings, numbers of a
chosen width and byte order, addresses, timestamps and bit patterns.
"""

import logging

from .main import Program, run_hexit
from .constants import Table
from .errors import HexitError, ReadErrors, EvalError

__version__ = "0.1.0"
__all__ = ["Program", "run_hexit", "Table", "HexitError", "ReadErrors", "EvalError"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
