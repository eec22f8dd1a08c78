"""fibdrv core - Fibonacci engine behind a single-session file-like device."""
from .adder import bit_add, native_add, to_word
from .sequence import fib_sequence, iter_sequence
from .decimal import encode_decimal, decode_decimal, reverse_prefix
from .cursor import Cursor, SeekMode
from .arbiter import AccessArbiter
from .pipeline import ReadResult, Session, read_session
from .device import DeviceBusyError, FibDevice, FibFile

__all__ = [
    "bit_add", "native_add", "to_word",
    "fib_sequence", "iter_sequence",
    "encode_decimal", "decode_decimal", "reverse_prefix",
    "Cursor", "SeekMode",
    "AccessArbiter",
    "ReadResult", "Session", "read_session",
    "DeviceBusyError", "FibDevice", "FibFile",
]
