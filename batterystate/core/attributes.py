"""Reading single power-supply attribute files."""

import logging
import os
import re
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

TEXT_SIZE = 128
BOOL_SIZE = 16

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def read_attribute(path: Optional[Path], size: int = TEXT_SIZE) -> Optional[str]:
    """Read at most ``size`` bytes of an attribute file.

    Returns the text with trailing newlines removed, ``""`` for an empty
    file, or ``None`` when the path is unset or the file can't be read.
    """
    if path is None:
        return None
    try:
        with open(path, "rb") as f:
            data = f.read(size)
    except OSError as e:
        log.warning("Could not open '%s': %s", path, e)
        return None
    return data.decode("ascii", errors="replace").rstrip("\n")


def read_bool(path: Optional[Path]) -> bool:
    """Empty, unreadable or ``0``-prefixed content reads as False."""
    text = read_attribute(path, BOOL_SIZE)
    return bool(text) and text[0] != "0"


def parse_int(text: Optional[str], default: int = 0) -> int:
    """Leading decimal integer of ``text``, or ``default``."""
    if not text:
        return default
    m = _LEADING_INT.match(text)
    if m is None:
        log.debug("Non-numeric attribute content %r", text)
        return default
    return int(m.group(1))


def read_int(path: Optional[Path], default: int = 0) -> int:
    return parse_int(read_attribute(path, TEXT_SIZE), default)


def is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)
