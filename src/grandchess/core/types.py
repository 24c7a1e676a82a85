"""Square type alias and coordinate helpers.

Squares are ``(file, rank)`` tuples, 0-indexed from White's lower-left
corner. Files are named with bijective base-26 letters so that boards wider
than 26 files stay readable::

    0 -> a, 25 -> z, 26 -> aa, 27 -> ab, ..., 98 -> cu
"""

from __future__ import annotations

import re
from typing import TypeAlias

Square: TypeAlias = tuple[int, int]

MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 99
STANDARD_BOARD_SIZE = 8
DEFAULT_BOARD_SIZE = 26

_SQUARE_RE = re.compile(r"^([a-z]+)([1-9][0-9]*)$")


def is_valid_size(size: int) -> bool:
    return MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE


def on_board(sq: Square, size: int) -> bool:
    """Whether *sq* lies on a ``size x size`` board."""
    return 0 <= sq[0] < size and 0 <= sq[1] < size


def file_label(file: int) -> str:
    """File letters, e.g. 0 -> 'a', 26 -> 'aa'."""
    if file < 0:
        raise ValueError(f"Invalid file index: {file}")
    label = ""
    n = file + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = chr(ord("a") + rem) + label
    return label


def parse_file_label(label: str) -> int:
    """Inverse of :func:`file_label`."""
    if not label or not label.isalpha() or not label.islower():
        raise ValueError(f"Invalid file label: {label!r}")
    n = 0
    for ch in label:
        n = n * 26 + (ord(ch) - ord("a") + 1)
    return n - 1


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (4, 3) -> 'e4'."""
    return f"{file_label(sq[0])}{sq[1] + 1}"


def parse_square(name: str, size: int | None = None) -> Square:
    """Parse a square name, e.g. 'e4' -> (4, 3).

    When *size* is given the square must also lie on that board.
    """
    match = _SQUARE_RE.match(name)
    if match is None:
        raise ValueError(f"Invalid square name: {name!r}")
    sq = (parse_file_label(match.group(1)), int(match.group(2)) - 1)
    if size is not None and not on_board(sq, size):
        raise ValueError(f"Square {name!r} is off a {size}x{size} board")
    return sq


def center_distance(sq: Square, size: int) -> int:
    """Manhattan distance from the board's centre square."""
    center = size // 2
    return abs(sq[0] - center) + abs(sq[1] - center)
