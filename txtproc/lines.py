"""Line-by-line reading of text streams of any line length."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, AnyStr


def read_lines(stream: IO[AnyStr]) -> Iterator[AnyStr]:
    """Yield every line of ``stream``, terminator included, until end of file.

    There is no limit on line length. The last line is yielded even when it
    has no terminator; an empty stream yields nothing.
    """
    while True:
        line = stream.readline()
        if not line:
            return
        yield line