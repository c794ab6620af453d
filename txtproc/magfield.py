"""Conversion of magnetometer ``.sec`` files to local-time magnitude tables."""

from __future__ import annotations

import math
import os
import re
import struct
import sys
from collections.abc import Sequence
from datetime import datetime, timedelta
from itertools import islice

HEADER_LINES = 13
UTC_OFFSET_HOURS = 8

_DATETIME_RE = re.compile(
    r"\s*(\d{1,4})-(\d{1,2})-(\d{1,2})\s+(\d{1,2}):(\d{1,2}):(\d{1,2})(?:\.(\S{1,3}))?"
)


def _f32(value: float) -> float:
    """Round to single precision, the precision the data is stored in."""
    return struct.unpack("f", struct.pack("f", value))[0]


def calculate_magnitude(x: float, y: float, z: float) -> float:
    """Return the field strength of the vector (x, y, z)."""
    x, y, z = _f32(x), _f32(y), _f32(z)
    return _f32(math.sqrt(x * x + y * y + z * z))


def _parse(date_time: str) -> tuple[int, int, int, int, int, int, str]:
    match = _DATETIME_RE.match(date_time)
    if not match:
        raise ValueError(f"unrecognised date and time: {date_time!r}")
    *numbers, millis = match.groups()
    year, month, day, hour, minute, second = (int(n) for n in numbers)
    return year, month, day, hour, minute, second, millis or ""


def convert_to_utc8(date_time: str) -> str:
    """Shift a ``YYYY-MM-DD HH:MM:SS.mmm`` UTC time to UTC+8, keeping the milliseconds."""
    year, month, day, hour, minute, second, millis = _parse(date_time)
    moment = datetime(year, month, day) + timedelta(
        hours=hour + UTC_OFFSET_HOURS, minutes=minute, seconds=second
    )
    return f"{moment:%Y-%m-%d %H:%M:%S}.{millis}"


def convert_date_format(date_time: str) -> str:
    """Rewrite ``YYYY-MM-DD HH:MM:SS.mmm`` as ``MM/DD/YY HH:MM:SS``."""
    year, month, day, hour, minute, second, _ = _parse(date_time)
    return f"{month:02d}/{day:02d}/{year % 100:02d} {hour:02d}:{minute:02d}:{second:02d}"


def _parse_data_line(line: str) -> tuple[str, float, float, float] | None:
    if len(line) < 24:
        return None
    fields = line[24:].split()
    if len(fields) < 4:
        return None
    try:
        x, y, z = (float(field) for field in fields[1:4])
    except ValueError:
        return None
    return line[:24], x, y, z


def process_file(input_file: str | os.PathLike[str], output_file: str | os.PathLike[str]) -> int:
    """Convert one ``.sec`` file and return the number of data lines read.

    The header lines are skipped; each data line becomes the local time and
    the field magnitude, separated by a tab. Raises ``OSError`` when a file
    cannot be opened.
    """
    with open(input_file, encoding="utf-8", errors="replace") as src:
        with open(output_file, "w", encoding="utf-8") as out:
            for _ in islice(src, HEADER_LINES):
                pass
            print("\n開始處理數據...")
            line_count = 0
            for line in src:
                line_count += 1
                parsed = _parse_data_line(line)
                if parsed is None:
                    continue
                date_time, x, y, z = parsed
                try:
                    stamp = convert_date_format(convert_to_utc8(date_time))
                except ValueError:
                    continue
                out.write(f"{stamp}\t{calculate_magnitude(x, y, z):f}\n")
    print(f"總共處理了{line_count}行數據")
    return line_count


def process_directory(directory: str | os.PathLike[str]) -> list[str]:
    """Convert every regular ``.sec`` file in ``directory`` to a ``.txt`` file.

    Returns the paths written. Files that fail are reported on stderr and
    skipped; ``OSError`` is raised when the directory cannot be read.
    """
    written = []
    for name in os.listdir(directory):
        if ".sec" not in name:
            continue
        input_path = os.path.join(directory, name)
        print(f"正在處理文件: {input_path}")
        if not os.path.isfile(input_path):
            print(f"無法獲取文件信息: {input_path}", file=sys.stderr)
            continue
        stem = name[: name.rfind(".")] if name.endswith(".sec") else name
        output_path = os.path.join(directory, f"{stem}.txt")
        try:
            process_file(input_path, output_path)
        except OSError as exc:
            print(f"無法處理文件 {input_path}: {exc.strerror or exc}", file=sys.stderr)
            continue
        written.append(output_path)
    print("資料夾中的文本文件已處理完畢。")
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter on the directory named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("使用方法: magfield <目錄>")
        return 1
    try:
        process_directory(args[0])
    except OSError as exc:
        print(f"無法開啟目錄: {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())