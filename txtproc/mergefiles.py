"""Merging of survey line files in a folder, ordered by their line number."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence

MERGED_FILE_NAME = "merged_file.txt"
LINE_FIELD_INDEX = 14

_SPACE = " \t\n\v\f\r"
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


def _open_text(path: str | os.PathLike[str], mode: str = "r"):
    return open(path, mode, encoding="utf-8", errors="surrogateescape", newline="")


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def line_number_from_file(filename: str | os.PathLike[str]) -> int | None:
    """Return the line number held in the fifteenth field of the second line.

    Fields are separated by spaces. Returns ``None`` when the file cannot be
    opened or has no such field.
    """
    try:
        stream = _open_text(filename)
    except OSError as exc:
        print(f"無法打開檔案: {exc.strerror or exc}", file=sys.stderr)
        return None
    with stream:
        if not stream.readline():
            return None
        second = stream.readline()
    if not second:
        return None
    fields = [field for field in second.split(" ") if field]
    if len(fields) <= LINE_FIELD_INDEX:
        return None
    return _atoi(fields[LINE_FIELD_INDEX])


def is_header_line(line: str) -> bool:
    """Tell whether ``line`` holds more letters than other visible characters."""
    letters = sum(1 for ch in line if ch.isascii() and ch.isalpha())
    others = sum(
        1 for ch in line if not (ch.isascii() and ch.isalpha()) and ch not in _SPACE
    )
    return letters > others


def merge_directory(directory_path: str | os.PathLike[str]) -> str:
    """Merge the regular files of a folder into ``merged_file.txt`` there.

    Files are ordered by their line number; files without one are left out.
    A header line is written only for the first file that has one. Returns
    the merged file's path; raises ``OSError`` when the folder cannot be read
    or the merged file cannot be created.
    """
    entries = []
    for name in sorted(os.listdir(directory_path)):
        full_path = os.path.join(directory_path, name)
        if not os.path.isfile(full_path):
            continue
        number = line_number_from_file(full_path)
        if number is not None:
            entries.append((number, full_path))
    entries.sort(key=lambda entry: entry[0])

    output_path = os.path.join(directory_path, MERGED_FILE_NAME)
    header_written = False
    with _open_text(output_path, "w") as merged:
        for _, path in entries:
            try:
                source = _open_text(path)
            except OSError:
                continue
            with source:
                first = source.readline()
                if not first:
                    continue
                if is_header_line(first):
                    if not header_written:
                        merged.write(first)
                        header_written = True
                else:
                    merged.write(first)
                for line in source:
                    merged.write(line)
    return output_path


def main(argv: Sequence[str] | None = None) -> int:
    """Merge the files of the folder named on the command line, or of the current one."""
    args = list(sys.argv[1:] if argv is None else argv)
    directory = args[0] if args else "."
    try:
        merge_directory(directory)
    except FileNotFoundError as exc:
        print(f"無法打開資料夾: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except NotADirectoryError as exc:
        print(f"無法打開資料夾: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"無法創建合併檔案: {exc.strerror or exc}", file=sys.stderr)
        return 1
    print(f"檔案已成功合併到 '{MERGED_FILE_NAME}'。")
    return 0


if __name__ == "__main__":
    sys.exit(main())