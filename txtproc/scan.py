"""Listing of the TXT files in a folder."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass

RESULT_FILE_NAMES = ("angle_analysis_result.txt", "max_angle_result.txt")

_RULE = "==========================================="


class ScanError(OSError):
    """The folder could not be read."""


@dataclass(frozen=True)
class TxtFile:
    """A TXT file found in a folder, with its size in kilobytes."""

    name: str
    size_kb: float


def is_txt_file(filename: str | None) -> bool:
    """Tell whether ``filename`` has a ``.txt`` extension and is not a result file."""
    if not filename:
        return False
    dot = filename.rfind(".")
    if dot < 0 or filename[dot:].lower() != ".txt":
        return False
    return filename.lower() not in RESULT_FILE_NAMES


def scan_txt_files(folder_path: str | os.PathLike[str]) -> list[TxtFile]:
    """Return the TXT files in ``folder_path``, sorted by name.

    Files whose size cannot be read are left out. Raises ``ScanError`` when
    the folder itself cannot be opened.
    """
    try:
        names = sorted(os.listdir(folder_path))
    except OSError as exc:
        raise ScanError(f"無法開啟資料夾: {exc.strerror or exc}") from exc

    found = []
    for name in names:
        if not is_txt_file(name):
            continue
        try:
            size = os.stat(os.path.join(folder_path, name)).st_size
        except OSError:
            continue
        found.append(TxtFile(name, size / 1024.0))
    return found


def format_scan_result(files: Iterable[TxtFile], folder_path: str | None) -> str:
    """Render a scan result as the report text shown to the user."""
    files = list(files)
    parts = [f"掃描資料夾：{folder_path if folder_path else '未知路徑'}\n{_RULE}\n"]
    if not files:
        parts.append("未找到任何 TXT 檔案\n")
        return "".join(parts)
    parts.extend(
        f"{number}. {entry.name} ({entry.size_kb:.2f} KB)\n"
        for number, entry in enumerate(files, start=1)
    )
    parts.append(f"\n{_RULE}\n總共找到 {len(files)} 個 TXT 檔案")
    return "".join(parts)