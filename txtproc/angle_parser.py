"""Per-profile angle ranges from TXT data files and per-file maximum reports."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from txtproc.lines import read_lines
from txtproc.scan import RESULT_FILE_NAMES, ScanError, scan_txt_files

ProgressCallback = Callable[[int, int, str], None]
CancelCheck = Callable[[], bool]

CANCEL_CHECK_INTERVAL = 1000

_RESULT_KEYWORDS = ("result", "output", "Result", "Output")

_LINE_RE = re.compile(
    r"\s*([+-]?\d+)(?!\d)"
    r"\s*([+-]?\d+)(?!\d)"
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_REPORT_HEADER = (
    "Maximum Angle Difference Analysis Results (Per File)\n"
    "=====================================================\n\n"
)


class AngleAnalysisError(Exception):
    """Angle data could not be read or the analysis could not be written."""


class OperationCancelled(AngleAnalysisError):
    """The analysis was stopped at the caller's request."""

    def __init__(self, message: str = "操作已取消") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class AngleData:
    """One data point: profile number, bin number and angle."""

    first_num: int
    second_num: int
    third_num: float


@dataclass
class AngleRange:
    """The angles found at the lowest and highest bin of one profile."""

    first_num: int
    min_second: int
    max_second: int
    min_third: float
    max_third: float

    @property
    def angle_diff(self) -> float:
        """Absolute difference between the angles at the two extreme bins."""
        return abs(self.max_third - self.min_third)

    def update(self, data: AngleData) -> None:
        """Widen the range with a new data point of the same profile."""
        if data.second_num < self.min_second:
            self.min_second = data.second_num
            self.min_third = data.third_num
        if data.second_num > self.max_second:
            self.max_second = data.second_num
            self.max_third = data.third_num


def is_result_file(filename: str | None) -> bool:
    """Tell whether ``filename`` is an output of the analysis rather than data."""
    if not filename:
        return False
    if filename in RESULT_FILE_NAMES:
        return True
    return any(keyword in filename for keyword in _RESULT_KEYWORDS)


def parse_angle_line(line: str) -> AngleData | None:
    """Parse ``<profile> <bin> <angle>`` from the start of ``line``.

    Returns ``None`` for empty and comment lines, lines that do not start
    with the three numbers, negative profile or bin numbers, and angles
    that are not finite.
    """
    if not line or line[0] in "#\n":
        return None
    match = _LINE_RE.match(line)
    if not match:
        return None
    first, second, third = int(match.group(1)), int(match.group(2)), float(match.group(3))
    if first < 0 or second < 0 or not math.isfinite(third):
        return None
    return AngleData(first, second, third)


def parse_angle_lines(
    lines: Iterable[str], cancel: CancelCheck | None = None
) -> list[AngleRange]:
    """Collect one ``AngleRange`` per profile, in order of first appearance.

    ``cancel`` is consulted every thousand lines; ``OperationCancelled`` is
    raised when it returns true.
    """
    ranges: dict[int, AngleRange] = {}
    for number, line in enumerate(lines, start=1):
        if cancel is not None and number % CANCEL_CHECK_INTERVAL == 0 and cancel():
            raise OperationCancelled()
        data = parse_angle_line(line)
        if data is None:
            continue
        existing = ranges.get(data.first_num)
        if existing is None:
            ranges[data.first_num] = AngleRange(
                data.first_num, data.second_num, data.second_num, data.third_num, data.third_num
            )
        else:
            existing.update(data)
    return list(ranges.values())


def parse_angle_file(
    file_path: str | os.PathLike[str], cancel: CancelCheck | None = None
) -> list[AngleRange]:
    """Read a data file and return its angle ranges.

    Raises ``AngleAnalysisError`` when the file cannot be opened or read and
    ``OperationCancelled`` when ``cancel`` asks to stop.
    """
    try:
        stream = open(file_path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise AngleAnalysisError(f"無法開啟檔案: {file_path}") from exc
    with stream:
        try:
            return parse_angle_lines(read_lines(stream), cancel)
        except OSError as exc:
            raise AngleAnalysisError(f"讀取檔案時發生錯誤: {file_path}") from exc


def best_range(ranges: Iterable[AngleRange]) -> AngleRange | None:
    """Return the range with the largest positive angle difference; ties keep the first."""
    best = None
    best_diff = 0.0
    for candidate in ranges:
        if candidate.angle_diff > best_diff:
            best_diff = candidate.angle_diff
            best = candidate
    return best


def _file_report(filename: str, best: AngleRange | None) -> str:
    if best is None:
        profile, diff, min_angle, max_angle, min_bin, max_bin = -1, 0.0, 0.0, 0.0, -1, -1
    else:
        profile, diff = best.first_num, best.angle_diff
        min_angle, max_angle = best.min_third, best.max_third
        min_bin, max_bin = best.min_second, best.max_second
    return (
        f"File: {filename}\n"
        f"Profile with maximum angle difference: {profile}\n"
        f"Angle difference: {diff:.6f}\n"
        f"Min angle: {min_angle:.6f} (bin {min_bin})\n"
        f"Max angle: {max_angle:.6f} (bin {max_bin})\n"
        f"Bin range: {min_bin} ~ {max_bin}\n"
        "\n"
    )


def process_angle_files(
    folder_path: str | os.PathLike[str],
    output_file: str,
    progress: ProgressCallback | None = None,
    cancel: CancelCheck | None = None,
) -> int:
    """Analyse every TXT file in ``folder_path`` and write a per-file report.

    The report goes to ``output_file`` inside the folder. ``progress`` is
    called with the file's position, the number of files and its name.
    Returns the number of files that held angle data. Raises
    ``AngleAnalysisError`` when the folder cannot be scanned or the report
    cannot be created, and ``OperationCancelled`` when ``cancel`` asks to
    stop before a file.
    """
    if folder_path is None or output_file is None:
        raise AngleAnalysisError("資料夾路徑或輸出檔案名稱為空")
    try:
        files = scan_txt_files(folder_path)
    except ScanError as exc:
        raise AngleAnalysisError(f"掃描資料夾失敗: {exc}") from exc

    output_path = os.path.join(folder_path, output_file)
    try:
        out = open(output_path, "w", encoding="utf-8")
    except OSError as exc:
        raise AngleAnalysisError(f"無法創建輸出檔案: {output_path}") from exc

    processed = 0
    total = len(files)
    with out:
        out.write(_REPORT_HEADER)
        for position, entry in enumerate(files, start=1):
            if cancel is not None and cancel():
                raise OperationCancelled()
            if is_result_file(entry.name):
                continue
            if progress is not None:
                progress(position, total, entry.name)
            try:
                ranges = parse_angle_file(os.path.join(folder_path, entry.name), cancel)
            except AngleAnalysisError:
                continue
            if not ranges:
                continue
            out.write(_file_report(entry.name, best_range(ranges)))
            processed += 1
    return processed