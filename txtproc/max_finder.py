"""Search of per-file angle analysis results for the global maximum."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass

from txtproc.lines import read_lines

_FILE_PREFIX = "File: "
_PROFILE_PREFIX = "Profile with maximum angle difference: "
_DIFF_PREFIX = "Angle difference: "

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class MaxFinderError(Exception):
    """The analysis result could not be read or held no usable entries."""


@dataclass(frozen=True)
class GlobalMaxResult:
    """The file and profile with the largest angle difference."""

    filename: str
    profile: int
    max_diff: float

    def report(self) -> str:
        """Render the result in the output file's format."""
        return (
            "Global Maximum Angle Difference Analysis Result\n"
            "===============================================\n"
            f"File with maximum angle difference: {self.filename}\n"
            f"Profile with maximum angle difference: {self.profile}\n"
            f"Maximum angle difference: {self.max_diff:.6f}\n"
        )


def _leading_int(text: str) -> int | None:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else None


def _leading_float(text: str) -> float | None:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else None


def find_global_max(lines: Iterable[str]) -> GlobalMaxResult | None:
    """Find the largest positive angle difference in analysis result lines.

    An angle difference counts only after a ``File:`` line and a valid
    profile line for that file. Ties keep the first entry. Returns ``None``
    when no entry qualifies.
    """
    best: GlobalMaxResult | None = None
    best_diff = 0.0
    current_file: str | None = None
    current_profile = -1

    for line in lines:
        if line.startswith(_FILE_PREFIX):
            current_file = line[len(_FILE_PREFIX):].rstrip("\r\n")
            current_profile = -1
        elif line.startswith(_PROFILE_PREFIX):
            value = _leading_int(line[len(_PROFILE_PREFIX):])
            current_profile = -1 if value is None else value
        elif line.startswith(_DIFF_PREFIX) and current_file is not None and current_profile != -1:
            diff = _leading_float(line[len(_DIFF_PREFIX):])
            if diff is not None and diff > best_diff:
                best_diff = diff
                best = GlobalMaxResult(current_file, current_profile, diff)
    return best


def find_global_max_from_analysis_result(
    analysis_result_file_path: str | os.PathLike[str],
    output_file_path: str | os.PathLike[str],
) -> GlobalMaxResult:
    """Find the global maximum in an analysis result file and write it out.

    Raises ``MaxFinderError`` when the input cannot be read, holds no
    results, or the output cannot be written.
    """
    try:
        with open(analysis_result_file_path, encoding="utf-8", errors="replace") as stream:
            best = find_global_max(read_lines(stream))
    except OSError as exc:
        raise MaxFinderError(
            f"Failed to open analysis result file '{analysis_result_file_path}': {exc.strerror or exc}"
        ) from exc

    if best is None:
        raise MaxFinderError(
            f"No file results found in analysis result file '{analysis_result_file_path}'"
        )

    try:
        with open(output_file_path, "w", encoding="utf-8") as out:
            out.write(best.report())
    except OSError as exc:
        raise MaxFinderError(
            f"Failed to create output file '{output_file_path}': {exc.strerror or exc}"
        ) from exc
    return best