"""The whole angle analysis: per-file report followed by the global maximum search."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

from txtproc.angle_parser import OperationCancelled, process_angle_files
from txtproc.max_finder import GlobalMaxResult, MaxFinderError, find_global_max_from_analysis_result

ProgressCallback = Callable[[float, str], None]
CancelCheck = Callable[[], bool]

ANALYSIS_RESULT_NAME = "angle_analysis_result.txt"
MAX_RESULT_NAME = "max_angle_result.txt"

_RULE = "==========================================="


@dataclass(frozen=True)
class AngleWorkflowResult:
    """Outcome of an angle analysis run over a folder."""

    folder_path: str
    processed_files: int
    analysis_path: str
    max_result_path: str
    max_result: GlobalMaxResult | None = None

    @property
    def max_search_success(self) -> bool:
        """Whether a global maximum was found and written."""
        return self.max_result is not None

    @property
    def status(self) -> str:
        """Status line shown after the run."""
        if self.max_search_success:
            return "角度分析和最大角度搜尋完成！"
        return "角度分析完成，但最大角度搜尋失敗"


def run_angle_analysis(
    folder_path: str | os.PathLike[str],
    progress: ProgressCallback | None = None,
    cancel: CancelCheck | None = None,
) -> AngleWorkflowResult:
    """Analyse the TXT files of a folder and search the report for the global maximum.

    ``progress`` receives the fraction of files reached (0 to 1) and a
    message. Raises ``OperationCancelled`` when ``cancel`` asks to stop and
    ``AngleAnalysisError`` when the folder cannot be analysed.
    """
    folder = os.fspath(folder_path)

    def cancelled() -> bool:
        return cancel is not None and cancel()

    if cancelled():
        raise OperationCancelled()

    def report(current: int, total: int, filename: str) -> None:
        if progress is None or cancelled():
            return
        progress(current / total, f"處理檔案 {current}/{total}: {filename}")

    processed = process_angle_files(folder, ANALYSIS_RESULT_NAME, report, cancel)
    if cancelled():
        raise OperationCancelled()

    analysis_path = os.path.join(folder, ANALYSIS_RESULT_NAME)
    max_path = os.path.join(folder, MAX_RESULT_NAME)
    try:
        best = find_global_max_from_analysis_result(analysis_path, max_path)
    except MaxFinderError:
        best = None
    return AngleWorkflowResult(folder, processed, analysis_path, max_path, best)


def format_angle_report(result: AngleWorkflowResult) -> str:
    """Render the summary of an angle analysis run."""
    parts = ["角度分析結果:\n", f"{_RULE}\n", f"資料夾: {result.folder_path}\n\n"]
    if result.processed_files == 0:
        parts.append("未找到有效的角度資料\n")
    else:
        parts += [
            f"成功處理 {result.processed_files} 個檔案\n\n",
            f"{_RULE}\n",
            f"每個檔案的分析結果已儲存至: {ANALYSIS_RESULT_NAME}\n",
        ]
    if result.max_result is not None:
        parts += [
            "\n\n",
            f"{_RULE}\n",
            result.max_result.report(),
            f"\n結果已儲存至: {MAX_RESULT_NAME}\n",
        ]
    return "".join(parts)