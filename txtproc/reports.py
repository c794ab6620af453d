"""Folder scan reports for display."""

from __future__ import annotations

import os

from txtproc.scan import ScanError, format_scan_result, scan_txt_files


def scan_report(folder_path: str | os.PathLike[str] | None) -> tuple[str, str]:
    """Scan ``folder_path`` for TXT files and return ``(report_text, status)``.

    When no folder is given the report is empty and the status asks for one;
    when the folder cannot be read both hold the failure message.
    """
    if not folder_path:
        return "", "請先選擇一個資料夾！"
    try:
        files = scan_txt_files(folder_path)
    except ScanError as exc:
        message = f"掃描失敗: {exc}"
        return message, message

    text = format_scan_result(files, os.fspath(folder_path))
    if files:
        status = f"掃描完成，找到 {len(files)} 個 TXT 檔案"
    else:
        status = "掃描完成，未找到 TXT 檔案"
    return text, status