"""
清理模組 — 刪除（或 dry-run 列出）重複檔案

  - 每個檔案獨立處理，平行刪除；單一檔案失敗不影響其他檔案，也不回滾
  - dry-run 不對檔案系統做任何修改
  - 狀態輸出依傳入的排序（路徑字典序）逐行記錄，與實際刪除順序無關
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple

from .scanner import HashedEntry

logger = logging.getLogger(__name__)

STATUS_DRY_RUN = "dry-run"
STATUS_REMOVED = "removed"
STATUS_FAILED = "failed"

_STATUS_LABELS = {
    STATUS_DRY_RUN: "[DRY-RUN]",
    STATUS_REMOVED: "[REMOVED]",
    STATUS_FAILED: "[FAILED] ",
}


class ActionResult(NamedTuple):
    """單一重複檔案的處理結果"""
    path: str
    digest: bytes
    status: str
    size: int
    error: str | None = None


def _file_size(path: str) -> int:
    try:
        return os.path.getsize(path)
    except OSError:
        return 0


def _report_one(entry: HashedEntry) -> ActionResult:
    return ActionResult(entry.path, entry.digest, STATUS_DRY_RUN, _file_size(entry.path))


def _remove_one(entry: HashedEntry) -> ActionResult:
    """Worker for deletion. I/O errors are captured in the result."""
    size = _file_size(entry.path)
    try:
        os.remove(entry.path)
    except OSError as e:
        return ActionResult(entry.path, entry.digest, STATUS_FAILED, size, str(e))
    return ActionResult(entry.path, entry.digest, STATUS_REMOVED, size)


def log_result(result: ActionResult) -> None:
    label = _STATUS_LABELS[result.status]
    if result.status == STATUS_FAILED:
        logger.error("%s %s: %s", label, result.path, result.error)
    else:
        logger.info("%s %s", label, result.path)
        logger.debug("  digest=%s", result.digest.hex())


def execute(
    duplicates: list[HashedEntry],
    dry_run: bool,
    workers: int | None = None,
) -> list[ActionResult]:
    """
    處理重複檔案。

    Args:
        duplicates: resolve() 回傳的已排序清單
        dry_run: True 只列出，不刪除
        workers: worker 數量（None = executor 預設）

    Returns:
        與 duplicates 相同順序的 ActionResult 清單
    """
    if not duplicates:
        return []

    action = _report_one if dry_run else _remove_one
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(action, duplicates))

    for result in results:
        log_result(result)

    return results
