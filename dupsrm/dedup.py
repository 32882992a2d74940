"""
主流程 — 找出並移除參考資料夾中與根資料夾重複的檔案

流程：
  1. 驗證參數（路徑存在、兩者不可相同、正規表示式、演算法、worker 數）
  2. 掃描根資料夾（剪除參考資料夾）
  3. 掃描參考資料夾（套用檔名篩選）
  4. 判定重複並依路徑排序
  5. 刪除或 dry-run 列出

各階段依序執行；階段內才平行處理。參數錯誤一律在掃描前拋出。
"""

import logging
import os
import re
from typing import NamedTuple

from .cleaner import STATUS_FAILED, STATUS_REMOVED, execute
from .exceptions import (
    AccessDeniedError,
    DirectoryNotFoundError,
    IdenticalDirectoriesError,
    InvalidParameterError,
)
from .hasher import HashAlgorithm, get_hasher
from .paths import canonicalize, is_subdirectory
from .resolver import resolve
from .scanner import scan_tree
from .utils import format_size

logger = logging.getLogger(__name__)


class DedupSummary(NamedTuple):
    """一次執行的結果統計"""
    duplicates: int
    removed: int
    failed: int
    bytes_freed: int
    dry_run: bool


def _validate_dir(path: str, label: str) -> str:
    if not os.path.exists(path):
        raise DirectoryNotFoundError(
            f"{label} directory: No such file or directory: {path}"
        )
    if not os.path.isdir(path):
        raise DirectoryNotFoundError(f"{label} directory: Not a directory: {path}")
    if not os.access(path, os.R_OK):
        raise AccessDeniedError(f"{label} directory: No read permission: {path}")
    return canonicalize(path)


def validate_dirs(reference_dir: str, root_dir: str) -> tuple[str, str]:
    """
    驗證並標準化兩個資料夾路徑。

    Returns:
        (reference_dir, root_dir) 標準化絕對路徑

    Raises:
        DirectoryNotFoundError: 資料夾不存在或不是資料夾
        AccessDeniedError: 權限不足
        IdenticalDirectoriesError: 兩者解析後為同一路徑
    """
    reference = _validate_dir(reference_dir, "Reference")
    root = _validate_dir(root_dir, "Root")
    if os.path.normcase(reference) == os.path.normcase(root):
        raise IdenticalDirectoriesError(
            f"Reference directory must not be identical to root directory: {root}"
        )
    return reference, root


def compile_name_filter(pattern: "str | re.Pattern | None") -> "re.Pattern | None":
    """
    編譯檔名篩選正規表示式。

    Raises:
        InvalidParameterError: 正規表示式格式錯誤
    """
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidParameterError(f"Invalid regular expression {pattern!r}: {e}")


def remove_duplicates(
    reference_dir: str,
    root_dir: str,
    dry_run: bool = False,
    name_filter: "str | re.Pattern | None" = None,
    algorithm: "str | HashAlgorithm" = HashAlgorithm.SHA2_256,
    workers: int | None = None,
) -> DedupSummary:
    """
    主流程。

    Args:
        reference_dir: 參考資料夾（其中的重複檔案會被刪除）
        root_dir: 根資料夾（搜尋範圍，不含參考資料夾本身）
        dry_run: True 只列出，不刪除
        name_filter: 只處理路徑符合此正規表示式的參考資料夾檔案
        algorithm: hash 演算法名稱（預設 SHA2-256）
        workers: worker pool 大小（None = executor 預設）

    Raises:
        DirectoryNotFoundError / AccessDeniedError / IdenticalDirectoriesError:
            路徑問題
        InvalidParameterError: 正規表示式、演算法或 worker 數無效
    """
    reference, root = validate_dirs(reference_dir, root_dir)
    regex = compile_name_filter(name_filter)
    hasher = get_hasher(HashAlgorithm.from_name(algorithm))
    if workers is not None and workers < 1:
        raise InvalidParameterError("workers must be >= 1")

    logger.info("=" * 50)
    logger.info("dupsrm -- Duplicate Remover")
    logger.info("=" * 50)
    logger.info("Reference: %s", reference)
    logger.info("Root:      %s", root)
    logger.info("Algorithm: %s", hasher.algorithm.value)
    logger.info("Filter:    %s", regex.pattern if regex is not None else "(none)")
    logger.info("Mode:      %s", "Dry run" if dry_run else "Remove duplicates")

    if is_subdirectory(root, reference):
        logger.warning(
            "Root directory lies inside the reference directory; "
            "nothing will be compared",
        )

    logger.info("[1/4] Scanning root directory...")
    root_entries = scan_tree(
        root, hasher.algorithm, exclude_prefix=reference, workers=workers,
    )

    logger.info("[2/4] Scanning reference directory...")
    reference_entries = scan_tree(
        reference, hasher.algorithm, name_filter=regex, workers=workers,
    )

    logger.info("[3/4] Checking for duplicates...")
    duplicates = resolve(root_entries, reference_entries)

    if not duplicates:
        logger.info("No duplicates found")
        return DedupSummary(0, 0, 0, 0, dry_run)

    logger.info("  %d duplicate(s)", len(duplicates))
    logger.info("[4/4] %s...", "Listing duplicates" if dry_run else "Removing duplicates")
    results = execute(duplicates, dry_run, workers=workers)

    removed = [r for r in results if r.status == STATUS_REMOVED]
    failed = [r for r in results if r.status == STATUS_FAILED]
    if dry_run:
        freed = sum(r.size for r in results)
    else:
        freed = sum(r.size for r in removed)

    logger.info("")
    logger.info("=" * 50)
    logger.info("DONE!")
    logger.info("  Duplicates:  %d", len(duplicates))
    if dry_run:
        logger.info("  Would free:  %s", format_size(freed))
        logger.info("  *** DRY RUN -- no files were removed ***")
    else:
        logger.info("  Removed:     %d", len(removed))
        logger.info("  Failed:      %d", len(failed))
        logger.info("  Space freed: %s", format_size(freed))

    return DedupSummary(len(duplicates), len(removed), len(failed), freed, dry_run)
