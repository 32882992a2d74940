"""
掃描模組 — 遞迴收集檔案並平行計算 hash

流程：
  1. 用 os.walk 遞迴收集檔案（不跟隨符號連結）
  2. 若指定 exclude_prefix，位於其下的資料夾整個剪除，不進入也不 hash
  3. 只保留一般檔案；若指定 name_filter，只保留路徑符合正規表示式者
  4. 以 worker pool 平行計算 hash，單一檔案失敗只記錄並略過
  5. 排除空輸入 digest（空檔案）
"""

import logging
import os
import re
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, NamedTuple

from .hasher import HashAlgorithm, get_hasher
from .paths import is_file, is_subdirectory

logger = logging.getLogger(__name__)

HASH_PROGRESS_INTERVAL = 1000


class HashedEntry(NamedTuple):
    """一個已計算 hash 的檔案：(digest, 標準化絕對路徑)"""
    digest: bytes
    path: str


def collect_files(
    directory: str,
    name_filter: "re.Pattern | None" = None,
    exclude_prefix: str | None = None,
) -> tuple[list[str], list[str]]:
    """
    收集資料夾中所有一般檔案的路徑。

    Args:
        directory: 已標準化的資料夾路徑
        name_filter: 編譯好的正規表示式，以 search 比對完整路徑
        exclude_prefix: 已標準化的路徑；位於其下的項目會被剪除

    Returns:
        (files, errors):
            files: 通過篩選的檔案路徑
            errors: 無法讀取的資料夾錯誤訊息
    """
    files: list[str] = []
    errors: list[str] = []

    def _excluded(path: str) -> bool:
        return exclude_prefix is not None and is_subdirectory(path, exclude_prefix)

    # 起點本身位於排除範圍內 → 整棵樹都不掃
    if _excluded(directory):
        return files, errors

    def _walk_onerror(e: OSError) -> None:
        location = e.filename or directory
        errors.append(f"{location}: {e}")

    # followlinks=False: 符號連結的資料夾不展開
    for dirpath, dirnames, filenames in os.walk(
        directory, followlinks=False, onerror=_walk_onerror,
    ):
        dirnames[:] = [
            d for d in dirnames
            if not _excluded(os.path.join(dirpath, d))
        ]
        for name in filenames:
            filepath = os.path.join(dirpath, name)
            if _excluded(filepath) or not is_file(filepath):
                continue
            if name_filter is not None and not name_filter.search(filepath):
                continue
            files.append(filepath)

    return files, errors


def _hash_one(args: tuple[str, HashAlgorithm]) -> HashedEntry | None:
    """Worker function for parallel hashing. Returns HashedEntry or None."""
    path, algorithm = args
    try:
        return HashedEntry(get_hasher(algorithm).hash_file(path), path)
    except OSError as e:
        logger.debug("Hash failed, skipping: %s (%s)", path, e)
        return None


def hash_files(
    paths: list[str],
    algorithm: "str | HashAlgorithm" = HashAlgorithm.SHA2_256,
    workers: int | None = None,
) -> tuple[list[HashedEntry], int]:
    """
    平行計算檔案 hash。

    以 ThreadPool 執行，工作以檔案 I/O 為主。

    Returns:
        (entries, errors): 成功的 HashedEntry（無順序保證）與失敗數
    """
    algorithm = HashAlgorithm.from_name(algorithm)
    args_list = [(p, algorithm) for p in paths]
    entries: list[HashedEntry] = []
    errors = 0
    processed = 0
    start_time = time.time()

    def _process_results(results: Iterable[HashedEntry | None]) -> None:
        nonlocal processed, errors
        for result in results:
            if result is None:
                errors += 1
            else:
                entries.append(result)
            processed += 1
            if processed % HASH_PROGRESS_INTERVAL == 0:
                logger.info("  Hashed %d/%d files...", processed, len(paths))

    if not args_list:
        return entries, errors

    with ThreadPoolExecutor(max_workers=workers) as pool:
        _process_results(pool.map(_hash_one, args_list))

    logger.debug(
        "Hashed %d files in %.1fs (%d errors)",
        len(entries), time.time() - start_time, errors,
    )
    return entries, errors


def scan_tree(
    directory: str,
    algorithm: "str | HashAlgorithm" = HashAlgorithm.SHA2_256,
    name_filter: "re.Pattern | None" = None,
    exclude_prefix: str | None = None,
    workers: int | None = None,
) -> list[HashedEntry]:
    """
    掃描一棵資料夾樹，回傳 (digest, path) 清單。

    空檔案的 digest 會被排除。無法讀取的資料夾或檔案不中斷掃描：
    個別路徑只在 DEBUG 記錄，預設層級只顯示略過的數量。
    回傳順序不固定。
    """
    hasher = get_hasher(algorithm)

    files, walk_errors = collect_files(
        directory, name_filter=name_filter, exclude_prefix=exclude_prefix,
    )
    logger.info("  Found %d files in %s", len(files), directory)

    if walk_errors:
        for err in walk_errors:
            logger.debug("Walk failed, skipping: %s", err)
        logger.warning(
            "Skipped %d directories that could not be read (use --verbose for details)",
            len(walk_errors),
        )

    entries, hash_errors = hash_files(files, hasher.algorithm, workers=workers)
    if hash_errors:
        logger.warning(
            "Skipped %d files that could not be read (use --verbose for details)",
            hash_errors,
        )

    non_empty = [e for e in entries if not hasher.is_empty_digest(e.digest)]
    if len(non_empty) != len(entries):
        logger.debug("  Ignored %d empty files", len(entries) - len(non_empty))
    return non_empty
