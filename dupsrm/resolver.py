"""
重複判定模組

參考資料夾中的檔案，只要其 digest 出現在根資料夾的任何檔案中，即視為重複。
只看內容是否相同，不記錄是哪一個根資料夾檔案命中（多對一直接合併）。
"""

import logging
from typing import Iterable

from .scanner import HashedEntry

logger = logging.getLogger(__name__)


def resolve(
    root_entries: Iterable[HashedEntry],
    reference_entries: Iterable[HashedEntry],
) -> list[HashedEntry]:
    """
    找出參考資料夾中與根資料夾內容相同的檔案。

    Args:
        root_entries: 根資料夾的 (digest, path)
        reference_entries: 參考資料夾的 (digest, path)

    Returns:
        重複的參考資料夾檔案，依路徑字典序遞增排序，
        讓輸出與刪除順序不受檔案系統走訪順序影響
    """
    # 先建好不可變的 digest 集合，之後只做讀取
    root_digests = frozenset(e.digest for e in root_entries)

    duplicates = [e for e in reference_entries if e.digest in root_digests]
    duplicates.sort(key=lambda e: e.path)

    logger.debug(
        "Resolved %d duplicate(s) against %d distinct root digests",
        len(duplicates), len(root_digests),
    )
    return duplicates
