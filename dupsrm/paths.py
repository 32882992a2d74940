"""
路徑分類模組

  - canonicalize：解析符號連結後的標準化絕對路徑
  - is_file：只接受一般檔案（符號連結、資料夾、裝置檔一律排除）
  - is_subdirectory：判斷路徑是否位於另一個資料夾之下，
    用於掃描根資料夾時剪除參考資料夾
"""

import os
import stat


def canonicalize(path: str) -> str:
    """回傳標準化絕對路徑（解析符號連結）"""
    return os.path.realpath(os.path.abspath(path))


def is_file(path: str) -> bool:
    """
    檢查 path 是否為一般檔案。

    使用 lstat，不跟隨符號連結；無法 stat 的項目視為非檔案。
    """
    try:
        mode = os.lstat(path).st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode)


def is_subdirectory(candidate_path: str, reference_path: str) -> bool:
    """
    檢查 candidate_path 是否位於 reference_path 之下（含 reference_path 本身）。

    以路徑元件比對而非字串前綴，`/data/ref` 不會被當成 `/data/re` 的子目錄。
    兩個參數都應先經過 canonicalize()。
    """
    candidate = os.path.normcase(candidate_path)
    reference = os.path.normcase(reference_path)
    try:
        return os.path.commonpath([candidate, reference]) == reference
    except ValueError:
        # 例如不同磁碟機 C: / D:，或絕對與相對路徑混用
        return False
