"""共用工具函式"""

from . import __version__

VERSION = __version__

# (單位, 倍數, 小數位數)，由大到小比對
_SIZE_UNITS = (
    ("GB", 1024 ** 3, 2),
    ("MB", 1024 ** 2, 1),
    ("KB", 1024, 1),
)


def format_size(size_bytes: int) -> str:
    """結束摘要用的可讀大小，例如 1.5 KB"""
    for unit, factor, digits in _SIZE_UNITS:
        if size_bytes >= factor:
            return f"{size_bytes / factor:.{digits}f} {unit}"
    return f"{size_bytes} B"
