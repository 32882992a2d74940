"""
檔案內容 hash 計算模組

支援七種演算法，整個執行期間只使用其中一種：
  - SHA2-256 (預設) / SHA3-256 / SHA1 / MD5：hashlib
  - RIPEMD-160：pycryptodome（OpenSSL 3 預設不提供 ripemd160）
  - WHIRLPOOL：whirlpool（C extension）
  - BLAKE-256：blake256（SHA-3 決賽版 BLAKE，非 hashlib 的 BLAKE2）

檔案以固定大小 chunk 串流讀取，記憶體用量與檔案大小無關。
每種演算法的空輸入 digest 在 ContentHasher 建立時算出，
供掃描階段排除空檔案（大量不相關的空檔案彼此會誤判為重複）。
"""

import functools
import hashlib
import logging
from enum import Enum
from typing import Callable

import whirlpool
from blake256.blake256 import BLAKE
from Crypto.Hash import RIPEMD160

from .exceptions import UnsupportedAlgorithmError

logger = logging.getLogger(__name__)

# 串流讀取的 chunk 大小
CHUNK_SIZE = 65536


class HashAlgorithm(Enum):
    """可選的 hash 演算法，value 為 CLI 上使用的名稱（大小寫敏感）"""

    SHA2_256 = "SHA2-256"
    SHA3_256 = "SHA3-256"
    SHA1 = "SHA1"
    MD5 = "MD5"
    WHIRLPOOL = "WHIRLPOOL"
    RIPEMD160 = "RIPEMD-160"
    BLAKE256 = "BLAKE-256"

    @classmethod
    def names(cls) -> list[str]:
        return [a.value for a in cls]

    @classmethod
    def from_name(cls, name: "str | HashAlgorithm") -> "HashAlgorithm":
        """
        依 CLI 名稱取得演算法。

        Raises:
            UnsupportedAlgorithmError: 名稱不在支援清單中
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedAlgorithmError(
                f"Unsupported hash algorithm: {name}. "
                f"Must be one of: {', '.join(cls.names())}"
            ) from None


class _Blake256:
    """blake256.BLAKE 的 update / digest 介面包裝；digest() 只能呼叫一次"""

    def __init__(self):
        self._state = BLAKE(256)

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def digest(self) -> bytes:
        return bytes(self._state.final())


_FACTORIES: dict[HashAlgorithm, Callable] = {
    HashAlgorithm.SHA2_256: hashlib.sha256,
    HashAlgorithm.SHA3_256: hashlib.sha3_256,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.WHIRLPOOL: whirlpool.new,
    HashAlgorithm.RIPEMD160: RIPEMD160.new,
    HashAlgorithm.BLAKE256: _Blake256,
}


class ContentHasher:
    """
    綁定單一演算法的 hash 策略物件。

    在掃描前建立一次，所有檔案共用；不保存任何檔案狀態，可被多個 worker 同時使用。
    """

    def __init__(self, algorithm: HashAlgorithm):
        self.algorithm = algorithm
        self._factory = _FACTORIES[algorithm]
        self.empty_digest: bytes = self._factory().digest()
        self.digest_size = len(self.empty_digest)

    def __repr__(self) -> str:
        return f"ContentHasher({self.algorithm.value})"

    def new(self):
        """建立一個新的 running hash state"""
        return self._factory()

    def hash_bytes(self, data: bytes) -> bytes:
        h = self.new()
        h.update(data)
        return h.digest()

    def hash_file(self, filepath: str) -> bytes:
        """
        計算整個檔案的 digest。

        Raises:
            OSError: 檔案無法開啟或讀取（不存在、權限不足、是資料夾）
        """
        h = self.new()
        with open(filepath, 'rb') as f:
            while True:
                chunk = f.read(CHUNK_SIZE)
                if not chunk:
                    break
                h.update(chunk)
        return h.digest()

    def is_empty_digest(self, digest: bytes) -> bool:
        return digest == self.empty_digest


@functools.lru_cache(maxsize=None)
def _cached_hasher(algorithm: HashAlgorithm) -> ContentHasher:
    return ContentHasher(algorithm)


def get_hasher(algorithm: "str | HashAlgorithm" = HashAlgorithm.SHA2_256) -> ContentHasher:
    """取得指定演算法的 ContentHasher；名稱與 enum 共用同一個快取項目"""
    return _cached_hasher(HashAlgorithm.from_name(algorithm))


def hash_file(
    filepath: str,
    algorithm: "str | HashAlgorithm" = HashAlgorithm.SHA2_256,
) -> bytes:
    """計算檔案的 digest，演算法預設為 SHA2-256"""
    return get_hasher(algorithm).hash_file(filepath)
