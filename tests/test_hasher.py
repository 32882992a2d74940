"""
Hasher 測試 — 演算法選擇、串流讀取、已公開的測試向量
"""

import hashlib

import pytest

from dupsrm.exceptions import InvalidParameterError, UnsupportedAlgorithmError
from dupsrm.hasher import (
    CHUNK_SIZE,
    ContentHasher,
    HashAlgorithm,
    get_hasher,
    hash_file,
)


EMPTY_DIGESTS = {
    "SHA2-256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
    "SHA3-256": "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a",
    "SHA1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
    "MD5": "d41d8cd98f00b204e9800998ecf8427e",
    "RIPEMD-160": "9c1185a5c5e9fc54612808977ee8f548b2258d31",
    "WHIRLPOOL": (
        "19fa61d75522a4669b44e39c1d2e1726c530232130d407f89afee0964997f7a7"
        "3e83be698b288febcf88e3e03c4f0757ea8964e59b63d93708b138cc42a66eb3"
    ),
    "BLAKE-256": "716f6e863f744b9ac22c97ec7b76ea5f5908bc5b2f67c61510bfc4751384ea7a",
}

DIGEST_SIZES = {
    "SHA2-256": 32,
    "SHA3-256": 32,
    "SHA1": 20,
    "MD5": 16,
    "RIPEMD-160": 20,
    "WHIRLPOOL": 64,
    "BLAKE-256": 32,
}


class TestAlgorithmSelection:
    """演算法名稱解析"""

    def test_all_seven_names(self):
        assert HashAlgorithm.names() == [
            "SHA2-256", "SHA3-256", "SHA1", "MD5",
            "WHIRLPOOL", "RIPEMD-160", "BLAKE-256",
        ]

    def test_from_name_returns_member(self):
        assert HashAlgorithm.from_name("RIPEMD-160") is HashAlgorithm.RIPEMD160
        assert HashAlgorithm.from_name(HashAlgorithm.MD5) is HashAlgorithm.MD5

    def test_unknown_name_raises(self):
        with pytest.raises(UnsupportedAlgorithmError, match="Must be one of"):
            HashAlgorithm.from_name("CRC32")

    def test_names_are_case_sensitive(self):
        """名稱大小寫敏感：sha2-256 不被接受"""
        with pytest.raises(UnsupportedAlgorithmError):
            HashAlgorithm.from_name("sha2-256")

    def test_unsupported_is_parameter_error(self):
        """不支援的演算法屬於參數錯誤"""
        with pytest.raises(InvalidParameterError):
            get_hasher("BLAKE3")

    def test_default_is_sha2_256(self):
        assert get_hasher().algorithm is HashAlgorithm.SHA2_256

    def test_get_hasher_is_cached(self):
        assert get_hasher(HashAlgorithm.SHA1) is get_hasher(HashAlgorithm.SHA1)

    def test_name_and_member_share_cache_entry(self):
        """名稱字串與 enum 取得同一個 ContentHasher"""
        assert get_hasher("SHA2-256") is get_hasher(HashAlgorithm.SHA2_256)
        assert get_hasher() is get_hasher("SHA2-256")


class TestEmptyDigest:
    """空輸入 digest 常數"""

    @pytest.mark.parametrize("name", sorted(EMPTY_DIGESTS))
    def test_empty_digest_constant(self, name):
        hasher = get_hasher(name)
        assert hasher.empty_digest.hex() == EMPTY_DIGESTS[name]
        assert hasher.digest_size == DIGEST_SIZES[name]

    @pytest.mark.parametrize("name", sorted(EMPTY_DIGESTS))
    def test_empty_file_matches_empty_digest(self, tmp_path, name):
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")
        hasher = get_hasher(name)
        assert hasher.is_empty_digest(hasher.hash_file(str(path)))


class TestHashFile:
    """串流讀取行為"""

    def test_identical_content_same_digest(self, tmp_path):
        """內容相同的檔案 digest 相同"""
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "b.txt").write_text("hello")
        assert hash_file(str(tmp_path / "a.txt")) == hash_file(str(tmp_path / "b.txt"))

    def test_different_content_different_digest(self, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "b.txt").write_text("world")
        assert hash_file(str(tmp_path / "a.txt")) != hash_file(str(tmp_path / "b.txt"))

    def test_stable_across_calls(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"\x00\x01\x02" * 1000)
        assert hash_file(str(path)) == hash_file(str(path))

    def test_known_sha256(self, tmp_path):
        path = tmp_path / "test.txt"
        path.write_text("test")
        assert hash_file(str(path)).hex() == (
            "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"
        )

    def test_multi_chunk_file(self, tmp_path):
        """超過 CHUNK_SIZE 的檔案結果應與一次性 hash 相同"""
        data = bytes(range(256)) * ((CHUNK_SIZE * 3) // 256 + 7)
        path = tmp_path / "large.bin"
        path.write_bytes(data)
        assert hash_file(str(path), "SHA1") == hashlib.sha1(data).digest()
        assert hash_file(str(path), "MD5") == hashlib.md5(data).digest()

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            hash_file(str(tmp_path / "missing.txt"))

    def test_directory_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            hash_file(str(tmp_path))

    def test_digest_depends_on_algorithm(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("hello")
        assert len(hash_file(str(path), "MD5")) == 16
        assert len(hash_file(str(path), "WHIRLPOOL")) == 64

    def test_repr(self):
        assert repr(ContentHasher(HashAlgorithm.MD5)) == "ContentHasher(MD5)"


class TestRipemd160:

    def test_abc(self):
        assert get_hasher("RIPEMD-160").hash_bytes(b"abc").hex() == (
            "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc"
        )


class TestWhirlpool:
    """ISO/IEC 10118-3 測試向量"""

    def test_abc(self):
        assert get_hasher("WHIRLPOOL").hash_bytes(b"abc").hex() == (
            "4e2448a4c6f486bb16b6562c73b4020bf3043e3a731bce721ae1b303d97e6d4c"
            "7181eebdb6c57e277d0e34957114cbd6c797fc9d95d8b582d225292076d4eef5"
        )


class TestBlake256:
    """BLAKE 論文附錄的測試向量"""

    def test_single_zero_byte(self):
        assert get_hasher("BLAKE-256").hash_bytes(b"\x00").hex() == (
            "0ce8d4ef4dd7cd8d62dfded9d4edb0a774ae6a41929a74da23109e8f11139c87"
        )

    def test_72_zero_bytes(self):
        """跨兩個 block"""
        assert get_hasher("BLAKE-256").hash_bytes(bytes(72)).hex() == (
            "d419bad32d504fb7d44d460c42c5593fe544fa4c135dec31e21bd9abdcc22d41"
        )


class TestIncrementalUpdate:
    """分段 update 的結果應與一次輸入相同（hash_file 逐 chunk 餵入）"""

    @pytest.mark.parametrize("name", ["WHIRLPOOL", "BLAKE-256", "RIPEMD-160"])
    @pytest.mark.parametrize("length", [55, 56, 63, 64, 65, 200])
    def test_split_matches_one_shot(self, name, length):
        hasher = get_hasher(name)
        data = bytes((i * 7) & 0xFF for i in range(length))
        h = hasher.new()
        for i in range(0, length, 10):
            h.update(data[i:i + 10])
        assert h.digest() == hasher.hash_bytes(data)
