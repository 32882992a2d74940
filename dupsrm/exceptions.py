"""自訂例外類別，供 CLI 層捕捉後統一輸出錯誤訊息"""


class DupsrmError(Exception):
    """所有 dupsrm 錯誤的基礎類別"""
    pass


class DirectoryNotFoundError(DupsrmError):
    """目標資料夾不存在或不是資料夾"""
    pass


class AccessDeniedError(DupsrmError):
    """權限不足"""
    pass


class IdenticalDirectoriesError(DupsrmError):
    """參考資料夾與根資料夾解析後為同一路徑"""
    pass


class InvalidParameterError(DupsrmError):
    """參數無效（正規表示式格式錯誤、worker 數量不合法等）"""
    pass


class UnsupportedAlgorithmError(InvalidParameterError):
    """不支援的 hash 演算法名稱"""
    pass
