"""dupsrm — 移除參考資料夾中與根資料夾內容相同的檔案"""

__version__ = "0.2.0"
