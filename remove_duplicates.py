#!/usr/bin/env python3
"""
remove_duplicates.py — 移除參考資料夾中與根資料夾重複的檔案

Usage:
    python remove_duplicates.py <REFERENCE_DIR> <ROOT_DIR>
    python remove_duplicates.py <REFERENCE_DIR> <ROOT_DIR> --dry-run
    python remove_duplicates.py <REFERENCE_DIR> <ROOT_DIR> --regex 'txt$'
    python remove_duplicates.py <REFERENCE_DIR> <ROOT_DIR> --hash-algorithm MD5
"""

from dupsrm.cli import main


if __name__ == "__main__":
    main()
