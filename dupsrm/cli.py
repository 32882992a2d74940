"""
命令列介面

Usage:
    dupsrm <REFERENCE_DIR> <ROOT_DIR>
    dupsrm <REFERENCE_DIR> <ROOT_DIR> --dry-run
    dupsrm <REFERENCE_DIR> <ROOT_DIR> --regex '\\.jpg$'
    dupsrm <REFERENCE_DIR> <ROOT_DIR> --hash-algorithm MD5
"""

import argparse
import logging
import sys

from .dedup import remove_duplicates
from .exceptions import DupsrmError
from .hasher import HashAlgorithm
from .utils import VERSION


def _configure_logging(verbose: bool = False):
    """Set up root logging to stdout; DEBUG with level names when verbose."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stdout,
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            stream=sys.stdout,
        )


def _configure_stdout():
    """Enable line buffering when stdout supports it."""
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(line_buffering=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dupsrm",
        description=(
            "Remove files in the reference directory that are duplicated "
            "anywhere in the root directory tree / "
            "移除參考資料夾中與根資料夾內容相同的檔案"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dupsrm /path/to/reference /path/to/root
  dupsrm /path/to/reference /path/to/root --dry-run
  dupsrm /path/to/reference /path/to/root --regex '\\.txt$'
  dupsrm /path/to/reference /path/to/root --hash-algorithm MD5 -j 8
        """,
    )
    parser.add_argument(
        "reference_dir",
        help="Reference directory path / 參考資料夾（重複檔案會從這裡刪除）",
    )
    parser.add_argument(
        "root_dir",
        help="Root directory path / 根資料夾（搜尋範圍）",
    )
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Perform a dry-run without removing any file / 預覽模式",
    )
    parser.add_argument(
        "--regex", "--name-filter", "-r",
        dest="regex",
        default=None,
        help=(
            "Regular expression filtering files in the reference directory "
            "/ 只處理路徑符合正規表示式的參考資料夾檔案"
        ),
    )
    parser.add_argument(
        "--hash-algorithm", "-a",
        choices=HashAlgorithm.names(),
        default=HashAlgorithm.SHA2_256.value,
        help="Hash algorithm (default: SHA2-256) / hash 演算法",
    )
    parser.add_argument(
        "--workers", "-j",
        type=int,
        default=None,
        help="Number of parallel workers (default: automatic) / 平行 worker 數",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug output, including skipped files / 顯示詳細訊息",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    _configure_stdout()
    _configure_logging(args.verbose)

    try:
        remove_duplicates(
            reference_dir=args.reference_dir,
            root_dir=args.root_dir,
            dry_run=args.dry_run,
            name_filter=args.regex,
            algorithm=args.hash_algorithm,
            workers=args.workers,
        )
    except DupsrmError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
