"""
scoped-resources 命令行演示入口

用法:
    scoped-resources copy SRC DST [--buffer-size N] [--manual]
    scoped-resources first-line PATH [--default TEXT]
    scoped-resources greet
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from core.config import get_settings
from core.exceptions import ScopedResourcesException
from core.suppression import format_failure
from core.utils.logger import setup_logger

from . import manual, scoped


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoped-resources",
        description="Manual vs. scoped resource release demo",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    copy_parser = subparsers.add_parser("copy", help="Copy a file through a fixed buffer")
    copy_parser.add_argument("src")
    copy_parser.add_argument("dst")
    copy_parser.add_argument("--buffer-size", type=int, default=None)
    copy_parser.add_argument(
        "--manual", action="store_true", help="Use nested try/finally instead of a scope"
    )

    line_parser = subparsers.add_parser("first-line", help="Print the first line of a file")
    line_parser.add_argument("path")
    line_parser.add_argument("--default", default="")

    subparsers.add_parser("greet", help="Use the demo resource inside a scope")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """命令行主入口，返回进程退出码"""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)

    try:
        if args.command == "copy":
            copy = manual.copy if args.manual else scoped.copy
            result = copy(args.src, args.dst, args.buffer_size)
            logger.info(
                f"✓ Copied {result.bytes_copied} bytes in {result.cycles} cycles"
            )
        elif args.command == "first-line":
            line = scoped.first_line_of_file(args.path, args.default)
            print(line if line is not None else "")
        elif args.command == "greet":
            print(scoped.greet())
    except (ScopedResourcesException, OSError) as e:
        logger.error(f"✗ {args.command} failed:\n{format_failure(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
