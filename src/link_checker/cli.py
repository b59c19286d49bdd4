# src/link_checker/cli.py
import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from link_checker.controllers.link_check_controller import BrokenLinksError, LinkCheckController
from link_checker.utils.config_loader import build_settings, deep_merge, get_nested, load_config_file
from link_checker.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BROKEN_LINKS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="link-checker",
        description="Check every link, image, stylesheet and script reference in a built HTML tree."
    )
    parser.add_argument("build_dir", help="Directory holding the generated site.")
    parser.add_argument("--config", help="JSON file with options merged over the defaults.")
    parser.add_argument("--pattern", help="Glob selecting the documents to scan (default: **/*.html).")
    parser.add_argument("--ignore", action="append", default=[], metavar="REGEX",
                        help="Skip references matching REGEX. Repeatable.")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds.")
    parser.add_argument("--parallelism", type=int, help="Maximum concurrent remote probes.")
    parser.add_argument("--user-agent", help="User-Agent header for remote probes.")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while probing.")
    parser.add_argument("--log-level", help="Root log level. Falls back to debug.level from --config, then WARNING.")
    return parser


def load_file_set(build_dir: Path) -> Dict[str, bytes]:
    """Reads every file below `build_dir`, keyed by its path relative to it."""
    return {
        path.relative_to(build_dir).as_posix(): path.read_bytes()
        for path in sorted(build_dir.rglob("*"))
        if path.is_file()
    }


def options_from_args(args: argparse.Namespace) -> dict:
    options = load_config_file(args.config) if args.config else {}
    overrides = {}
    if args.pattern:
        overrides["html"] = {"pattern": args.pattern}
    if args.ignore:
        overrides["ignore"] = args.ignore
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.parallelism is not None:
        overrides["parallelism"] = args.parallelism
    if args.user_agent:
        overrides["userAgent"] = args.user_agent
    if args.progress:
        overrides["progress"] = True
    return deep_merge(options, overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        options = options_from_args(args)
        configure_logger(args.log_level or get_nested(options, "debug.level", "WARNING"))
    except (ValueError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_ERROR

    build_dir = Path(args.build_dir)
    if not build_dir.is_dir():
        print(f"❌ Not a directory: {build_dir}", file=sys.stderr)
        return EXIT_ERROR

    try:
        settings = build_settings(options)
        files = load_file_set(build_dir)
        logger.info("Loaded %d files from %s", len(files), build_dir)
        LinkCheckController(settings).check(files)
    except BrokenLinksError as e:
        print(str(e), file=sys.stderr)
        return EXIT_BROKEN_LINKS
    except (ValidationError, ValueError, re.error, OSError) as e:
        logger.error("Link check aborted: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_ERROR

    print("✅ No broken links found.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
