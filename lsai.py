"""
lsai - summarize a directory and let a language model explain it

    lsai [PATH] [--detail] [--focus {normal,security,structure}]
"""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from client.assessment import AssessmentError, Focus, assess_summary
from client.env_display import format_env_display
from client.logging_setup import setup_logging
from tools.dir_summary.build_summary import build_summary, summary_to_json
from tools.dir_summary.collect_dir import collect_dir
from tools.dir_summary.models import FilesystemError, SkippedEntry

PROJECT_ROOT = Path(__file__).resolve().parent

logger = logging.getLogger("lsai")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lsai",
        description="Summarize a directory and ask a language model to explain it",
    )
    parser.add_argument("path", nargs="?", default=".",
                        help="Target directory (defaults to the current directory)")
    parser.add_argument("-d", "--detail", action="store_true",
                        help="Send the summary as indented JSON")
    parser.add_argument("--focus", choices=[f.value for f in Focus], default=Focus.NORMAL.value,
                        help="What the assessment should concentrate on")
    parser.add_argument("--model", default=None,
                        help="Model name override for the selected LLM backend")
    parser.add_argument("--summary-only", action="store_true",
                        help="Print the summary JSON and skip the model call")
    parser.add_argument("--skip-unreadable", action="store_true",
                        help="Skip entries whose metadata cannot be read instead of failing")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the current configuration and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show info logs on the console")
    return parser


def load_env():
    """Load .env from the project root, then from the working directory (or its parents)"""
    load_dotenv(PROJECT_ROOT / ".env", override=True)
    cwd_env = find_dotenv(usecwd=True)
    if cwd_env:
        load_dotenv(cwd_env, override=True)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_env()
    log_file = setup_logging("lsai.log", logging.INFO if args.verbose else logging.WARNING)
    logger.info(f"🚀 lsai started - logging to {log_file or 'console only'}")

    if args.show_config:
        print(format_env_display())
        return 0

    skipped: List[SkippedEntry] = []
    try:
        entries = collect_dir(args.path, tolerant=args.skip_unreadable, skipped=skipped)
    except FilesystemError as e:
        logger.error(f"❌ {e}")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    for item in skipped:
        print(f"⚠️  Skipped '{item.name}': {item.reason}", file=sys.stderr)

    summary = build_summary(args.path, entries)

    if args.summary_only:
        print(summary_to_json(summary, pretty=args.detail))
        return 0

    try:
        answer = asyncio.run(assess_summary(
            summary,
            Focus.parse(args.focus),
            detail=args.detail,
            model_name=args.model,
        ))
    except (ValueError, AssessmentError) as e:
        logger.error(f"❌ {e}")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"❌ Assessment failed: {e}", exc_info=True)
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print(answer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
