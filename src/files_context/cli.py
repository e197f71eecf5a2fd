"""
files_context — gather files into a single text blob for an LLM prompt.

Overview
--------
Locators given on the command line may be files, directories or glob
patterns. Directories are walked recursively, skipping hidden entries and
anything denied by the `.gitignore` files met on the way down. Binary files
are dropped, and every remaining file becomes one line:

    path<TAB>"json-escaped content"

By default the lines are wrapped in a question/answer prompt; `--raw` emits
the lines alone.

Usage
-----
    - Current directory, default question:
        uv run files-context

    - A few sources and a question, written to a file:
        uv run files-context src "tests/**/*.py" -p "Where is the cache invalidated?" -o prompt.txt

    - Only the files blob, with progress logs:
        uv run files-context --raw -v src
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from files_context import __version__
from files_context.aggregator import get_files_content
from files_context.exceptions import FilesContextError
from files_context.logging import setup_logging
from files_context.output_construction import build_prompt
from files_context.settings import Settings, default_prompt

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command line arguments into `Settings`.

    Locators are the repeated `--base-path` options followed by the positional
    arguments. With neither, the current directory is used.

    Args:
        argv (Sequence[str] | None, optional): arguments, `sys.argv[1:]` when None.

    Returns:
        Settings: the parsed settings
    """
    p = argparse.ArgumentParser(
        prog="files-context",
        description="Gather files into one text blob for LLM consumption.",
    )
    p.add_argument("paths", nargs="*", help="Files, directories or glob patterns.")
    p.add_argument(
        "-b",
        "--base-path",
        action="append",
        default=[],
        help="File, directory or glob pattern (repeatable).",
    )
    p.add_argument("-p", "--prompt", type=str, default="", help="Question to ask about the files.")
    p.add_argument("-o", "--output", type=str, default="", help="Output file (stdout when omitted).")
    p.add_argument("--raw", action="store_true", help="Emit the files blob without the prompt.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress lines.")
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument(
        "--keep-going",
        action="store_true",
        help="Try every locator and report all unresolvable ones together.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = p.parse_args(argv)

    base_paths = [*args.base_path, *args.paths] or [str(Path.cwd())]
    return Settings(
        base_paths=base_paths,
        prompt=args.prompt or default_prompt(),
        output=Path(args.output) if args.output else None,
        raw=args.raw,
        verbose=args.verbose,
        log_file=args.log_file,
        fail_fast=not args.keep_going,
    )


def render(settings: Settings) -> str:
    """Build the text to emit for `settings`.

    Raises:
        FilesContextError: if the locators cannot be turned into readable content.
    """
    content = get_files_content(settings.base_paths, settings.verbose, fail_fast=settings.fail_fast)
    if settings.raw:
        return content
    return build_prompt(content, settings.prompt)


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        text = render(settings)
    except FilesContextError as e:
        print(str(e), file=sys.stderr)
        return 1

    if settings.output is None:
        sys.stdout.write(text + "\n")
    else:
        settings.output.write_text(text, encoding="utf-8")
        print(f"Wrote {settings.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
