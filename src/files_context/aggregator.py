"""Read, classify and format resolved files into one text blob."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from files_context.config import FileRecord
from files_context.exceptions import BinaryCheckError, FileReadError, NoReadableFilesError
from files_context.file_manipulation import is_binary, read_text_file
from files_context.logging import get_logger
from files_context.output_construction import format_entry, join_entries
from files_context.resolver import resolve_paths

if TYPE_CHECKING:
    from collections.abc import Sequence


def make_record(path: Path) -> FileRecord:
    """Classify a file and read it when it is text.

    Args:
        path (Path): the file to load

    Raises:
        BinaryCheckError: if the binary check cannot read the file.
        FileReadError: if the text content cannot be read.

    Returns:
        FileRecord: the record, without content for binary files
    """
    if is_binary(path):
        return FileRecord(path=path, is_binary=True)
    return FileRecord(path=path, content=read_text_file(path))


def aggregate(file_paths: Sequence[str | Path], *, verbose: bool = False) -> str:
    """Format the text files among `file_paths` into one blob.

    Binary files are skipped. A file that cannot be checked or read is logged
    and skipped, the others are still aggregated.

    Args:
        file_paths (Sequence[str | Path]): resolved file paths
        verbose (bool, optional): emit progress lines. Defaults to False.

    Raises:
        NoReadableFilesError: if no file produced an entry.

    Returns:
        str: one `path<TAB>"json-escaped content"` line per text file
    """
    log = get_logger(verbose=verbose)
    log.info("Reading file contents", count=len(file_paths))

    lines: list[str] = []
    for raw in file_paths:
        path = Path(raw)
        try:
            rec = make_record(path)
        except (BinaryCheckError, FileReadError) as e:
            log.warning(str(e))
            continue
        if rec.is_binary:
            log.info("Skipping binary file", path=str(path))
            continue
        log.info("Read file", path=str(path))
        lines.append(format_entry(rec))

    if not lines:
        raise NoReadableFilesError()

    log.info("Formatted files", count=len(lines))
    return join_entries(lines)


def get_files_content(
    base_paths: str | Sequence[str],
    verbose: bool = False,  # noqa: FBT001, FBT002
    *,
    fail_fast: bool = True,
) -> str:
    """Resolve locators and aggregate the content of the files they name.

    Args:
        base_paths (str | Sequence[str]): file paths, directory paths or glob patterns
        verbose (bool, optional): emit progress lines. Defaults to False.
        fail_fast (bool, optional): see `resolve_paths`. Defaults to True.

    Raises:
        UnresolvableLocatorError: if a locator matches nothing.
        EmptyResolutionSetError: if the locators resolved to no file at all.
        NoReadableFilesError: if every resolved file was binary or unreadable.

    Returns:
        str: the aggregated output
    """
    files = resolve_paths(base_paths, verbose=verbose, fail_fast=fail_fast)
    return aggregate(files, verbose=verbose)
