from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from files_context.config import IGNORE_FILE_NAME, VCS_MARKER_DIR
from files_context.exceptions import DirectoryReadError
from files_context.ignore_rules import NO_OP_MATCHER, IgnoreRuleCache, RuleSet
from files_context.logging import get_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def list_directory(directory: Path) -> list[os.DirEntry[str]]:
    """List the entries directly under `directory`, sorted by name.

    Args:
        directory (Path): the directory to list

    Raises:
        DirectoryReadError: if the directory cannot be listed.

    Returns:
        list[os.DirEntry[str]]: the directory entries in name order
    """
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise DirectoryReadError(path=directory, reason=str(e)) from e


def has_vcs_marker(directory: Path) -> bool:
    """Return True if `directory` holds a version-control marker.

    A directory that cannot be inspected has no marker.
    """
    try:
        return (directory / VCS_MARKER_DIR).exists()
    except OSError:
        return False


def directory_rules(
    directory: Path,
    parent_rules: RuleSet,
    cache: IgnoreRuleCache,
    log: FilteringBoundLogger,
) -> RuleSet:
    """Compute the rule set of `directory` from the one inherited from its parent.

    The ignore file of `directory` is appended when it compiles to a real matcher;
    an absent or empty ignore file leaves the parent rules unchanged.

    Args:
        directory (Path): the directory being entered
        parent_rules (RuleSet): rules inherited from the ancestors
        cache (IgnoreRuleCache): the cache of the current walk
        log (FilteringBoundLogger): logger for progress lines

    Returns:
        RuleSet: the effective rules for files directly under `directory`
    """
    if has_vcs_marker(directory):
        log.info("Found Git repository root", path=str(directory))
    matcher = cache.load(directory / IGNORE_FILE_NAME, log)
    if matcher is NO_OP_MATCHER:
        return parent_rules
    return (*parent_rules, matcher)


def _walk_directory(
    directory: Path,
    parent_rules: RuleSet,
    cache: IgnoreRuleCache,
    files: list[Path],
    log: FilteringBoundLogger,
) -> None:
    rules = directory_rules(directory, parent_rules, cache, log)

    try:
        entries = list_directory(directory)
    except DirectoryReadError as e:
        log.error(str(e))
        return

    for entry in entries:
        # hidden
        if entry.name.startswith("."):
            continue
        path = directory / entry.name
        if entry.is_dir(follow_symlinks=False):
            _walk_directory(path, rules, cache, files, log)
        elif entry.is_file(follow_symlinks=False):
            denied_by = next((m for m in rules if m.denies(path)), None)
            if denied_by is not None:
                log.info("File ignored", path=str(path), ignore_file=str(denied_by.source))
                continue
            log.info("File not ignored", path=str(path))
            files.append(path)


def walk_tree(
    root: str | Path,
    *,
    verbose: bool = False,
    cache: IgnoreRuleCache | None = None,
) -> list[Path]:
    """Collect files under `root` that no inherited ignore rule denies.

    Hidden entries are skipped, symbolic links are not followed, and entries are
    visited depth-first in name order. A directory that cannot be listed is logged
    and skipped without aborting the walk.

    Args:
        root (str | Path): the directory to walk
        verbose (bool, optional): emit progress lines. Defaults to False.
        cache (IgnoreRuleCache | None, optional): ignore-rule cache for this walk.
            A fresh cache is created when omitted.

    Returns:
        list[Path]: the files found, in traversal order
    """
    log = get_logger(verbose=verbose)
    root = Path(root)
    log.info("Starting directory traversal", path=str(root))
    files: list[Path] = []
    _walk_directory(root, (), cache if cache is not None else IgnoreRuleCache(), files, log)
    return files
