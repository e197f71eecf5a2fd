"""Turn caller-supplied locators (files, directories, globs) into one file list."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import TYPE_CHECKING

from files_context.config import LocatorKind, LocatorMatch
from files_context.exceptions import EmptyResolutionSetError, UnresolvableLocatorError
from files_context.logging import get_logger
from files_context.walker import walk_tree

if TYPE_CHECKING:
    from collections.abc import Sequence

    from structlog.typing import FilteringBoundLogger


def expand_glob(pattern: str) -> list[Path]:
    """Expand a glob pattern into the regular files it matches.

    `**` matches across directories. Matches are returned sorted; directories
    and other non-file matches are dropped.

    Args:
        pattern (str): the glob pattern

    Returns:
        list[Path]: the matched files
    """
    return [Path(match) for match in sorted(glob.glob(pattern, recursive=True)) if Path(match).is_file()]


def classify_locator(locator: str) -> LocatorMatch:
    """Classify a locator as a file, a directory, a glob pattern, or nothing.

    The checks run in that order: an existing regular file, an existing
    directory, then glob expansion. A locator for which all three fail is
    UNRESOLVABLE.

    Args:
        locator (str): the caller-supplied locator

    Returns:
        LocatorMatch: the tagged classification result
    """
    path = Path(locator)
    if path.is_file():
        return LocatorMatch(locator=locator, kind=LocatorKind.FILE, path=path)
    if path.is_dir():
        return LocatorMatch(locator=locator, kind=LocatorKind.DIRECTORY, path=path)
    matches = expand_glob(locator)
    if matches:
        return LocatorMatch(locator=locator, kind=LocatorKind.GLOB, matches=tuple(matches))
    return LocatorMatch(locator=locator, kind=LocatorKind.UNRESOLVABLE)


def _files_for(located: LocatorMatch, log: FilteringBoundLogger, *, verbose: bool) -> list[Path]:
    match located.kind:
        case LocatorKind.FILE:
            log.info("Adding single file", path=located.locator)
            return [located.path] if located.path is not None else []
        case LocatorKind.DIRECTORY:
            log.info("Processing directory", path=located.locator)
            files = walk_tree(located.path or located.locator, verbose=verbose)
            if not files:
                log.info("No tracked files found in directory", path=located.locator)
            return files
        case LocatorKind.GLOB:
            for found in located.matches:
                log.info("Found file from glob", pattern=located.locator, path=str(found))
            return list(located.matches)
        case _:
            return []


def resolve_paths(
    locators: str | Sequence[str],
    *,
    verbose: bool = False,
    fail_fast: bool = True,
) -> list[Path]:
    """Resolve locators into a deduplicated list of existing files.

    Each locator is classified with `classify_locator`. Directories are walked
    with their ignore rules applied; an empty directory contributes no file but
    is not an error by itself.

    Args:
        locators (str | Sequence[str]): one locator or a sequence of locators
        verbose (bool, optional): emit progress lines. Defaults to False.
        fail_fast (bool, optional): raise on the first unresolvable locator. When
            False, every locator is tried and all failures are reported together.
            Defaults to True.

    Raises:
        UnresolvableLocatorError: if a locator matches nothing.
        EmptyResolutionSetError: if no file was found across all locators.

    Returns:
        list[Path]: unique files, in first-seen order
    """
    log = get_logger(verbose=verbose)
    if isinstance(locators, str):
        locators = [locators]

    collected: list[Path] = []
    unresolved: list[str] = []
    for locator in locators:
        located = classify_locator(locator)
        if located.kind is LocatorKind.UNRESOLVABLE:
            log.info("Locator matched nothing", locator=locator)
            if fail_fast:
                raise UnresolvableLocatorError(locators=(locator,))
            unresolved.append(locator)
            continue
        collected.extend(_files_for(located, log, verbose=verbose))

    if unresolved:
        raise UnresolvableLocatorError(locators=tuple(unresolved))

    log.info("Collected potential files", count=len(collected))
    unique = list(dict.fromkeys(collected))
    log.info("Found unique files", count=len(unique))
    if not unique:
        raise EmptyResolutionSetError()
    return unique
