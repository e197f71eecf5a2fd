"""Per-directory ignore rules compiled with `pathspec` and cached per walk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pathspec

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@dataclass(frozen=True, eq=False)
class IgnoreMatcher:
    """Compiled patterns of one ignore file.

    Paths are matched relative to the directory holding the ignore file, the
    way git evaluates a `.gitignore`.
    """

    source: Path | None
    spec: pathspec.GitIgnoreSpec | None = None

    def denies(self, path: str | Path) -> bool:
        """Return True if `path` matches a deny pattern of this ignore file."""
        if self.spec is None or self.source is None:
            return False
        try:
            rel = Path(path).relative_to(self.source.parent)
        except ValueError:
            return False
        return self.spec.match_file(rel.as_posix())


#: Matcher used for directories without (usable) ignore rules. Denies nothing.
NO_OP_MATCHER = IgnoreMatcher(source=None)

#: Matchers applicable at one directory, inherited from its ancestors.
RuleSet = tuple[IgnoreMatcher, ...]


def valid_patterns(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split ignore-file lines into patterns that compile and patterns that do not.

    Git silently skips lines such as a lone `!` or `\\`; they are returned
    separately so the remaining patterns still apply.
    """
    valid: list[str] = []
    invalid: list[str] = []
    for line in lines:
        try:
            pathspec.GitIgnoreSpec.from_lines([line])
        except ValueError:
            invalid.append(line)
        else:
            valid.append(line)
    return valid, invalid


def compile_ignore_file(path: Path, log: FilteringBoundLogger | None = None) -> IgnoreMatcher:
    """Read and compile an ignore file.

    Blank lines, comments and invalid patterns are dropped. A file with no
    remaining pattern compiles to `NO_OP_MATCHER`.

    Args:
        path (Path): the ignore file to read
        log (FilteringBoundLogger | None): optional logger, warned about dropped patterns

    Raises:
        OSError: if the file is missing or unreadable.
        UnicodeDecodeError: if the file is not valid UTF-8.

    Returns:
        IgnoreMatcher: the compiled matcher
    """
    lines = path.read_text(encoding="utf-8").splitlines()
    lines = [line for line in lines if line.strip() and not line.strip().startswith("#")]
    lines, invalid = valid_patterns(lines)
    if invalid and log is not None:
        log.warning("Skipping invalid ignore patterns", path=str(path), patterns=invalid)
    if not lines:
        return NO_OP_MATCHER
    return IgnoreMatcher(source=path, spec=pathspec.GitIgnoreSpec.from_lines(lines))


class IgnoreRuleCache:
    """Lazily loaded ignore matchers, keyed by ignore-file path.

    One instance belongs to a single walk; each distinct ignore file is read
    and compiled at most once per instance.
    """

    def __init__(self) -> None:
        self._matchers: dict[Path, IgnoreMatcher] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._matchers

    def __len__(self) -> int:
        return len(self._matchers)

    def load(self, path: Path, log: FilteringBoundLogger | None = None) -> IgnoreMatcher:
        """Return the matcher for `path`, compiling it on first use.

        A missing or unreadable ignore file is cached as `NO_OP_MATCHER`; this is
        the normal case for directories without rules and is not an error.

        Args:
            path (Path): the ignore file path
            log (FilteringBoundLogger | None): optional logger for progress lines

        Returns:
            IgnoreMatcher: the cached or freshly compiled matcher
        """
        if path in self._matchers:
            return self._matchers[path]
        try:
            matcher = compile_ignore_file(path, log)
        except (OSError, UnicodeDecodeError):
            if log is not None:
                log.info("No ignore file found", path=str(path))
            matcher = NO_OP_MATCHER
        else:
            if log is not None:
                log.info("Loaded ignore file", path=str(path))
        self._matchers[path] = matcher
        return matcher
