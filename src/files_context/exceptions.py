from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FilesContextError(Exception):
    """Base exception for errors in the files_context module."""


@dataclass(frozen=True)
class UnresolvableLocatorError(FilesContextError):
    """Raised when a locator matches no file, no directory and no glob result."""

    locators: tuple[str, ...]

    def __str__(self) -> str:
        return "\n".join(
            f'Invalid path, or no files found for: "{locator}". '
            "Please ensure the path exists, is accessible, and matches files if it's a glob."
            for locator in self.locators
        )


@dataclass(frozen=True)
class EmptyResolutionSetError(FilesContextError):
    """Raised when every locator resolved but no file was collected."""

    message: str = "No files found in the specified paths after processing all inputs."

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class NoReadableFilesError(FilesContextError):
    """Raised when every resolved file was binary or unreadable."""

    message: str = "No readable (non-binary, non-ignored) files found after processing the provided paths."

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class BinaryCheckError(FilesContextError):
    """Raised when the leading bytes of a file cannot be read."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f'Failed to check if file "{self.path}" is binary by content: {self.reason}'


@dataclass(frozen=True)
class DirectoryReadError(FilesContextError):
    """Raised when a directory cannot be listed during a walk."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Error reading directory {self.path}: {self.reason}"


@dataclass(frozen=True)
class FileReadError(FilesContextError):
    """Raised when a text file cannot be read during aggregation."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Error reading file {self.path}: {self.reason}"
