from __future__ import annotations

from enum import StrEnum, auto
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

#: Number of leading bytes scanned for NUL bytes.
MAX_SCAN_SIZE = 1024

#: Leading byte signatures of common binary formats.
MAGIC_NUMBERS: dict[str, bytes] = {
    "JPEG": b"\xff\xd8\xff",
    "PNG": b"\x89PNG\r\n\x1a\n",
    "GIF87": b"GIF87a",
    "GIF89": b"GIF89a",
    "BMP": b"BM",
}

MAX_MAGIC_NUMBER_LENGTH = max(len(magic) for magic in MAGIC_NUMBERS.values())

BINARY_EXTENSIONS: frozenset[str] = frozenset({
    "jpg",
    "jpeg",
    "png",
    "gif",
    "bmp",
    "exe",
    "dll",
})

IGNORE_FILE_NAME = ".gitignore"
VCS_MARKER_DIR = ".git"

DEFAULT_PROMPT = "Explain the code in the files provided"
PROMPT_ENV_VAR = "FILES_CONTEXT_PROMPT"


class LocatorKind(StrEnum):
    """What a caller-supplied locator turned out to be."""

    FILE = auto()
    DIRECTORY = auto()
    GLOB = auto()
    UNRESOLVABLE = auto()


class LocatorMatch(BaseModel):
    """Tagged result of classifying one locator.

    Attributes:
        locator: the string supplied by the caller.
        kind: how the locator was classified.
        path: the file or directory named by the locator (FILE and DIRECTORY only).
        matches: regular files produced by glob expansion (GLOB only).
    """

    model_config = ConfigDict(frozen=True)

    locator: str = Field(..., description="Locator as supplied by the caller")
    kind: LocatorKind = Field(..., description="Classification of the locator")
    path: Path | None = Field(default=None, description="File or directory path")
    matches: tuple[Path, ...] = Field(default=(), description="Files matched by a glob")


class FileRecord(BaseModel):
    """A resolved file paired with its classification and content.

    Attributes:
        path: the file path as resolved (relative paths are kept relative).
        is_binary: whether the binary classifier flagged the file.
        content: decoded text content, None for binary files.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Resolved file path")
    is_binary: bool = Field(default=False, description="Binary classification")
    content: str | None = Field(default=None, description="Decoded text content")

    @computed_field
    @property
    def is_text(self) -> bool:
        """Whether the record holds usable text."""
        return not self.is_binary and self.content is not None
