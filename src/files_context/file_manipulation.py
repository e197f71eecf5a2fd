from __future__ import annotations

from pathlib import Path

from files_context.config import (
    BINARY_EXTENSIONS,
    MAGIC_NUMBERS,
    MAX_MAGIC_NUMBER_LENGTH,
    MAX_SCAN_SIZE,
)
from files_context.exceptions import BinaryCheckError, FileReadError


def is_binary_by_extension(path: str | Path) -> bool:
    """Check whether a file name carries a known binary extension.

    Only the name is inspected, the file does not need to exist.

    Args:
        path (str | Path): the file path to check

    Returns:
        bool: True if the last dot-separated part of the name is a known binary extension
    """
    name = Path(path).name
    if "." not in name:
        return False
    return name.rpartition(".")[2].lower() in BINARY_EXTENSIONS


def is_binary_by_content(path: str | Path) -> bool:
    """Check whether the leading bytes of a file look binary.

    Reads at most `max(MAX_SCAN_SIZE, MAX_MAGIC_NUMBER_LENGTH)` bytes. The file is
    binary if the window holds a NUL byte or starts with a known magic number.

    Args:
        path (str | Path): the file path to check

    Raises:
        BinaryCheckError: if the file cannot be opened or read.

    Returns:
        bool: True if the content looks binary, False otherwise
    """
    bytes_to_read = max(MAX_SCAN_SIZE, MAX_MAGIC_NUMBER_LENGTH)
    try:
        with Path(path).open("rb") as f:
            data = f.read(bytes_to_read)
    except OSError as e:
        raise BinaryCheckError(path=Path(path), reason=str(e)) from e

    if b"\x00" in data:
        return True
    return any(data.startswith(magic) for magic in MAGIC_NUMBERS.values())


def is_binary(path: str | Path) -> bool:
    """Check whether a file is binary, by extension first and then by content.

    Args:
        path (str | Path): the file path to check

    Raises:
        BinaryCheckError: if the extension is inconclusive and the file cannot be read.

    Returns:
        bool: True if the file is considered binary
    """
    return is_binary_by_extension(path) or is_binary_by_content(path)


def read_text_file(path: Path) -> str:
    """Read a whole file as UTF-8 text, replacing undecodable bytes.

    Args:
        path (Path): the file path to read

    Raises:
        FileReadError: if the file cannot be opened or read.

    Returns:
        str: the decoded file content
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileReadError(path=path, reason=str(e)) from e
