from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from files_context import aggregator
from files_context.aggregator import aggregate, get_files_content, make_record
from files_context.exceptions import (
    EmptyResolutionSetError,
    FileReadError,
    NoReadableFilesError,
    UnresolvableLocatorError,
)

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "a.txt").write_text("Hello, World!", encoding="utf-8")
    (tmp_path / "image.png").write_bytes(PNG_SIGNATURE)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.mark.unit
def test_get_files_content_skips_binary_files(project: Path) -> None:
    content = get_files_content(".")

    assert content == 'a.txt\t"Hello, World!"'
    assert "image.png" not in content


@pytest.mark.unit
def test_get_files_content_escapes_content(project: Path) -> None:
    (project / "b.txt").write_text('line "one"\n\ttabbed\n', encoding="utf-8")

    lines = get_files_content(["b.txt"]).split("\n")

    assert lines == ['b.txt\t"line \\"one\\"\\n\\ttabbed\\n"']
    assert json.loads(lines[0].split("\t", 1)[1]) == 'line "one"\n\ttabbed\n'


@pytest.mark.unit
def test_get_files_content_keeps_non_ascii(project: Path) -> None:
    (project / "accents.md").write_text("café", encoding="utf-8")

    assert get_files_content("accents.md") == 'accents.md\t"café"'


@pytest.mark.unit
def test_get_files_content_one_line_per_file(project: Path) -> None:
    (project / "sub").mkdir()
    (project / "sub" / "c.py").write_text("print('c')\n", encoding="utf-8")

    content = get_files_content(["a.txt", "sub"])

    assert content.split("\n") == ['a.txt\t"Hello, World!"', "sub/c.py\t\"print('c')\\n\""]


@pytest.mark.unit
def test_get_files_content_only_binary_raises_no_readable(project: Path) -> None:
    (project / "a.txt").unlink()

    with pytest.raises(NoReadableFilesError, match="No readable"):
        get_files_content(".")


@pytest.mark.unit
def test_get_files_content_empty_directory_raises_empty_resolution(tmp_path: Path) -> None:
    with pytest.raises(EmptyResolutionSetError):
        get_files_content(str(tmp_path))


@pytest.mark.unit
def test_get_files_content_invalid_path(project: Path) -> None:
    with pytest.raises(UnresolvableLocatorError, match="non_existent_path_and_not_a_glob"):
        get_files_content("./non_existent_path_and_not_a_glob")


@pytest.mark.unit
def test_get_files_content_is_idempotent(project: Path) -> None:
    (project / "pkg").mkdir()
    (project / "pkg" / "mod.py").write_text("x = 1\n", encoding="utf-8")

    assert get_files_content(".") == get_files_content(".")


@pytest.mark.unit
def test_aggregate_skips_file_failing_binary_check(project: Path) -> None:
    content = aggregate(["missing.txt", "a.txt"])

    assert content == 'a.txt\t"Hello, World!"'


@pytest.mark.unit
def test_aggregate_skips_unreadable_file(project: Path, mocker: MockerFixture) -> None:
    (project / "b.txt").write_text("B", encoding="utf-8")
    real_read = aggregator.read_text_file

    def fake_read(path: Path) -> str:
        if path.name == "a.txt":
            raise FileReadError(path=path, reason="Permission denied")
        return real_read(path)

    mocker.patch.object(aggregator, "read_text_file", side_effect=fake_read)

    assert aggregate(["a.txt", "b.txt"]) == 'b.txt\t"B"'


@pytest.mark.unit
def test_aggregate_all_unreadable_raises(project: Path) -> None:
    with pytest.raises(NoReadableFilesError):
        aggregate(["gone.txt", "image.png"])


@pytest.mark.unit
def test_make_record_binary_has_no_content(project: Path) -> None:
    rec = make_record(Path("image.png"))

    assert rec.is_binary
    assert rec.content is None
    assert not rec.is_text


@pytest.mark.unit
def test_make_record_reads_text(project: Path) -> None:
    rec = make_record(Path("a.txt"))

    assert rec.content == "Hello, World!"
    assert rec.is_text


@pytest.mark.unit
def test_aggregate_verbose_logs_skipped_binary(project: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("INFO", logger="files_context")

    aggregate(["a.txt", "image.png"], verbose=True)

    assert "Skipping binary file" in caplog.text
