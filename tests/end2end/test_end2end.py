from pathlib import Path

import pytest

from files_context import cli

PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


@pytest.fixture
def repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / ".git").mkdir()
    (tmp_path / ".gitignore").write_text("*.log\nbuild/\n", encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("print('app')\n", encoding="utf-8")
    (tmp_path / "src" / "logo.png").write_bytes(PNG_SIGNATURE)
    (tmp_path / "src" / "debug.log").write_text("noise", encoding="utf-8")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "bundle.js").write_text("minified", encoding="utf-8")
    (tmp_path / "README.md").write_text("# Demo\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_end_to_end_raw_export(repo: Path) -> None:
    output = repo / "export.txt"

    exit_code = cli.main([".", "--raw", "-o", str(output)])

    assert exit_code == 0
    assert output.read_text(encoding="utf-8") == "\n".join([
        'README.md\t"# Demo\\n"',
        "src/app.py\t\"print('app')\\n\"",
    ])


def test_end_to_end_prompt_to_stdout(repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["src/*.py", "README.md", "-p", "What does the app print?"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith("The following is information read from a list of source codes.")
    assert "src/app.py\t" in out
    assert "README.md\t" in out
    assert "What does the app print?" in out


def test_end_to_end_unresolvable_locator(repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["./nonexistent", "src"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert not captured.out
    assert 'Invalid path, or no files found for: "./nonexistent"' in captured.err


def test_end_to_end_only_binary(repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["src/logo.png"])

    assert exit_code == 1
    assert "No readable" in capsys.readouterr().err
