from pathlib import Path

import pytest

from files_context import settings as settings_module
from files_context.config import DEFAULT_PROMPT, PROMPT_ENV_VAR
from files_context.settings import Settings


@pytest.fixture(autouse=True)
def no_env_prompt(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PROMPT_ENV_VAR, raising=False)
    monkeypatch.setattr(settings_module, "ENV_FILE", "")


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.base_paths == [str(Path.cwd())]
    assert settings.prompt == DEFAULT_PROMPT
    assert settings.output is None
    assert settings.raw is False
    assert settings.verbose is False
    assert settings.fail_fast is True


@pytest.mark.unit
def test_settings_prompt_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(PROMPT_ENV_VAR, "Summarise the module layout")

    assert Settings().prompt == "Summarise the module layout"


@pytest.mark.unit
def test_settings_prompt_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"{PROMPT_ENV_VAR}=Find the bugs\n", encoding="utf-8")
    monkeypatch.setattr(settings_module, "ENV_FILE", str(env_file))

    assert Settings().prompt == "Find the bugs"
