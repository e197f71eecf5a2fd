from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field

from files_context.config import DEFAULT_PROMPT, PROMPT_ENV_VAR

ENV_FILE = find_dotenv(usecwd=True)


def default_prompt() -> str:
    """Return the prompt from the environment, then `.env`, then the built-in default."""
    from_env = os.environ.get(PROMPT_ENV_VAR)
    if from_env:
        return from_env
    if ENV_FILE:
        from_file = dotenv_values(ENV_FILE).get(PROMPT_ENV_VAR)
        if from_file:
            return from_file
    return DEFAULT_PROMPT


class Settings(BaseModel):
    """Configuration settings for the files_context command line."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_paths: list[str] = Field(
        default_factory=lambda: [str(Path.cwd())],
        description="Files, directories or glob patterns to gather.",
    )
    prompt: str = Field(default_factory=default_prompt, description="Question appended to the files.")
    output: Path | None = Field(default=None, description="Output file; stdout when unset.")
    raw: bool = Field(default=False, description="Emit the files blob without the prompt template.")
    verbose: bool = Field(default=False, description="Log progress lines.")
    log_file: str = Field(default="", description="Log file path.")
    fail_fast: bool = Field(default=True, description="Stop at the first unresolvable locator.")
