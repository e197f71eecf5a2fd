from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from files_context.config import FileRecord

PROMPT_TEMPLATE = """The following is information read from a list of source codes.

Files:
{files_content}

Question:
{question}

Please answer the question by referencing the specific filenames and source code from the files provided above."""


def format_entry(rec: FileRecord) -> str:
    """Render one file as a single output line.

    The line is the file path, a tab, then the content as a JSON string literal,
    so embedded newlines, quotes and control characters stay on one line.

    Args:
        rec (FileRecord): a text file record

    Returns:
        str: the formatted line
    """
    return f"{rec.path}\t{json.dumps(rec.content or '', ensure_ascii=False)}"


def join_entries(lines: Sequence[str]) -> str:
    """Join formatted lines into the aggregated output blob."""
    return "\n".join(lines)


def build_prompt(files_content: str, question: str) -> str:
    """Wrap the aggregated files content and a question into an LLM prompt.

    Args:
        files_content (str): the output of `get_files_content`
        question (str): the question to ask about the files

    Returns:
        str: the prompt text
    """
    return PROMPT_TEMPLATE.format(files_content=files_content, question=question)
