# src/context/builder.py - v1
"""Build conversation messages from imported files.

The result is a user request naming the folder followed by an assistant
message that carries every file as a fenced block headed by its path.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Sequence
from pathlib import PurePosixPath

from foldercontext.core.models import ContextMessage, ProcessedFile

_BACKTICK_RUN = re.compile(r"`{3,}")

# Extension -> fence language hint
_LANGUAGES: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".json": "json",
    ".md": "markdown",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".sh": "bash",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".rb": "ruby",
    ".php": "php",
    ".sql": "sql",
}


def build_context_from_files(
    files: Sequence[ProcessedFile],
    binary_paths: Sequence[str],
    root_name: str,
) -> list[ContextMessage]:
    """Create the user/assistant message pair for an imported folder."""
    user = ContextMessage(
        id=_message_id(),
        role="user",
        content=f'Import the "{root_name}" folder',
    )

    sections: list[str] = [
        f'I\'ve imported the contents of the "{root_name}" folder '
        f"({len(files)} file{'s' if len(files) != 1 else ''}).",
    ]
    if binary_paths:
        listing = "\n".join(f"- {p}" for p in binary_paths)
        sections.append(f"Skipped {len(binary_paths)} binary files:\n{listing}")
    for f in files:
        sections.append(render_file(f))

    assistant = ContextMessage(
        id=_message_id(),
        role="assistant",
        content="\n\n".join(sections),
    )
    return [user, assistant]


def render_file(file: ProcessedFile) -> str:
    """Render one file as ``### path`` plus a fenced block that cannot be closed early."""
    longest = max((len(m) for m in _BACKTICK_RUN.findall(file.content)), default=0)
    fence = "`" * max(3, longest + 1)
    lang = _LANGUAGES.get(PurePosixPath(file.path).suffix.lower(), "")
    body = file.content if file.content.endswith("\n") else file.content + "\n"
    return f"### {file.path}\n{fence}{lang}\n{body}{fence}"


def _message_id() -> str:
    return uuid.uuid4().hex[:12]
