from __future__ import annotations

import re
from pathlib import Path


def artifact_stem(agent_name: str) -> str:
    """File stem for an agent's artifacts: whitespace runs -> '-', lower-cased.

    Path separators are folded the same way so a name never escapes out_dir.
    """
    stem = re.sub(r"[\s/\\]+", "-", agent_name).lower()
    if stem in ("", ".", ".."):
        raise ValueError(f"agent name {agent_name!r} is not usable as a file name")
    return stem


def artifact_path(out_dir: Path, agent_name: str, suffix: str) -> Path:
    return out_dir / f"{artifact_stem(agent_name)}{suffix}"


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 artifact, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
