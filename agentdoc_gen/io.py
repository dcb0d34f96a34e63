# agentdoc_gen/io.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import yaml

# Keys accepted in an export config file (see cli.py for their flags).
CONFIG_KEYS: tuple[str, ...] = (
    "out_dir",
    "formats",
    "diagram_markup",
    "stable_ids",
    "strict",
)


def read_export_text(path: Path) -> str:
    """Read an agent export; `-` means stdin."""
    if str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        raise FileNotFoundError(str(path))
    return path.read_text(encoding="utf-8")


def read_markup(path: Path) -> str:
    """Read a pre-rendered diagram fragment (SVG or HTML) verbatim."""
    if not path.exists():
        raise FileNotFoundError(str(path))
    return path.read_text(encoding="utf-8")


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise TypeError(
            f"Top-level YAML must be a mapping in {path}, got {type(data).__name__}"
        )

    return data


def load_config(path: Path) -> dict[str, Any]:
    """Load an export config file, warning about keys the CLI does not use."""
    if not path.exists():
        raise FileNotFoundError(str(path))

    data = _load_yaml_mapping(path)

    unknown = [k for k in data if k not in CONFIG_KEYS]
    if unknown:
        print(
            f"warning: ignoring {len(unknown)} unknown key(s) in {path}",
            file=sys.stderr,
        )
        for key in unknown[:10]:
            print(f"warning: {path}: {key!r}", file=sys.stderr)
        if len(unknown) > 10:
            print(f"warning: (and {len(unknown) - 10} more)", file=sys.stderr)

    formats = data.get("formats")
    if isinstance(formats, str):
        data["formats"] = [f.strip() for f in formats.split(",") if f.strip()]
    elif formats is not None and not isinstance(formats, list):
        raise TypeError(f"'formats' in {path} must be a list or comma-separated string")

    return {k: v for k, v in data.items() if k in CONFIG_KEYS}
