from __future__ import annotations

import re

from .constants import EDGE_LABEL_MAX, NODE_LABEL_MAX

# Everything except word characters and whitespace is dropped from labels.
_LABEL_STRIP_RE = re.compile(r"[^A-Za-z0-9_\s]")

# Node shape brackets keyed by shape name.
SHAPES: dict[str, tuple[str, str]] = {
    "terminal": ("([", "])"),
    "circle": ("((", "))"),
    "decision": ("{", "}"),
    "subroutine": ("[/", "/]"),
    "box": ("[", "]"),
}


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source (no trailing newline) in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code + "\n```\n"


def mm_label(text: str, limit: int) -> str:
    """Strip punctuation from label text and truncate it."""
    return _LABEL_STRIP_RE.sub("", str(text))[:limit]


def mm_node_label(text: str) -> str:
    return mm_label(text, NODE_LABEL_MAX)


def mm_edge_label(text: str) -> str:
    return mm_label(text, EDGE_LABEL_MAX)


def mm_id(value: str) -> str:
    """Diagram id for a node id. `a-b` and `a_b` collide; see validate."""
    return str(value).replace("-", "_")


def mm_flow_node(node_id: str, label: str, shape: str = "box") -> str:
    opening, closing = SHAPES[shape]
    return f"  {node_id}{opening}{label}{closing}"


def mm_flow_edge(src: str, dst: str, label: str | None = None) -> str:
    if label is not None:
        return f"  {src} -->|{label}| {dst}"
    return f"  {src} --> {dst}"
