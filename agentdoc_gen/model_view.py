from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Union

from .model import AgentDocument, AgentNode
from .textfmt import display_text

Default = Union[Any, Callable[[], Any]]


def lookup(obj: Any, path: str) -> Any:
    """Follow a dotted path through nested mappings; None when any hop is missing."""
    current = obj
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


@dataclass(frozen=True)
class FieldChain:
    """Ordered candidate paths for one canonical field, plus its default.

    Each path stands for one export dialect. The first path that resolves to a
    non-null value wins; otherwise the default is used (callable defaults are
    invoked per resolution).
    """

    paths: tuple[str, ...]
    default: Default = None

    def resolve(self, obj: Any) -> Any:
        for path in self.paths:
            value = lookup(obj, path)
            if value is not None:
                return value
        return self.default() if callable(self.default) else self.default

    def text(self, obj: Any) -> str:
        value = self.resolve(obj)
        if value is None:
            return ""
        return display_text(value)

    def items(self, obj: Any) -> list[Any]:
        return as_list(self.resolve(obj))


def as_list(value: Any) -> list[Any]:
    """A list value as-is; anything else counts as an empty collection."""
    if isinstance(value, list):
        return value
    return []


def iter_mappings(items: list[Any]) -> Iterator[dict[str, Any]]:
    for item in items:
        if isinstance(item, dict):
            yield item


def as_text_tuple(value: Any) -> Optional[tuple[str, ...]]:
    """Optional string sequence (choices/examples); None when absent or not a list."""
    if not isinstance(value, list):
        return None
    return tuple(display_text(v) for v in value)


def build_node_index(doc: AgentDocument) -> dict[str, AgentNode]:
    """Index nodes by id; on duplicates the first node keeps the slot."""
    index: dict[str, AgentNode] = {}
    for node in doc.nodes:
        if node.id not in index:
            index[node.id] = node
    return index
