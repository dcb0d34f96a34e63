# agentdoc_gen/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from .textfmt import display_text

SettingKind = Literal["string", "number", "boolean", "duration", "structured"]


@dataclass(frozen=True)
class SettingValue:
    """One entry of the settings bag.

    `duration` values are already formatted (e.g. "5 min"); `structured` is
    the catch-all for objects and arrays copied from a legacy settings bag.
    """

    kind: SettingKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> "SettingValue":
        if isinstance(value, bool):
            return cls("boolean", value)
        if isinstance(value, (int, float)):
            return cls("number", value)
        if isinstance(value, str):
            return cls("string", value)
        return cls("structured", value)

    @classmethod
    def duration(cls, formatted: str) -> "SettingValue":
        return cls("duration", formatted)

    def render(self) -> str:
        return display_text(self.value)


@dataclass(frozen=True)
class AgentEdge:
    condition: str
    target_node_id: str


@dataclass(frozen=True)
class AgentNode:
    id: str
    name: str
    type: str
    prompt: str
    conditions: tuple[str, ...] = ()
    next: tuple[AgentEdge, ...] = ()


@dataclass(frozen=True)
class AgentTool:
    id: str
    name: str
    type: str
    description: str


@dataclass(frozen=True)
class AnalysisField:
    name: str
    description: str
    type: str
    choices: Optional[tuple[str, ...]] = None
    examples: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class AgentDocument:
    """Canonical, dialect-independent view of one agent export.

    `raw_json` is exactly what the JSON decoder returned for the input.
    """

    id: str
    name: str
    description: str
    global_prompt: str
    settings: dict[str, SettingValue] = field(default_factory=dict)
    nodes: tuple[AgentNode, ...] = ()
    tools: tuple[AgentTool, ...] = ()
    post_call_analysis: tuple[AnalysisField, ...] = ()
    raw_json: Any = None
