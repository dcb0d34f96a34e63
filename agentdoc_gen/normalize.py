# agentdoc_gen/normalize.py
from __future__ import annotations

import json
import random
import string
from typing import Any, Callable, Optional

from .constants import (
    AGENT_DESCRIPTION_PATHS,
    AGENT_ID_PATHS,
    AGENT_NAME_PATHS,
    ANALYSIS_LIST_PATHS,
    DEFAULT_AGENT_ID,
    DEFAULT_AGENT_NAME,
    DEFAULT_ANALYSIS_TYPE,
    DEFAULT_EDGE_CONDITION,
    DEFAULT_NODE_NAME,
    DEFAULT_NODE_TYPE,
    DEFAULT_TOOL_NAME,
    DEFAULT_TOOL_TYPE,
    EDGE_CONDITION_PATHS,
    EDGE_TARGET_PATHS,
    ELSE_CONDITION,
    GLOBAL_PROMPT_PATHS,
    LEGACY_NEXT_CONDITION_PATHS,
    LEGACY_NEXT_TARGET_PATHS,
    NODE_ID_PATHS,
    NODE_LIST_PATHS,
    NODE_NAME_PATHS,
    NODE_PROMPT_PATHS,
    NODE_TYPE_PATHS,
    SKIP_RESPONSE_CONDITION,
    TOOL_ID_PATHS,
    TOOL_LIST_PATHS,
)
from .model import AgentDocument, AgentEdge, AgentNode, AgentTool, AnalysisField
from .model_view import FieldChain, as_list, as_text_tuple, iter_mappings, lookup
from .settings import build_settings

# Receives the node's position among the normalized (object) nodes.
NodeIdFactory = Callable[[int], str]

_ID_ALPHABET = string.digits + string.ascii_lowercase


class MalformedInputError(ValueError):
    """The export text is not syntactically valid JSON."""

    def __init__(self, message: str, *, line: int = 0, column: int = 0) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class NestingTooDeepError(ValueError):
    """The export is valid JSON but nested too deeply to be decoded."""


def random_node_id(_index: int = 0) -> str:
    """`node_` plus 9 random base-36 characters. Not stable across calls."""
    return "node_" + "".join(random.choices(_ID_ALPHABET, k=9))


def index_node_id(index: int) -> str:
    """Deterministic fallback id derived from the node's list position."""
    return f"node_{index}"


AGENT_ID = FieldChain(AGENT_ID_PATHS, DEFAULT_AGENT_ID)
AGENT_NAME = FieldChain(AGENT_NAME_PATHS, DEFAULT_AGENT_NAME)
AGENT_DESCRIPTION = FieldChain(AGENT_DESCRIPTION_PATHS, "")
GLOBAL_PROMPT = FieldChain(GLOBAL_PROMPT_PATHS, "")
NODE_LIST = FieldChain(NODE_LIST_PATHS)

NODE_ID = FieldChain(NODE_ID_PATHS)
NODE_NAME = FieldChain(NODE_NAME_PATHS, DEFAULT_NODE_NAME)
NODE_TYPE = FieldChain(NODE_TYPE_PATHS, DEFAULT_NODE_TYPE)
NODE_PROMPT = FieldChain(NODE_PROMPT_PATHS, "")

EDGE_TARGET = FieldChain(EDGE_TARGET_PATHS, "")
EDGE_CONDITION = FieldChain(EDGE_CONDITION_PATHS, DEFAULT_EDGE_CONDITION)
LEGACY_NEXT_TARGET = FieldChain(LEGACY_NEXT_TARGET_PATHS, "")
LEGACY_NEXT_CONDITION = FieldChain(LEGACY_NEXT_CONDITION_PATHS, DEFAULT_EDGE_CONDITION)

TOOL_LIST = FieldChain(TOOL_LIST_PATHS)
TOOL_ID = FieldChain(TOOL_ID_PATHS, "")
TOOL_NAME = FieldChain(("name",), DEFAULT_TOOL_NAME)
TOOL_TYPE = FieldChain(("type",), DEFAULT_TOOL_TYPE)
TOOL_DESCRIPTION = FieldChain(("description",), "")

ANALYSIS_LIST = FieldChain(ANALYSIS_LIST_PATHS)
ANALYSIS_NAME = FieldChain(("name",), "")
ANALYSIS_DESCRIPTION = FieldChain(("description",), "")
ANALYSIS_TYPE = FieldChain(("type",), DEFAULT_ANALYSIS_TYPE)

SPECIAL_EDGE_TARGET = FieldChain(("destination_node_id",), "")


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON.
    raise MalformedInputError(f"Invalid JSON: constant {name!r} is not allowed")


def _parse_int(digits: str) -> int | float:
    # Integers past the interpreter's digit limit degrade to float (inf).
    try:
        return int(digits)
    except ValueError:
        return float(digits)


def parse_json(raw_text: str) -> Any:
    try:
        return json.loads(raw_text, parse_int=_parse_int, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedInputError(
            f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            line=e.lineno,
            column=e.colno,
        ) from e
    except RecursionError as e:
        raise NestingTooDeepError(
            "JSON input nests deeper than the interpreter's recursion limit"
        ) from e


def _collect_edges(node: dict[str, Any]) -> tuple[AgentEdge, ...]:
    """Aggregate outgoing edges in dialect order; never deduplicated."""
    edges: list[AgentEdge] = []

    for edge in iter_mappings(as_list(node.get("edges"))):
        target = EDGE_TARGET.text(edge)
        if not target:
            continue
        edges.append(AgentEdge(EDGE_CONDITION.text(edge), target))

    else_target = SPECIAL_EDGE_TARGET.text(node.get("else_edge"))
    if else_target:
        edges.append(AgentEdge(ELSE_CONDITION, else_target))

    skip_target = SPECIAL_EDGE_TARGET.text(node.get("skip_response_edge"))
    if skip_target:
        edges.append(AgentEdge(SKIP_RESPONSE_CONDITION, skip_target))

    # Legacy flat `next` entries are kept even without a target.
    for entry in iter_mappings(as_list(node.get("next"))):
        edges.append(
            AgentEdge(LEGACY_NEXT_CONDITION.text(entry), LEGACY_NEXT_TARGET.text(entry))
        )

    return tuple(edges)


def _collect_annotations(node: dict[str, Any]) -> tuple[str, ...]:
    notes: list[str] = []
    else_prompt = lookup(node, "else_edge.transition_condition.prompt")
    if isinstance(else_prompt, str) and else_prompt:
        notes.append(f"Else: {else_prompt}")
    for item in as_list(node.get("conditions")):
        if isinstance(item, str):
            notes.append(item)
    return tuple(notes)


def _normalize_node(node: dict[str, Any], index: int, id_factory: NodeIdFactory) -> AgentNode:
    node_id = NODE_ID.text(node) if NODE_ID.resolve(node) is not None else id_factory(index)
    return AgentNode(
        id=node_id,
        name=NODE_NAME.text(node),
        type=NODE_TYPE.text(node),
        prompt=NODE_PROMPT.text(node),
        conditions=_collect_annotations(node),
        next=_collect_edges(node),
    )


def _normalize_tool(tool: dict[str, Any]) -> AgentTool:
    return AgentTool(
        id=TOOL_ID.text(tool),
        name=TOOL_NAME.text(tool),
        type=TOOL_TYPE.text(tool),
        description=TOOL_DESCRIPTION.text(tool),
    )


def _normalize_analysis_field(item: dict[str, Any]) -> AnalysisField:
    return AnalysisField(
        name=ANALYSIS_NAME.text(item),
        description=ANALYSIS_DESCRIPTION.text(item),
        type=ANALYSIS_TYPE.text(item),
        choices=as_text_tuple(item.get("choices")),
        examples=as_text_tuple(item.get("examples")),
    )


def normalize_value(raw: Any, *, node_id_factory: Optional[NodeIdFactory] = None) -> AgentDocument:
    """Build the canonical document from an already-parsed JSON value.

    Total over any JSON value: missing or oddly-shaped fields fall back to
    their documented defaults instead of raising.
    """
    id_factory = node_id_factory or random_node_id

    nodes = tuple(
        _normalize_node(node, i, id_factory)
        for i, node in enumerate(iter_mappings(NODE_LIST.items(raw)))
    )
    tools = tuple(_normalize_tool(t) for t in iter_mappings(TOOL_LIST.items(raw)))
    analysis = tuple(
        _normalize_analysis_field(a) for a in iter_mappings(ANALYSIS_LIST.items(raw))
    )

    return AgentDocument(
        id=AGENT_ID.text(raw),
        name=AGENT_NAME.text(raw),
        description=AGENT_DESCRIPTION.text(raw),
        global_prompt=GLOBAL_PROMPT.text(raw),
        settings=build_settings(raw),
        nodes=nodes,
        tools=tools,
        post_call_analysis=analysis,
        raw_json=raw,
    )


def normalize(raw_text: str, *, node_id_factory: Optional[NodeIdFactory] = None) -> AgentDocument:
    """Parse an agent export and normalize it.

    Raises MalformedInputError only when `raw_text` is not valid JSON, and
    NestingTooDeepError when valid JSON exceeds the recursion limit.
    """
    return normalize_value(parse_json(raw_text), node_id_factory=node_id_factory)
