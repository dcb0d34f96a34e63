from __future__ import annotations

from .constants import DEFAULT_EDGE_CONDITION, ELSE_CONDITION
from .mermaid_fmt import mm_edge_label, mm_flow_edge, mm_flow_node, mm_id, mm_node_label
from .model import AgentDocument, AgentEdge, AgentNode

HEADER = "graph TD"
EMPTY_PLACEHOLDER = "  NoNodes[No nodes found]"


def node_shape(node: AgentNode) -> str:
    """Pick the flowchart shape for a node; first matching rule wins."""
    if node.type == "end":
        return "terminal"
    if "start" in node.id:
        return "circle"
    if node.type == "branch":
        return "decision"
    if node.type == "function":
        return "subroutine"
    return "box"


def _edge_label(edge: AgentEdge) -> str | None:
    if edge.condition == DEFAULT_EDGE_CONDITION:
        return None
    if edge.condition == ELSE_CONDITION:
        return ELSE_CONDITION
    return mm_edge_label(edge.condition)


def to_diagram(doc: AgentDocument) -> str:
    """Generate the conversation flowchart (graph TD) for a document.

    Node declarations come first in node order, then edges grouped by source
    node in edge order. Edges without a target are dropped; dangling targets
    are emitted as-is.
    """
    lines: list[str] = [HEADER]

    if not doc.nodes:
        lines.append(EMPTY_PLACEHOLDER)
        return "\n".join(lines)

    for node in doc.nodes:
        lines.append(mm_flow_node(mm_id(node.id), mm_node_label(node.name), node_shape(node)))

    for node in doc.nodes:
        src = mm_id(node.id)
        for edge in node.next:
            if not edge.target_node_id:
                continue
            lines.append(mm_flow_edge(src, mm_id(edge.target_node_id), _edge_label(edge)))

    return "\n".join(lines)
