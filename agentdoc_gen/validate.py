# agentdoc_gen/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from .mermaid_fmt import mm_id
from .model import AgentDocument
from .model_view import build_node_index

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """Structured lint finding for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Lint configuration.

    Every built-in check is a warning: the exporter accepts whatever the
    normalizer produced. `escalate` turns selected warnings into errors.
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)


def validate_document_issues(
    doc: AgentDocument, cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return lint findings about a normalized document.

    Paths point into the normalized node list (`/nodes/<i>/next/<j>`), not into
    the source JSON.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    if not doc.nodes:
        emit(
            "warning",
            "W_NO_NODES",
            f"agent {doc.id!r} has no conversation nodes",
            path="/nodes",
            hint="Expected conversationFlow.nodes, nodes, flow.nodes or steps",
        )
        return issues

    seen_ids: dict[str, int] = {}
    diagram_ids: dict[str, str] = {}
    for i, node in enumerate(doc.nodes):
        if node.id in seen_ids:
            emit(
                "warning",
                "W_NODE_DUPLICATE_ID",
                f"duplicate node id {node.id!r} (also nodes[{seen_ids[node.id]}])",
                path=f"/nodes/{i}/id",
            )
            continue
        seen_ids[node.id] = i

        diagram_id = mm_id(node.id)
        other = diagram_ids.get(diagram_id)
        if other is not None:
            emit(
                "warning",
                "W_NODE_DIAGRAM_ID_COLLISION",
                f"node ids {other!r} and {node.id!r} both render as diagram id {diagram_id!r}",
                path=f"/nodes/{i}/id",
                hint="Diagram ids replace '-' with '_'; the two nodes merge in the flowchart",
            )
        else:
            diagram_ids[diagram_id] = node.id

    index = build_node_index(doc)
    for i, node in enumerate(doc.nodes):
        for j, edge in enumerate(node.next):
            if not edge.target_node_id:
                emit(
                    "warning",
                    "W_EDGE_EMPTY_TARGET",
                    f"node {node.id!r} has an edge ({edge.condition!r}) without a target; "
                    "it is omitted from the diagram",
                    path=f"/nodes/{i}/next/{j}",
                )
            elif edge.target_node_id not in index:
                emit(
                    "warning",
                    "W_EDGE_DANGLING",
                    f"node {node.id!r} links to unknown node id {edge.target_node_id!r}",
                    path=f"/nodes/{i}/next/{j}",
                )

    return issues


def validate_document(doc: AgentDocument) -> Tuple[list[str], list[str]]:
    """Lint a document and return `(errors, warnings)` as message lists."""
    issues = validate_document_issues(doc)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
