from __future__ import annotations

from .constants import EMPTY_CELL
from .diagram import to_diagram
from .mermaid_fmt import mermaid_block
from .model import AgentDocument, AgentNode, AnalysisField
from .textfmt import humanize_key, literal, pretty_json


def _edge_summary(node: AgentNode) -> str:
    if not node.next:
        return EMPTY_CELL
    return "; ".join(
        f"{literal(edge.condition)} → `{literal(edge.target_node_id)}`" for edge in node.next
    )


def analysis_options(field: AnalysisField) -> str:
    """Choices if any, else examples, else an em-dash."""
    if field.choices:
        return ", ".join(field.choices)
    if field.examples:
        return ", ".join(field.examples)
    return EMPTY_CELL


def _overview(doc: AgentDocument) -> list[str]:
    lines = [
        "## Agent Overview",
        "",
        "| Property | Value |",
        "|----------|-------|",
        f"| **Agent ID** | `{literal(doc.id)}` |",
        f"| **Name** | {literal(doc.name)} |",
    ]
    if doc.description:
        lines.append(f"| **Version/Description** | {literal(doc.description)} |")
    return lines


def _settings(doc: AgentDocument) -> list[str]:
    if not doc.settings:
        return []
    lines = ["", "### Settings", "", "| Setting | Value |", "|---------|-------|"]
    for key, value in doc.settings.items():
        lines.append(f"| **{literal(humanize_key(key))}** | {literal(value.render())} |")
    return lines


def _global_prompt(doc: AgentDocument) -> list[str]:
    if not doc.global_prompt:
        return []
    return ["", "## Global Prompt", "", "```", literal(doc.global_prompt), "```"]


def _node_summary(doc: AgentDocument) -> list[str]:
    lines = ["## Conversation Flow Nodes", "", f"Total nodes: {len(doc.nodes)}", ""]
    if not doc.nodes:
        lines.append("*No nodes found in this agent.*")
        return lines

    lines.append("| Node ID | Name | Type | Next Nodes |")
    lines.append("|---------|------|------|------------|")
    for node in doc.nodes:
        lines.append(
            f"| `{literal(node.id)}` | {literal(node.name)} | {literal(node.type)} "
            f"| {_edge_summary(node)} |"
        )
    return lines


def _node_prompts(doc: AgentDocument) -> list[str]:
    prompted = [n for n in doc.nodes if n.prompt]
    if not prompted:
        return []
    lines = ["## Node Prompts", ""]
    for node in prompted:
        lines.extend(
            [
                f"### {literal(node.name)}",
                f"**ID:** `{literal(node.id)}` | **Type:** {literal(node.type)}",
                "",
                "```",
                literal(node.prompt),
                "```",
                "",
            ]
        )
    return lines


def _tools(doc: AgentDocument) -> list[str]:
    if not doc.tools:
        return []
    lines = [
        "## Tools",
        "",
        "| Tool ID | Name | Type | Description |",
        "|---------|------|------|-------------|",
    ]
    for tool in doc.tools:
        lines.append(
            f"| `{literal(tool.id)}` | {literal(tool.name)} | {literal(tool.type)} "
            f"| {literal(tool.description)} |"
        )
    lines.append("")
    return lines


def _post_call_analysis(doc: AgentDocument) -> list[str]:
    if not doc.post_call_analysis:
        return []
    lines = [
        "## Post-Call Analysis Fields",
        "",
        "| Field | Type | Description | Options/Examples |",
        "|-------|------|-------------|------------------|",
    ]
    for field in doc.post_call_analysis:
        lines.append(
            f"| {literal(field.name)} | {literal(field.type)} | {literal(field.description)} "
            f"| {literal(analysis_options(field))} |"
        )
    lines.append("")
    return lines


def _raw_json(doc: AgentDocument) -> list[str]:
    return [
        "## Raw JSON",
        "",
        "<details>",
        "<summary>Click to expand raw JSON</summary>",
        "",
        "```json",
        literal(pretty_json(doc.raw_json)),
        "```",
        "",
        "</details>",
    ]


def to_markdown(doc: AgentDocument) -> str:
    """Render the full Markdown documentation for an agent.

    Section order is fixed; optional sections (settings, global prompt, node
    prompts, tools, post-call analysis) are omitted when empty.
    """
    lines: list[str] = [f"# {literal(doc.name)}", ""]
    lines.extend(_overview(doc))
    lines.extend(_settings(doc))
    lines.extend(_global_prompt(doc))
    lines.append("")
    lines.extend(_node_summary(doc))
    lines.extend(["", "## Flow Diagram", ""])
    lines.append(mermaid_block(literal(to_diagram(doc))))
    lines.extend(_node_prompts(doc))
    lines.extend(_tools(doc))
    lines.extend(_post_call_analysis(doc))
    lines.extend(_raw_json(doc))
    return "\n".join(lines)
