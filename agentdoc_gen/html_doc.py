# agentdoc_gen/html_doc.py
from __future__ import annotations

from typing import Optional

from .constants import EMPTY_CELL, MERMAID_CDN_URL, PROMPT_PREVIEW_MAX
from .diagram import to_diagram
from .markdown import analysis_options
from .model import AgentDocument, AgentNode
from .textfmt import humanize_key, literal, pretty_json, truncate

STYLESHEET = """\
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      background: #0f1419;
      color: #e7e9ea;
      line-height: 1.6;
      padding: 2rem;
    }
    .container { max-width: 1400px; margin: 0 auto; }
    h1 { font-size: 2rem; margin-bottom: 0.5rem; color: #1db9a0; }
    h2 { font-size: 1.5rem; margin: 2rem 0 1rem; color: #e7e9ea; border-bottom: 1px solid #2f3336; padding-bottom: 0.5rem; }
    h3 { font-size: 1.25rem; margin: 1.5rem 0 0.75rem; color: #8899a6; }
    h4 { font-size: 1rem; margin-bottom: 0.5rem; display: flex; align-items: center; gap: 0.5rem; flex-wrap: wrap; }
    table { width: 100%; border-collapse: collapse; margin: 1rem 0; }
    th, td { padding: 0.75rem; text-align: left; border-bottom: 1px solid #2f3336; }
    th { background: #1a1f26; color: #8899a6; font-weight: 600; }
    tr:hover td { background: rgba(29, 185, 160, 0.05); }
    code { background: #1a1f26; padding: 0.2rem 0.4rem; border-radius: 4px; font-family: 'JetBrains Mono', monospace; font-size: 0.75rem; color: #1db9a0; word-break: break-all; }
    pre { background: #1a1f26; padding: 1rem; border-radius: 8px; overflow-x: auto; font-size: 0.8rem; white-space: pre-wrap; line-height: 1.5; }
    .node-type { background: #2f3336; padding: 0.25rem 0.5rem; border-radius: 4px; font-size: 0.7rem; text-transform: uppercase; }
    .node-type-conversation { background: rgba(29, 185, 160, 0.2); color: #1db9a0; }
    .node-type-branch { background: rgba(255, 193, 7, 0.2); color: #ffc107; }
    .node-type-function { background: rgba(138, 43, 226, 0.2); color: #ba68c8; }
    .node-type-end { background: rgba(244, 67, 54, 0.2); color: #f44336; }
    .tool-type, .field-type { background: #2f3336; padding: 0.2rem 0.4rem; border-radius: 4px; font-size: 0.7rem; }
    .next-node { background: rgba(29, 185, 160, 0.15); padding: 0.2rem 0.4rem; border-radius: 4px; font-size: 0.7rem; display: inline-block; margin: 0.1rem 0; }
    .prompt-cell { max-width: 400px; font-size: 0.8rem; color: #8899a6; }
    .prompt-detail { margin: 1rem 0; padding: 1rem; background: #1a1f26; border-radius: 8px; border-left: 3px solid #1db9a0; }
    .prompt-detail h4 { color: #e7e9ea; }
    .prompt-detail code { margin-left: 0.5rem; }
    .prompt-detail pre { margin-top: 0.75rem; background: #0f1419; }
    .global-prompt { background: #1a1f26; border-radius: 8px; padding: 1rem; border-left: 3px solid #ffc107; }
    .global-prompt pre { background: transparent; padding: 0; }
    .mermaid-container { background: #1a1f26; padding: 2rem; border-radius: 8px; margin: 1rem 0; overflow-x: auto; }
    .mermaid { background: transparent; }
    details { margin: 1rem 0; }
    summary { cursor: pointer; color: #1db9a0; font-weight: 500; }
    details pre { margin-top: 1rem; max-height: 500px; overflow-y: auto; }
    .badge { display: inline-block; padding: 0.25rem 0.5rem; border-radius: 4px; font-size: 0.75rem; margin-left: 0.5rem; }
    .badge-version { background: rgba(29, 185, 160, 0.2); color: #1db9a0; }
    @media (max-width: 768px) {
      body { padding: 1rem; }
      table { display: block; overflow-x: auto; }
      h1 { font-size: 1.5rem; }
    }"""

MERMAID_INIT = """\
  <script>
    mermaid.initialize({
      startOnLoad: true,
      theme: 'dark',
      themeVariables: {
        primaryColor: '#1db9a0',
        primaryTextColor: '#e7e9ea',
        primaryBorderColor: '#2f3336',
        lineColor: '#8899a6',
        secondaryColor: '#1a1f26',
        tertiaryColor: '#0f1419'
      }
    });
  </script>"""


def _node_type_badge(node: AgentNode) -> str:
    return f'<span class="node-type node-type-{literal(node.type)}">{literal(node.type)}</span>'


def _table(headers: list[str], rows: list[str]) -> list[str]:
    lines = ["    <table>", "      <thead>", "        <tr>"]
    lines.extend(f"          <th>{h}</th>" for h in headers)
    lines.extend(["        </tr>", "      </thead>", "      <tbody>"])
    lines.extend(rows)
    lines.extend(["      </tbody>", "    </table>"])
    return lines


def _overview(doc: AgentDocument) -> list[str]:
    badge = (
        f' <span class="badge badge-version">{literal(doc.description)}</span>'
        if doc.description
        else ""
    )
    lines = [
        f"    <h1>{literal(doc.name)}{badge}</h1>",
        "",
        "    <h2>Agent Overview</h2>",
        "    <table>",
        f"      <tr><td><strong>Agent ID</strong></td><td><code>{literal(doc.id)}</code></td></tr>",
        f"      <tr><td><strong>Name</strong></td><td>{literal(doc.name)}</td></tr>",
    ]
    if doc.description:
        lines.append(
            f"      <tr><td><strong>Version</strong></td><td>{literal(doc.description)}</td></tr>"
        )
    lines.append("    </table>")
    return lines


def _settings(doc: AgentDocument) -> list[str]:
    if not doc.settings:
        return []
    lines = ["", "    <h3>Configuration</h3>", "    <table>"]
    for key, value in doc.settings.items():
        lines.append(
            f"      <tr><td><strong>{literal(humanize_key(key))}</strong></td>"
            f"<td>{literal(value.render())}</td></tr>"
        )
    lines.append("    </table>")
    return lines


def _global_prompt(doc: AgentDocument) -> list[str]:
    if not doc.global_prompt:
        return []
    return [
        "",
        "    <h2>Global Prompt</h2>",
        '    <div class="global-prompt">',
        f"      <pre>{literal(doc.global_prompt)}</pre>",
        "    </div>",
    ]


def _node_row(node: AgentNode) -> str:
    preview = truncate(node.prompt, PROMPT_PREVIEW_MAX, "...").replace("\n", "<br>")
    if node.next:
        edges = "<br>".join(
            f'<span class="next-node">{literal(e.condition)} → {literal(e.target_node_id)}</span>'
            for e in node.next
        )
    else:
        edges = EMPTY_CELL
    return (
        "        <tr>"
        f"<td><code>{literal(node.id)}</code></td>"
        f"<td>{literal(node.name)}</td>"
        f"<td>{_node_type_badge(node)}</td>"
        f'<td class="prompt-cell">{literal(preview)}</td>'
        f"<td>{edges}</td>"
        "</tr>"
    )


def _nodes(doc: AgentDocument) -> list[str]:
    lines = [
        "",
        "    <h2>Conversation Flow</h2>",
        f'    <p style="color: #8899a6; margin-bottom: 1rem;">Total nodes: {len(doc.nodes)}</p>',
    ]
    if not doc.nodes:
        lines.append("    <p>No nodes found in this agent.</p>")
        return lines
    headers = ["Node ID", "Name", "Type", "Prompt Preview", "Next Nodes"]
    lines.extend(_table(headers, [_node_row(n) for n in doc.nodes]))
    return lines


def _diagram(doc: AgentDocument, rendered_diagram_markup: Optional[str]) -> list[str]:
    if rendered_diagram_markup:
        body = literal(rendered_diagram_markup)
    else:
        # Client-side rendering by the Mermaid script in <head>.
        body = f'<pre class="mermaid">{literal(to_diagram(doc))}</pre>'
    return [
        "",
        "    <h2>Flow Diagram</h2>",
        '    <div class="mermaid-container">',
        f"      {body}",
        "    </div>",
    ]


def _detailed_prompts(doc: AgentDocument) -> list[str]:
    prompted = [n for n in doc.nodes if n.prompt]
    if not prompted:
        return []
    lines = ["", "    <h2>Detailed Node Prompts</h2>"]
    for node in prompted:
        lines.extend(
            [
                '    <div class="prompt-detail">',
                f"      <h4>{literal(node.name)} <code>{literal(node.id)}</code> {_node_type_badge(node)}</h4>",
                f"      <pre>{literal(node.prompt)}</pre>",
                "    </div>",
            ]
        )
    return lines


def _tools(doc: AgentDocument) -> list[str]:
    if not doc.tools:
        return []
    rows = [
        "        <tr>"
        f"<td><code>{literal(t.id)}</code></td>"
        f"<td>{literal(t.name)}</td>"
        f'<td><span class="tool-type">{literal(t.type)}</span></td>'
        f"<td>{literal(t.description)}</td>"
        "</tr>"
        for t in doc.tools
    ]
    return ["", "    <h2>Tools</h2>"] + _table(["Tool ID", "Name", "Type", "Description"], rows)


def _post_call_analysis(doc: AgentDocument) -> list[str]:
    if not doc.post_call_analysis:
        return []
    rows = [
        "        <tr>"
        f"<td><strong>{literal(f.name)}</strong></td>"
        f'<td><span class="field-type">{literal(f.type)}</span></td>'
        f"<td>{literal(f.description)}</td>"
        f"<td>{literal(analysis_options(f))}</td>"
        "</tr>"
        for f in doc.post_call_analysis
    ]
    headers = ["Field", "Type", "Description", "Options/Examples"]
    return ["", "    <h2>Post-Call Analysis Fields</h2>"] + _table(headers, rows)


def _raw_json(doc: AgentDocument) -> list[str]:
    return [
        "",
        "    <h2>Raw JSON</h2>",
        "    <details>",
        "      <summary>Click to expand raw JSON</summary>",
        f"      <pre>{literal(pretty_json(doc.raw_json))}</pre>",
        "    </details>",
    ]


def to_html(doc: AgentDocument, rendered_diagram_markup: Optional[str] = None) -> str:
    """Render a self-contained HTML page for an agent.

    `rendered_diagram_markup` (typically an SVG produced by an external Mermaid
    renderer) is embedded verbatim; without it the raw flowchart text is
    embedded for the page's Mermaid script to render.
    """
    lines: list[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"  <title>{literal(doc.name)} - Documentation</title>",
        f'  <script src="{MERMAID_CDN_URL}"></script>',
        "  <style>",
        STYLESHEET,
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="container">',
    ]
    lines.extend(_overview(doc))
    lines.extend(_settings(doc))
    lines.extend(_global_prompt(doc))
    lines.extend(_nodes(doc))
    lines.extend(_diagram(doc, rendered_diagram_markup))
    lines.extend(_detailed_prompts(doc))
    lines.extend(_tools(doc))
    lines.extend(_post_call_analysis(doc))
    lines.extend(_raw_json(doc))
    lines.extend(["  </div>", "", MERMAID_INIT, "</body>", "</html>"])
    return "\n".join(lines).strip()
