"""Normalize voice-agent JSON exports and render them as Mermaid, Markdown and HTML."""

from .diagram import to_diagram
from .html_doc import to_html
from .markdown import to_markdown
from .model import AgentDocument, AgentEdge, AgentNode, AgentTool, AnalysisField, SettingValue
from .normalize import MalformedInputError, NestingTooDeepError, normalize, normalize_value

__all__ = [
    "AgentDocument",
    "AgentEdge",
    "AgentNode",
    "AgentTool",
    "AnalysisField",
    "MalformedInputError",
    "NestingTooDeepError",
    "SettingValue",
    "normalize",
    "normalize_value",
    "to_diagram",
    "to_html",
    "to_markdown",
]
