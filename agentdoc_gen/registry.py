from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .constants import ARTIFACT_SUFFIXES
from .diagram import to_diagram
from .html_doc import to_html
from .markdown import to_markdown
from .model import AgentDocument

RenderFn = Callable[[AgentDocument, "RenderConfig"], str]


@dataclass(frozen=True)
class RenderConfig:
    # Pre-rendered diagram fragment (e.g. SVG) for the HTML page.
    diagram_markup: Optional[str] = None


@dataclass(frozen=True)
class ArtifactSpec:
    artifact_id: str
    title: str
    suffix: str
    render: RenderFn


def _render_diagram(doc: AgentDocument, _: RenderConfig) -> str:
    return to_diagram(doc) + "\n"


def _render_markdown(doc: AgentDocument, _: RenderConfig) -> str:
    return to_markdown(doc)


def _render_html(doc: AgentDocument, cfg: RenderConfig) -> str:
    return to_html(doc, cfg.diagram_markup)


ARTIFACTS: list[ArtifactSpec] = [
    ArtifactSpec(
        artifact_id="mmd",
        title="Flow diagram (Mermaid)",
        suffix=ARTIFACT_SUFFIXES["mmd"],
        render=_render_diagram,
    ),
    ArtifactSpec(
        artifact_id="md",
        title="Markdown documentation",
        suffix=ARTIFACT_SUFFIXES["md"],
        render=_render_markdown,
    ),
    ArtifactSpec(
        artifact_id="html",
        title="HTML documentation",
        suffix=ARTIFACT_SUFFIXES["html"],
        render=_render_html,
    ),
]


def select_artifacts(formats: tuple[str, ...]) -> list[ArtifactSpec]:
    """Artifacts for the requested ids, in registry order."""
    known = {spec.artifact_id for spec in ARTIFACTS}
    unknown = [f for f in formats if f not in known]
    if unknown:
        raise ValueError(
            f"unknown artifact format(s) {', '.join(map(repr, unknown))}; "
            f"expected any of {', '.join(sorted(known))}"
        )
    return [spec for spec in ARTIFACTS if spec.artifact_id in formats]
