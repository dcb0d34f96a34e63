# agentdoc_gen/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional, Sequence

from .constants import FORMATS_DEFAULT
from .io import load_config, read_export_text, read_markup
from .normalize import MalformedInputError, NestingTooDeepError, index_node_id, normalize
from .registry import RenderConfig, select_artifacts
from .validate import validate_document
from .writer import artifact_path, write_text

OUT_DIR_DEFAULT = Path("agent_docs")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agentdoc-gen",
        description=(
            "Generate Mermaid, Markdown and HTML documentation from a voice-agent "
            "JSON export."
        ),
    )
    parser.add_argument(
        "export",
        type=Path,
        help="Path to the agent export JSON file, or '-' to read stdin.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML export config; command-line flags override its values.",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help=f"Output directory for generated artifacts (default: {OUT_DIR_DEFAULT}).",
    )
    parser.add_argument(
        "--format",
        dest="formats",
        type=str,
        default=None,
        help=(
            "Comma-separated artifacts to write: mmd, md, html "
            f"(default: {','.join(FORMATS_DEFAULT)})."
        ),
    )
    parser.add_argument(
        "--diagram-markup",
        type=Path,
        default=None,
        help=(
            "Pre-rendered diagram (e.g. SVG from mermaid-cli) to embed in the HTML "
            "page instead of client-side rendering."
        ),
    )
    parser.add_argument(
        "--stable-ids",
        action="store_true",
        default=None,
        help="Give nodes without an id a position-based id instead of a random one.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on lint warnings (dangling edges, duplicate or colliding ids).",
    )
    return parser


def _pick(flag: Any, config: dict[str, Any], key: str, default: Any) -> Any:
    if flag is not None:
        return flag
    if config.get(key) is not None:
        return config[key]
    return default


def _fail(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(2)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    args = _build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else {}
    except (FileNotFoundError, TypeError, ValueError) as e:
        _fail(f"cannot load config: {e}")

    out_dir = Path(_pick(args.out_dir, config, "out_dir", OUT_DIR_DEFAULT))
    formats_raw = _pick(args.formats, config, "formats", FORMATS_DEFAULT)
    if isinstance(formats_raw, str):
        formats_raw = formats_raw.split(",")
    formats = tuple(str(f).strip() for f in formats_raw if str(f).strip())
    markup_path = _pick(args.diagram_markup, config, "diagram_markup", None)
    stable_ids = bool(_pick(args.stable_ids, config, "stable_ids", False))
    strict = bool(_pick(args.strict, config, "strict", False))

    try:
        artifacts = select_artifacts(formats)
        raw_text = read_export_text(args.export)
        markup = read_markup(Path(markup_path)) if markup_path else None
    except FileNotFoundError as e:
        _fail(f"file not found: {e}")
    except ValueError as e:
        _fail(str(e))

    if not raw_text.strip():
        _fail("no JSON input; pass an agent export file or pipe one on stdin")

    try:
        doc = normalize(raw_text, node_id_factory=index_node_id if stable_ids else None)
    except MalformedInputError as e:
        _fail(f"invalid JSON, please check your export ({e})")
    except NestingTooDeepError as e:
        _fail(f"cannot process export: {e}")

    errors, warnings = validate_document(doc)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    cfg = RenderConfig(diagram_markup=markup)
    try:
        for spec in artifacts:
            path = artifact_path(out_dir, doc.name, spec.suffix)
            write_text(path, spec.render(doc, cfg))
            print(path)
    except ValueError as e:
        _fail(str(e))

    print(
        f"generated {len(artifacts)} artifact(s) for {doc.name!r} with {len(doc.nodes)} node(s)",
        file=sys.stderr,
    )
