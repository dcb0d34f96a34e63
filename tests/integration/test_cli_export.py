import io
from pathlib import Path

import pytest

from agentdoc_gen.cli import main


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "agents"

pytestmark = pytest.mark.integration


def run_cli(*args: str) -> int:
    try:
        main(list(args))
    except SystemExit as e:
        return int(e.code)
    return 0


def test_default_formats_write_markdown_and_html(tmp_path, capsys):
    out_dir = tmp_path / "docs"
    code = run_cli(str(FIXTURE_DIR / "retell_export.json"), "--out-dir", str(out_dir))

    assert code == 0
    md = out_dir / "clinic-receptionist-documentation.md"
    html = out_dir / "clinic-receptionist-documentation.html"
    assert md.read_text(encoding="utf-8").startswith("# Clinic Receptionist\n")
    assert html.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
    assert not (out_dir / "clinic-receptionist-flow.mmd").exists()

    captured = capsys.readouterr()
    assert captured.out.splitlines() == [str(md), str(html)]
    assert "generated 2 artifact(s) for 'Clinic Receptionist' with 5 node(s)" in captured.err


def test_mermaid_only(tmp_path):
    code = run_cli(
        str(FIXTURE_DIR / "support_flow.json"), "--out-dir", str(tmp_path), "--format", "mmd"
    )

    assert code == 0
    written = sorted(p.name for p in tmp_path.iterdir())
    assert written == ["support-triage-flow.mmd"]
    text = (tmp_path / "support-triage-flow.mmd").read_text(encoding="utf-8")
    assert text.startswith("graph TD\n")
    assert text.endswith("\n")


def test_unknown_format_is_rejected(tmp_path, capsys):
    code = run_cli(
        str(FIXTURE_DIR / "support_flow.json"), "--out-dir", str(tmp_path), "--format", "pdf"
    )

    assert code == 2
    assert "unknown artifact format(s) 'pdf'" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_invalid_json_fails_without_writing(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"agent_name": "x",', encoding="utf-8")
    out_dir = tmp_path / "out"

    code = run_cli(str(bad), "--out-dir", str(out_dir))

    assert code == 2
    assert "invalid JSON, please check your export" in capsys.readouterr().err
    assert not out_dir.exists()


def test_empty_input_is_reported(tmp_path, capsys):
    empty = tmp_path / "empty.json"
    empty.write_text("  \n", encoding="utf-8")

    assert run_cli(str(empty), "--out-dir", str(tmp_path / "out")) == 2
    assert "no JSON input" in capsys.readouterr().err


def test_missing_export_file(tmp_path, capsys):
    assert run_cli(str(tmp_path / "nope.json")) == 2
    assert "file not found" in capsys.readouterr().err


def test_reads_stdin(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('{"agent_name": "Piped"}'))

    code = run_cli("-", "--out-dir", str(tmp_path), "--format", "md")

    assert code == 0
    md = (tmp_path / "piped-documentation.md").read_text(encoding="utf-8")
    assert "Total nodes: 0" in md
    assert "warning: agent 'unknown' has no conversation nodes" in capsys.readouterr().err


def test_dangling_edges_warn_and_strict_fails(tmp_path, capsys):
    export = str(FIXTURE_DIR / "legacy_demo.json")

    assert run_cli(export, "--out-dir", str(tmp_path / "lenient")) == 0
    err = capsys.readouterr().err
    assert err.count("links to unknown node id") == 3
    assert (tmp_path / "lenient" / "customer-support-agent-documentation.md").exists()

    assert run_cli(export, "--out-dir", str(tmp_path / "strict"), "--strict") == 2
    assert not (tmp_path / "strict").exists()


def test_diagram_markup_is_embedded(tmp_path):
    svg = tmp_path / "flow.svg"
    svg.write_text('<svg id="rendered"><g/></svg>', encoding="utf-8")

    code = run_cli(
        str(FIXTURE_DIR / "support_flow.json"),
        "--out-dir",
        str(tmp_path),
        "--format",
        "html",
        "--diagram-markup",
        str(svg),
    )

    assert code == 0
    page = (tmp_path / "support-triage-documentation.html").read_text(encoding="utf-8")
    assert '<svg id="rendered"><g/></svg>' in page
    assert '<pre class="mermaid">' not in page


def test_stable_ids_for_nodes_without_id(tmp_path):
    export = tmp_path / "noids.json"
    export.write_text(
        '{"agent_name": "No Ids", "nodes": [{"name": "First"}, {"name": "Second"}]}',
        encoding="utf-8",
    )

    code = run_cli(str(export), "--out-dir", str(tmp_path), "--format", "mmd", "--stable-ids")

    assert code == 0
    text = (tmp_path / "no-ids-flow.mmd").read_text(encoding="utf-8")
    assert "  node_0[First]\n  node_1[Second]\n" in text


def test_config_file_supplies_defaults_and_flags_override(tmp_path):
    config = tmp_path / "export.yaml"
    config.write_text(
        f"out_dir: {tmp_path / 'from-config'}\nformats: [mmd, md]\nstrict: true\n",
        encoding="utf-8",
    )
    export = str(FIXTURE_DIR / "support_flow.json")

    # support_flow has an edge without a target, so strict mode from the config fails.
    assert run_cli(export, "--config", str(config)) == 2

    config.write_text(
        f"out_dir: {tmp_path / 'from-config'}\nformats: [mmd, md]\n", encoding="utf-8"
    )
    assert run_cli(export, "--config", str(config)) == 0
    assert sorted(p.name for p in (tmp_path / "from-config").iterdir()) == [
        "support-triage-documentation.md",
        "support-triage-flow.mmd",
    ]

    assert run_cli(export, "--config", str(config), "--format", "html", "--out-dir", str(tmp_path / "flag")) == 0
    assert [p.name for p in (tmp_path / "flag").iterdir()] == ["support-triage-documentation.html"]


def test_bad_config_file(tmp_path, capsys):
    config = tmp_path / "export.yaml"
    config.write_text("- just\n- a list\n", encoding="utf-8")

    assert run_cli(str(FIXTURE_DIR / "support_flow.json"), "--config", str(config)) == 2
    assert "cannot load config" in capsys.readouterr().err


def test_deeply_nested_export_fails_cleanly(tmp_path, capsys):
    deep = tmp_path / "deep.json"
    deep.write_text('{"extra": ' + "[" * 100_000 + "]" * 100_000 + "}", encoding="utf-8")

    assert run_cli(str(deep), "--out-dir", str(tmp_path / "out")) == 2
    assert "cannot process export" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()
