from pathlib import Path

from agentdoc_gen.model import AgentDocument, AgentEdge, AgentNode
from agentdoc_gen.normalize import normalize
from agentdoc_gen.validate import ValidateConfig, validate_document, validate_document_issues


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "agents"


def node(node_id: str, *edges: AgentEdge) -> AgentNode:
    return AgentNode(id=node_id, name=node_id, type="conversation", prompt="", next=edges)


def make_doc(*nodes: AgentNode) -> AgentDocument:
    return AgentDocument(id="a", name="A", description="", global_prompt="", nodes=nodes)


def codes(doc: AgentDocument, cfg=None) -> list[str]:
    return [iss.code for iss in validate_document_issues(doc, cfg)]


def test_clean_export_has_no_issues():
    doc = normalize((FIXTURE_DIR / "retell_export.json").read_text(encoding="utf-8"))
    assert validate_document_issues(doc) == []


def test_no_nodes_warning():
    issues = validate_document_issues(normalize("{}"))
    assert [i.code for i in issues] == ["W_NO_NODES"]
    assert issues[0].severity == "warning"
    assert issues[0].path == "/nodes"


def test_dangling_and_empty_target_edges():
    doc = make_doc(
        node("a", AgentEdge("go", "b"), AgentEdge("lost", "nowhere"), AgentEdge("x", "")),
        node("b"),
    )
    issues = validate_document_issues(doc)

    assert [(i.code, i.path) for i in issues] == [
        ("W_EDGE_DANGLING", "/nodes/0/next/1"),
        ("W_EDGE_EMPTY_TARGET", "/nodes/0/next/2"),
    ]


def test_duplicate_and_colliding_ids():
    doc = make_doc(node("a-b"), node("a_b"), node("a-b"))
    assert codes(doc) == ["W_NODE_DIAGRAM_ID_COLLISION", "W_NODE_DUPLICATE_ID"]


def test_legacy_demo_reports_its_dangling_targets():
    doc = normalize((FIXTURE_DIR / "legacy_demo.json").read_text(encoding="utf-8"))
    _, warnings = validate_document(doc)

    assert len(warnings) == 3
    assert any("'node_reschedule'" in w for w in warnings)
    assert any("'node_cancel'" in w for w in warnings)
    assert any("'node_urgent_care'" in w for w in warnings)


def test_ignore_and_escalate():
    doc = make_doc(node("a", AgentEdge("lost", "nowhere"), AgentEdge("x", "")))

    assert codes(doc, ValidateConfig(ignore={"W_EDGE_EMPTY_TARGET"})) == ["W_EDGE_DANGLING"]

    issues = validate_document_issues(doc, ValidateConfig(escalate={"W_EDGE_DANGLING"}))
    assert [i.severity for i in issues] == ["error", "warning"]


def test_legacy_wrapper_splits_by_severity():
    errors, warnings = validate_document(make_doc(node("a", AgentEdge("x", "zzz"))))
    assert errors == []
    assert warnings == ["node 'a' links to unknown node id 'zzz'"]
