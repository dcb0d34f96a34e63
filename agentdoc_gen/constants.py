# agentdoc_gen/constants.py
from __future__ import annotations

# Field resolution chains: (candidate dotted paths, default). First non-null
# path wins; see model_view.FieldChain.
AGENT_ID_PATHS: tuple[str, ...] = ("agent_id", "id", "agentId")
AGENT_NAME_PATHS: tuple[str, ...] = ("agent_name", "name", "agentName")
AGENT_DESCRIPTION_PATHS: tuple[str, ...] = ("description", "version_title", "desc")
GLOBAL_PROMPT_PATHS: tuple[str, ...] = ("conversationFlow.global_prompt", "global_prompt")
NODE_LIST_PATHS: tuple[str, ...] = (
    "conversationFlow.nodes",
    "nodes",
    "flow.nodes",
    "steps",
)

NODE_ID_PATHS: tuple[str, ...] = ("id", "node_id", "nodeId")
NODE_NAME_PATHS: tuple[str, ...] = ("name", "label", "title")
NODE_TYPE_PATHS: tuple[str, ...] = ("type", "node_type", "nodeType")
NODE_PROMPT_PATHS: tuple[str, ...] = ("instruction.text", "prompt", "instructions", "content")

EDGE_TARGET_PATHS: tuple[str, ...] = (
    "destination_node_id",
    "targetNodeId",
    "target",
    "next_node",
)
EDGE_CONDITION_PATHS: tuple[str, ...] = ("transition_condition.prompt", "condition", "label")

# Legacy flat `next: [...]` entries carry their own dialect.
LEGACY_NEXT_TARGET_PATHS: tuple[str, ...] = ("targetNodeId", "target", "next_node", "nextNode")
LEGACY_NEXT_CONDITION_PATHS: tuple[str, ...] = ("condition", "label", "trigger")

TOOL_LIST_PATHS: tuple[str, ...] = ("conversationFlow.tools", "tools")
TOOL_ID_PATHS: tuple[str, ...] = ("tool_id", "id")

ANALYSIS_LIST_PATHS: tuple[str, ...] = ("post_call_analysis_data",)
LEGACY_SETTINGS_PATHS: tuple[str, ...] = ("settings", "config")

DEFAULT_AGENT_ID = "unknown"
DEFAULT_AGENT_NAME = "Unnamed Agent"
DEFAULT_NODE_NAME = "Unnamed Node"
DEFAULT_NODE_TYPE = "unknown"
DEFAULT_EDGE_CONDITION = "default"
DEFAULT_TOOL_NAME = "Unnamed Tool"
DEFAULT_TOOL_TYPE = "unknown"
DEFAULT_ANALYSIS_TYPE = "string"

ELSE_CONDITION = "Else"
SKIP_RESPONSE_CONDITION = "Skip Response"

# Named settings probes, in insertion order: (settings key, source path).
SETTING_PROBES: tuple[tuple[str, str], ...] = (
    ("model", "conversationFlow.model_choice.model"),
    ("temperature", "conversationFlow.model_temperature"),
    ("language", "language"),
    ("voice", "voice_id"),
    ("voiceSpeed", "voice_speed"),
    ("voiceTemperature", "voice_temperature"),
    ("responsiveness", "responsiveness"),
    ("interruptionSensitivity", "interruption_sensitivity"),
    ("ambientSound", "ambient_sound"),
    ("sttMode", "stt_mode"),
)

# Millisecond-valued settings rendered as human durations.
DURATION_PROBES: tuple[tuple[str, str], ...] = (
    ("maxCallDuration", "max_call_duration_ms"),
    ("reminderTrigger", "reminder_trigger_ms"),
    ("endCallAfterSilence", "end_call_after_silence_ms"),
)

NODE_LABEL_MAX = 25
EDGE_LABEL_MAX = 15
PROMPT_PREVIEW_MAX = 150

EMPTY_CELL = "—"
MERMAID_CDN_URL = "https://cdn.jsdelivr.net/npm/mermaid/dist/mermaid.min.js"

# Artifact id -> filename suffix (appended to the slugged agent name).
ARTIFACT_SUFFIXES: dict[str, str] = {
    "mmd": "-flow.mmd",
    "md": "-documentation.md",
    "html": "-documentation.html",
}
FORMATS_DEFAULT: tuple[str, ...] = ("md", "html")
