import json

import pytest

from agentdoc_gen.model import SettingValue
from agentdoc_gen.normalize import normalize
from agentdoc_gen.settings import build_settings, format_duration


@pytest.mark.parametrize(
    "ms, expected",
    [
        (0, "0ms"),
        (999, "999ms"),
        (1000, "1s"),
        (1499, "1s"),
        (1500, "2s"),
        (10000, "10s"),
        (59999, "60s"),
        (60000, "1.0 min"),
        (90000, "1.5 min"),
        (100000, "1.7 min"),
        (1800000, "30.0 min"),
        (2500.0, "3s"),
    ],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


def test_named_probes_in_fixed_order():
    raw = {
        "end_call_after_silence_ms": 600000,
        "stt_mode": "fast",
        "voice_id": "v1",
        "language": "de-DE",
        "conversationFlow": {"model_choice": {"model": "gpt-4.1"}, "model_temperature": 0},
        "voice_speed": 0,
        "max_call_duration_ms": 500,
    }
    settings = build_settings(raw)

    assert list(settings) == [
        "model",
        "temperature",
        "language",
        "voice",
        "voiceSpeed",
        "sttMode",
        "maxCallDuration",
        "endCallAfterSilence",
    ]
    assert settings["temperature"] == SettingValue("number", 0)
    assert settings["maxCallDuration"] == SettingValue("duration", "500ms")
    assert settings["endCallAfterSilence"].render() == "10.0 min"


def test_absent_and_null_probes_are_not_inserted():
    assert build_settings({"language": None, "voice_id": None}) == {}
    assert build_settings("not a mapping") == {}
    assert build_settings([1, 2]) == {}


def test_legacy_settings_overwrite_named_keys_in_place():
    raw = {
        "language": "en-US",
        "voice_id": "named-voice",
        "settings": {"voice": "legacy-voice", "extra": True, "dropped": None},
    }
    settings = build_settings(raw)

    assert list(settings) == ["language", "voice", "extra"]
    assert settings["voice"] == SettingValue("string", "legacy-voice")
    assert settings["extra"].render() == "true"


def test_legacy_config_object_is_second_choice():
    settings = build_settings({"config": {"maxDuration": 300}})
    assert settings == {"maxDuration": SettingValue("number", 300)}


def test_non_numeric_duration_is_kept_verbatim():
    settings = build_settings({"reminder_trigger_ms": "soon"})
    assert settings["reminderTrigger"] == SettingValue("string", "soon")


def test_structured_legacy_values_render_as_json():
    value = SettingValue.of({"a": [1, 2]})
    assert value.kind == "structured"
    assert value.render() == '{"a":[1,2]}'


def test_setting_value_kinds():
    assert SettingValue.of(True).kind == "boolean"
    assert SettingValue.of(0.5).kind == "number"
    assert SettingValue.of("x").kind == "string"
    assert SettingValue.of(1.0).render() == "1"


def test_settings_merge_through_normalize():
    doc = normalize(json.dumps({"voice_id": "a", "settings": {"voice": "b"}}))
    assert doc.settings["voice"].render() == "b"
