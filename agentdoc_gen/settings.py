from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .constants import DURATION_PROBES, LEGACY_SETTINGS_PATHS, SETTING_PROBES
from .model import SettingValue
from .model_view import FieldChain, lookup
from .textfmt import format_number

_LEGACY_SETTINGS = FieldChain(LEGACY_SETTINGS_PATHS)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_half_up(value: Decimal, places: str) -> str:
    return str(value.quantize(Decimal(places), rounding=ROUND_HALF_UP))


def format_duration(ms: int | float) -> str:
    """Render a millisecond count: `250ms`, `45s`, `1.5 min`."""
    if ms < 1000:
        return f"{format_number(ms)}ms"
    # Wide enough for any float magnitude, so quantize never overflows.
    with localcontext() as ctx:
        ctx.prec = 400
        exact = Decimal(str(ms))
        if ms < 60000:
            return f"{_round_half_up(exact / 1000, '1')}s"
        return f"{_round_half_up(exact / 60000, '0.1')} min"


def build_settings(raw: Any) -> dict[str, SettingValue]:
    """Assemble the ordered settings bag for one export.

    Named probes are inserted first (only when present), then the legacy
    free-form bag is merged over them: its non-null entries overwrite named
    keys in place.
    """
    settings: dict[str, SettingValue] = {}

    for key, path in SETTING_PROBES:
        value = lookup(raw, path)
        if value is not None:
            settings[key] = SettingValue.of(value)

    for key, path in DURATION_PROBES:
        value = lookup(raw, path)
        if value is None:
            continue
        if _is_number(value):
            settings[key] = SettingValue.duration(format_duration(value))
        else:
            settings[key] = SettingValue.of(value)

    legacy = _LEGACY_SETTINGS.resolve(raw)
    if isinstance(legacy, dict):
        for key, value in legacy.items():
            if value is None:
                continue
            settings[str(key)] = SettingValue.of(value)

    return settings
