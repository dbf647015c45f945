"""
Settings migration - upgrades persisted records to the current schema

Schema versions:
    1: flat, increment-only fields (startAngle/degrees/saturation/lightness,
       often stored as strings), optional color, no `behavior` key
    2: flat color + behavior + nested increment/random/preset objects
    3: v2 plus timer (`timer` object or legacy `timerSeconds`) and the
       shouldShowIcon/shouldShowStatusBar flags
    4: {version, showStatusIndicator, showRibbonIcon, useSeparateContexts,
        contexts: {base, dark, light}}

Records written by this package carry an explicit `version`. Unstamped
records are classified by structural predicates, most recent first, then
upgraded one version at a time. The result is always deep-merged against
the compiled-in defaults and canonicalized, so migrate() is idempotent.
"""

import copy
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from color_cycler.models.color import HSLColor
from color_cycler.models.domain import ContextSettings, GlobalSettings, SCHEMA_VERSION
from color_cycler.models.enums import BehaviorKind, ContextID, LogCategory
from color_cycler.utils.colors import coerce_number, normalize
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.MIGRATION)

Record = Dict[str, Any]

CONTEXT_KEYS = ("color", "behavior", "increment", "random", "preset", "timer")
V1_INCREMENT_KEYS = ("startAngle", "degrees", "saturation", "lightness")
V3_FLAG_KEYS = ("timer", "timerSeconds", "shouldShowIcon", "shouldShowStatusBar")


# ============================================================================
# DEFAULTS
# ============================================================================

def default_color_record() -> Record:
    return HSLColor().to_dict()


def default_context_record() -> Record:
    return ContextSettings().to_dict()


def default_settings_record() -> Record:
    return GlobalSettings().to_dict()


# ============================================================================
# DEEP MERGE
# ============================================================================

def _as_number(value: Any):
    number = coerce_number(value)
    return int(number) if number.is_integer() else number


def _merge_value(default: Any, value: Any) -> Tuple[bool, Any]:
    """Return (accepted, value) for a saved scalar against its default"""
    if isinstance(default, bool):
        return isinstance(value, bool), value
    if isinstance(default, (int, float)) or default is None:
        if value is None:
            return default is None, value
        if isinstance(value, bool) or not math.isfinite(coerce_number(value)):
            return False, value
        return True, _as_number(value)
    if isinstance(default, list):
        return isinstance(value, list), copy.deepcopy(value)
    return isinstance(value, type(default)), value


def deep_merge(defaults: Record, saved: Any, path: str = "") -> Record:
    """
    Merge a saved record into defaults key by key

    - every key of `defaults` is present in the result
    - nested dicts are merged recursively (never replaced wholesale)
    - saved scalars of the wrong type fall back to the default
    - numeric strings ("45") are converted to numbers
    - keys unknown to `defaults` are dropped

    Example:
        deep_merge({"a": 1, "n": {"x": 1, "y": 2}}, {"n": {"x": 5}})
        # {"a": 1, "n": {"x": 5, "y": 2}}
    """
    if not isinstance(saved, dict):
        if saved is not None:
            log.warn("Replacing malformed settings object with defaults", path=path or "<root>")
        return copy.deepcopy(defaults)

    merged: Record = {}
    for key, default in defaults.items():
        key_path = f"{path}.{key}" if path else key
        if key not in saved:
            merged[key] = copy.deepcopy(default)
            continue

        value = saved[key]
        if isinstance(default, dict):
            merged[key] = deep_merge(default, value, key_path)
            continue

        accepted, value = _merge_value(default, value)
        if accepted:
            merged[key] = value
        else:
            log.warn("Invalid settings value, using default", path=key_path, value=repr(saved[key]))
            merged[key] = copy.deepcopy(default)
    return merged


def _merge_color(saved: Any) -> Record:
    color = deep_merge(default_color_record(), saved, "color")
    return normalize(HSLColor.from_dict(color)).to_dict()


def merge_context(saved: Any) -> Record:
    """Deep-merge one context against defaults and bound its colors"""
    merged = deep_merge(default_context_record(), saved, "context")

    merged["color"] = _merge_color(merged["color"])

    valid_behaviors = {kind.value for kind in BehaviorKind}
    if merged["behavior"] not in valid_behaviors:
        log.warn("Unknown behavior, using default", behavior=merged["behavior"])
        merged["behavior"] = BehaviorKind.INCREMENT.value

    colors = [_merge_color(c) for c in merged["preset"]["colorList"] if isinstance(c, dict)]
    merged["preset"]["colorList"] = colors or default_context_record()["preset"]["colorList"]
    return merged


# ============================================================================
# VERSION DETECTION
# ============================================================================

# Checked in order, most recent shape first
VERSION_PREDICATES: List[Tuple[int, Callable[[Record], bool]]] = [
    (4, lambda r: "contexts" in r),
    (3, lambda r: any(key in r for key in V3_FLAG_KEYS)),
    (2, lambda r: "behavior" in r),
]


def detect_version(record: Record) -> int:
    """Explicit `version` stamp wins; otherwise sniff the structure"""
    version = record.get("version")
    if isinstance(version, int) and not isinstance(version, bool) and version >= 1:
        if version > SCHEMA_VERSION:
            log.warn("Settings written by a newer schema, reading as current", version=version)
            return SCHEMA_VERSION
        return version

    for candidate, predicate in VERSION_PREDICATES:
        if predicate(record):
            return candidate
    return 1


# ============================================================================
# CONVERTERS (version N -> N + 1)
# ============================================================================

def _v1_to_v2(record: Record) -> Record:
    """Single unlabeled increment behavior -> behavior enum + nested params"""
    increment = {}
    for key in V1_INCREMENT_KEYS:
        if key in record and math.isfinite(coerce_number(record[key])):
            increment[key] = _as_number(record[key])

    defaults = default_context_record()["increment"]
    color = record.get("color")
    if not isinstance(color, dict):
        color = {
            "h": increment.get("startAngle", defaults["startAngle"]),
            "s": increment.get("saturation", defaults["saturation"]),
            "l": increment.get("lightness", defaults["lightness"]),
        }

    upgraded = {k: v for k, v in record.items() if k not in V1_INCREMENT_KEYS}
    upgraded.update(color=color, behavior=BehaviorKind.INCREMENT.value, increment=increment)
    return upgraded


def _v2_to_v3(record: Record) -> Record:
    """No timer existed before v3"""
    upgraded = dict(record)
    upgraded.setdefault("timer", {"enabled": False, "seconds": None})
    return upgraded


def _legacy_timer(record: Record) -> Any:
    if "timer" in record:
        return record["timer"]
    seconds = record.get("timerSeconds")
    return {"enabled": bool(seconds), "seconds": seconds}


def _v3_to_v4(record: Record) -> Record:
    """
    Flat settings become the `base` context verbatim. dark/light are seeded
    from defaults (not from the user's flat settings) unless present.
    """
    base = {key: record[key] for key in CONTEXT_KEYS if key in record}
    base["timer"] = _legacy_timer(record)

    existing = record.get("contexts") if isinstance(record.get("contexts"), dict) else {}
    contexts = {ContextID.BASE.value: base}
    for context_id in (ContextID.DARK, ContextID.LIGHT):
        contexts[context_id.value] = existing.get(context_id.value) or default_context_record()

    defaults = default_settings_record()
    return {
        "version": 4,
        "showStatusIndicator": record.get("shouldShowStatusBar", defaults["showStatusIndicator"]),
        "showRibbonIcon": record.get("shouldShowIcon", defaults["showRibbonIcon"]),
        "useSeparateContexts": record.get("useSeparateContexts", defaults["useSeparateContexts"]),
        "contexts": contexts,
    }


CONVERTERS: Dict[int, Callable[[Record], Record]] = {
    1: _v1_to_v2,
    2: _v2_to_v3,
    3: _v3_to_v4,
}


# ============================================================================
# PUBLIC API
# ============================================================================

@dataclass
class MigrationResult:
    """
    Outcome of migrate()

    record: canonical current-schema record
    from_version: detected version of the input, None when nothing was saved
    """
    record: Record
    from_version: Optional[int]

    @property
    def migrated(self) -> bool:
        """True when the input was an older schema (caller should re-save)"""
        return self.from_version is not None and self.from_version < SCHEMA_VERSION

    def to_settings(self) -> GlobalSettings:
        return GlobalSettings.from_dict(self.record)


def canonicalize(record: Record) -> Record:
    """Deep-merge a current-schema record against defaults"""
    defaults = default_settings_record()
    defaults.pop("contexts")
    merged = deep_merge(defaults, record)
    saved_contexts = record.get("contexts") if isinstance(record.get("contexts"), dict) else {}
    merged["contexts"] = {
        context_id.value: merge_context(saved_contexts.get(context_id.value))
        for context_id in ContextID
    }
    merged["version"] = SCHEMA_VERSION
    # round-trip through the domain model to clamp every range
    return GlobalSettings.from_dict(merged).to_dict()


def migrate(saved: Any) -> MigrationResult:
    """
    Upgrade any persisted record to the current schema

    Args:
        saved: Whatever the store returned (dict, None, or garbage)

    Returns:
        MigrationResult; `.migrated` tells the caller to save immediately

    Example:
        result = migrate({"color": {"h": 10, "s": 50, "l": 50},
                          "behavior": "increment",
                          "increment": {"degrees": 45}})
        result.record["contexts"]["base"]["increment"]["degrees"]  # 45
        result.migrated                                           # True
    """
    if saved is None:
        return MigrationResult(record=default_settings_record(), from_version=None)
    if not isinstance(saved, dict):
        log.warn("Persisted settings are not an object, using defaults", type=type(saved).__name__)
        return MigrationResult(record=default_settings_record(), from_version=None)

    from_version = detect_version(saved)
    record = copy.deepcopy(saved)
    version = from_version
    while version < SCHEMA_VERSION:
        record = CONVERTERS[version](record)
        version += 1

    if from_version < SCHEMA_VERSION:
        log.info("Settings migrated", from_version=from_version, to_version=SCHEMA_VERSION)

    return MigrationResult(record=canonicalize(record), from_version=from_version)
