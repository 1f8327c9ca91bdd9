"""
Interceptor settings loader.

Loads the interceptor table and tag name from JSON. Two shapes are accepted:

- native JSON, where the rule list is a list of objects with real booleans
  and numbers
- the plugin parameter format, where every value is a string and nested
  structures are themselves JSON-encoded strings, e.g.
  {"interceptorList": "[\"{\\\"timing\\\":\\\"start\\\", ...}\"]"}

Invalid rules are skipped with a warning so that one bad entry does not
disable the rest of the table.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from event_interceptor.config.interceptor_models import (
    DEFAULT_TAG_NAME,
    InterceptorRule,
    InterceptorSettings,
    Timing,
)

logger = logging.getLogger(__name__)


class InterceptorConfigError(Exception):
    """Raised when interceptor settings cannot be read at all."""

    pass


@dataclass
class LoadResult:
    """Result of a loading operation."""
    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# Plugin parameter key -> dataclass field
_RULE_KEYS = {
    "id": "id",
    "tagValue": "tag_value",
    "timing": "timing",
    "pageIndex": "page_index",
    "invalidParallel": "invalid_parallel",
    "commonEventId": "common_event_id",
}


def _decode_nested(value: Any) -> Any:
    """Decode a value that may be a JSON-encoded string (plugin format)."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith(("[", "{")):
            try:
                return json.loads(stripped)
            except json.JSONDecodeError as e:
                raise ValueError(f"malformed nested JSON: {e}") from e
    return value


def _parse_bool(value: Any) -> bool:
    """Parse a boolean that may be given as "true"/"false"."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "on"):
            return True
        if lowered in ("false", "0", "off", ""):
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


def _parse_int(value: Any, name: str) -> int:
    """Parse an integer that may be given as a numeric string."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase plugin keys to snake_case field names."""
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        normalized[_RULE_KEYS.get(key, key)] = value
    return normalized


def parse_rule(data: Any) -> InterceptorRule:
    """
    Parse one interceptor rule.

    Args:
        data: Rule dict, or a JSON string of one (plugin format)

    Returns:
        InterceptorRule

    Raises:
        ValueError: If the rule is malformed
    """
    data = _decode_nested(data)
    if not isinstance(data, dict):
        raise ValueError(f"rule must be an object, got {type(data).__name__}")

    d = _normalize_keys(data)

    timing_raw = d.get("timing", Timing.START.value)
    try:
        timing = Timing(str(timing_raw).strip())
    except ValueError:
        raise ValueError(f"unknown timing {timing_raw!r}") from None

    page_index = _parse_int(d.get("page_index", 0), "pageIndex")
    if page_index < 0:
        raise ValueError(f"pageIndex must not be negative, got {page_index}")

    tag_value = d.get("tag_value")
    if tag_value is not None:
        tag_value = str(tag_value)

    return InterceptorRule(
        id=str(d.get("id") or ""),
        tag_value=tag_value or None,
        timing=timing,
        page_index=page_index,
        invalid_parallel=_parse_bool(d.get("invalid_parallel", False)),
        common_event_id=_parse_int(d.get("common_event_id", 1), "commonEventId"),
    )


def parse_settings(data: dict[str, Any]) -> tuple[InterceptorSettings, LoadResult]:
    """
    Parse interceptor settings from a parameter dict.

    Args:
        data: Dict with "interceptorList" and "tagName" (snake_case
            "interceptor_list"/"tag_name" also accepted)

    Returns:
        Tuple of (settings, load result). Skipped rules are reported as
        warnings.
    """
    result = LoadResult(success=True)

    raw_list = data.get("interceptorList", data.get("interceptor_list"))
    try:
        raw_list = _decode_nested(raw_list)
    except ValueError as e:
        result.errors.append(f"interceptorList: {e}")
        result.success = False
        raw_list = None

    if raw_list in (None, ""):
        raw_list = []
    if not isinstance(raw_list, list):
        result.errors.append(
            f"interceptorList must be a list, got {type(raw_list).__name__}"
        )
        result.success = False
        raw_list = []

    rules: list[InterceptorRule] = []
    for position, raw_rule in enumerate(raw_list, start=1):
        try:
            rules.append(parse_rule(raw_rule))
        except ValueError as e:
            message = f"Interceptor rule #{position} skipped: {e}"
            logger.warning(message)
            result.warnings.append(message)

    tag_name = data.get("tagName", data.get("tag_name"))
    if not tag_name:
        tag_name = DEFAULT_TAG_NAME

    settings = InterceptorSettings(rules=tuple(rules), tag_name=str(tag_name))
    logger.debug(f"Parsed {len(rules)} interceptor rules (tag name {settings.tag_name!r})")
    return settings, result


def load_settings(path: Path) -> tuple[InterceptorSettings, LoadResult]:
    """
    Load interceptor settings from a JSON file.

    Args:
        path: Path to the settings file

    Returns:
        Tuple of (settings, load result). Default settings with a warning
        if the file does not exist.

    Raises:
        InterceptorConfigError: If the file cannot be read or is not a JSON object
    """
    path = Path(path)
    if not path.exists():
        message = f"Interceptor settings not found at {path}, using defaults"
        logger.warning(message)
        return InterceptorSettings(), LoadResult(success=True, warnings=[message])

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InterceptorConfigError(f"Cannot load interceptor settings from {path}: {e}") from e

    if not isinstance(data, dict):
        raise InterceptorConfigError(
            f"Interceptor settings in {path} must be a JSON object, got {type(data).__name__}"
        )

    settings, result = parse_settings(data)
    for error in result.errors:
        logger.error(f"Interceptor settings error: {error}")
    logger.info(f"Loaded {len(settings.rules)} interceptor rules from {path}")
    return settings, result


def validate_rules(
    settings: InterceptorSettings,
    common_event_ids: Iterable[int],
) -> LoadResult:
    """
    Check that every rule points at an existing common event.

    Rules with dangling references stay inert at runtime; this check is for
    reporting them ahead of time.

    Args:
        settings: Loaded settings
        common_event_ids: Ids of the common events that exist

    Returns:
        LoadResult with one warning per dangling rule
    """
    known = set(common_event_ids)
    result = LoadResult(success=True)
    for position, rule in enumerate(settings.rules, start=1):
        if rule.common_event_id not in known:
            label = rule.id or f"#{position}"
            result.warnings.append(
                f"Interceptor rule {label} refers to missing common event {rule.common_event_id}"
            )
    return result


def dump_settings(settings: InterceptorSettings, path: Optional[Path] = None) -> dict[str, Any]:
    """
    Convert settings to a native JSON dict, optionally writing it to a file.

    Args:
        settings: Settings to export
        path: Optional file to write

    Returns:
        The exported dict
    """
    data = {
        "tagName": settings.tag_name,
        "interceptorList": [rule.to_dict() for rule in settings.rules],
    }
    if path is not None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    return data
