"""
Interceptor configuration.

Rule table models and the JSON / plugin-parameter loader.
"""

from event_interceptor.config.interceptor_models import (
    DEFAULT_TAG_NAME,
    NONE_SENTINEL,
    InterceptorRule,
    InterceptorSettings,
    Timing,
)
from event_interceptor.config.settings_loader import (
    InterceptorConfigError,
    LoadResult,
    dump_settings,
    load_settings,
    parse_rule,
    parse_settings,
    validate_rules,
)

__all__ = [
    "DEFAULT_TAG_NAME",
    "NONE_SENTINEL",
    "InterceptorRule",
    "InterceptorSettings",
    "Timing",
    "InterceptorConfigError",
    "LoadResult",
    "dump_settings",
    "load_settings",
    "parse_rule",
    "parse_settings",
    "validate_rules",
]
