"""
Event classification from note tags.

A map event's classification is the value of one note tag (by default
<EvTp:value>) on its static definition. The host has already parsed the note
into a metadata dict; a tag written without a value is stored as True.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, Union


TagName = Union[str, Sequence[str]]


class HasMeta(Protocol):
    """A static definition carrying parsed note metadata."""

    meta: Mapping[str, Any]


def find_meta_value(meta: Optional[Mapping[str, Any]], tag_name: TagName) -> Optional[str]:
    """
    Read a tag value from parsed note metadata.

    Args:
        meta: Parsed note metadata (tag name -> value)
        tag_name: Tag name, or several alias names checked in order

    Returns:
        The tag value as a string, "" for a value-less tag, None if absent
    """
    if not meta:
        return None

    names = [tag_name] if isinstance(tag_name, str) else list(tag_name)
    for name in names:
        if name not in meta:
            continue
        value = meta[name]
        if value is None or value is False:
            continue
        if value is True:
            return ""
        return value if isinstance(value, str) else str(value)
    return None


def classify_event(definition: Optional[HasMeta], tag_name: TagName) -> Optional[str]:
    """
    Compute the classification of an event definition.

    Called once when the map event instance is built; the caller caches the
    result for the lifetime of the instance.
    """
    if definition is None:
        return None
    return find_meta_value(getattr(definition, "meta", None), tag_name)
