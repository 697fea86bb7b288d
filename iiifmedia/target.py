"""IIIF annotation target parsing.

A target is either a plain URI string (``canvas#t=10,20``) or a
``SpecificResource`` object whose ``FragmentSelector`` carries the fragment
body separately from the source.
"""

import logging
from collections.abc import Mapping, Sequence

from iiifmedia.fragments import parse_fragment, parse_fragment_uri
from iiifmedia.models import ParsedTarget

logger = logging.getLogger(__name__)

SPECIFIC_RESOURCE = "SpecificResource"
FRAGMENT_SELECTOR = "FragmentSelector"


def _resource_source(source) -> str:
    if isinstance(source, str):
        return source
    if isinstance(source, Mapping) and isinstance(source.get("id"), str):
        return source["id"]
    return ""


def _fragment_selector_value(selector) -> str | None:
    """Return the non-empty value of the first FragmentSelector, if any."""
    if isinstance(selector, Mapping):
        candidates = [selector]
    elif isinstance(selector, Sequence) and not isinstance(selector, str):
        candidates = [s for s in selector if isinstance(s, Mapping)]
    else:
        return None

    for candidate in candidates:
        if candidate.get("type") != FRAGMENT_SELECTOR:
            continue
        value = candidate.get("value")
        if isinstance(value, str) and value:
            return value
    return None


def _parse_specific_resource(resource: Mapping) -> ParsedTarget | None:
    if resource.get("type") != SPECIFIC_RESOURCE:
        logger.debug("Ignoring target object of type %r", resource.get("type"))
        return None

    source = _resource_source(resource.get("source"))
    value = _fragment_selector_value(resource.get("selector"))
    if value is None:
        return ParsedTarget(source=source)
    return parse_fragment(source, value)


def parse_target(target) -> ParsedTarget | None:
    """Parse an annotation target into its source and media fragments.

    Returns None for empty input and for objects that are not a
    ``SpecificResource``. Raises TypeError for values that are neither a
    string nor a mapping.
    """
    if not target:
        return None
    if isinstance(target, str):
        return parse_fragment_uri(target)
    if isinstance(target, Mapping):
        return _parse_specific_resource(target)
    raise TypeError(f"Unsupported annotation target type: {type(target).__name__}")
