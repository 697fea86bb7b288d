"""IIIF Range resolver: flattens manifest ``structures`` into chapters.

Each Range contributes at most one chapter, timed by the first of its direct
Canvas references that carries a ``t=`` fragment. Nested Ranges are walked
depth-first in document order and contribute their own chapters.
"""

import logging
from collections.abc import Mapping

from iiifmedia.fragments import has_temporal, parse_temporal, split_fragment
from iiifmedia.models import Chapter

logger = logging.getLogger(__name__)

RANGE = "Range"
DEFAULT_LANGUAGE = "en"
UNTITLED = "Untitled Chapter"


def _first_entry(values) -> str | None:
    if isinstance(values, list) and values and isinstance(values[0], str) and values[0]:
        return values[0]
    return None


def extract_label(label_map, language: str = DEFAULT_LANGUAGE) -> str:
    """Pick a display string from a IIIF language map.

    Prefers *language*, then the first language with a non-empty first entry,
    then the placeholder ``"Untitled Chapter"``.
    """
    if not isinstance(label_map, Mapping):
        return UNTITLED

    preferred = _first_entry(label_map.get(language))
    if preferred:
        return preferred

    for values in label_map.values():
        label = _first_entry(values)
        if label:
            return label
    return UNTITLED


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _canvas_durations(canvases) -> dict[str, float]:
    durations: dict[str, float] = {}
    if not isinstance(canvases, list):
        return durations
    for canvas in canvases:
        if not isinstance(canvas, Mapping):
            continue
        canvas_id = canvas.get("id")
        duration = canvas.get("duration")
        if isinstance(canvas_id, str) and _is_number(duration) and duration >= 0:
            durations[canvas_id] = float(duration)
    return durations


def _thumbnail(thumbnails) -> str | None:
    if isinstance(thumbnails, list) and thumbnails and isinstance(thumbnails[0], Mapping):
        thumb_id = thumbnails[0].get("id")
        if isinstance(thumb_id, str):
            return thumb_id
    return None


def _metadata(entries, language: str) -> dict[str, str] | None:
    if not isinstance(entries, list) or not entries:
        return None
    result: dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        key = extract_label(entry.get("label"), language)
        result[key] = extract_label(entry.get("value"), language)
    return result or None


def _split_items(items) -> tuple[list[str], list[Mapping]]:
    """Separate direct temporal Canvas ids from nested Ranges, keeping order."""
    temporal_ids: list[str] = []
    nested: list[Mapping] = []
    if not isinstance(items, list):
        return temporal_ids, nested
    for item in items:
        if not isinstance(item, Mapping):
            continue
        if item.get("type") == RANGE:
            nested.append(item)
            continue
        item_id = item.get("id")
        if isinstance(item_id, str) and has_temporal(split_fragment(item_id)[1]):
            temporal_ids.append(item_id)
    return temporal_ids, nested


def _chapter_from_range(
    range_: Mapping,
    canvas_ref: str,
    durations: dict[str, float],
    language: str,
) -> Chapter | None:
    canvas_id, fragment = split_fragment(canvas_ref)
    timing = parse_temporal(fragment)
    if timing is None:
        logger.debug("Skipping range %r: malformed fragment %r", range_.get("id"), canvas_ref)
        return None

    end_time = timing.end
    if end_time is None:
        # Open-ended t=start runs to the end of the canvas
        end_time = durations.get(canvas_id)
        if end_time is None:
            logger.debug("Skipping range %r: no duration for canvas %r", range_.get("id"), canvas_id)
            return None
        if end_time <= timing.start:
            logger.debug("Skipping range %r: start %s beyond canvas duration", range_.get("id"), timing.start)
            return None

    range_id = range_.get("id")
    return Chapter(
        id=range_id if isinstance(range_id, str) else "",
        label=extract_label(range_.get("label"), language),
        start_time=timing.start,
        end_time=end_time,
        thumbnail=_thumbnail(range_.get("thumbnail")),
        metadata=_metadata(range_.get("metadata"), language),
    )


def _walk_ranges(ranges: list[Mapping], durations: dict[str, float], language: str) -> list[Chapter]:
    """Depth-first, document-order walk over Ranges of any nesting depth."""
    chapters: list[Chapter] = []
    stack = list(reversed(ranges))
    while stack:
        range_ = stack.pop()
        temporal_ids, nested = _split_items(range_.get("items"))

        if temporal_ids:
            chapter = _chapter_from_range(range_, temporal_ids[0], durations, language)
            if chapter is not None:
                chapters.append(chapter)

        # Reversed so the first child is popped next
        stack.extend(reversed(nested))
    return chapters


def resolve_chapters(manifest: Mapping, language: str = DEFAULT_LANGUAGE) -> list[Chapter]:
    """Resolve a IIIF manifest's Range structures into chapters.

    Args:
        manifest: Parsed manifest JSON. Only ``structures`` and ``items``
            (canvases with ``id`` and ``duration``) are read.
        language: Preferred language key for labels.

    Returns:
        Chapters sorted by start time; ties keep document order. Ranges that
        cannot be timed are skipped, so the worst case is an empty list.
    """
    if not isinstance(manifest, Mapping):
        raise TypeError(f"Manifest must be a mapping, not {type(manifest).__name__}")

    structures = manifest.get("structures")
    if not isinstance(structures, list) or not structures:
        return []

    durations = _canvas_durations(manifest.get("items"))

    top_level = [r for r in structures if isinstance(r, Mapping)]
    chapters = _walk_ranges(top_level, durations, language)
    return sorted(chapters, key=lambda c: c.start_time)
