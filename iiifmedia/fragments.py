"""W3C Media Fragment parsing: temporal (``t=``) and spatial (``xywh=``).

Both grammars operate on a fragment body: the part of a URI after ``#``, or
the raw ``value`` of a FragmentSelector. Each is matched independently, so
``t=10,20&xywh=0,0,50,50`` and ``xywh=0,0,50,50&t=10,20`` decode the same.
"""

import logging
import re

from iiifmedia.models import PERCENT, PIXEL, ParsedTarget, SpatialFragment, TemporalFragment

logger = logging.getLogger(__name__)

# "-" is outside the character class: t=-5,20 has an empty start and no end,
# and t=5,-20 reads as the open-ended t=5.
_TEMPORAL_RE = re.compile(r"(?:^|&)t=([0-9.]*)(?:,([0-9.]*))?")
_SPATIAL_RE = re.compile(
    r"(?:^|&)xywh=(?:(pixel|percent):)?([0-9.]+),([0-9.]+),([0-9.]+),([0-9.]+)"
)


def _to_number(run: str) -> float | None:
    try:
        return float(run)
    except ValueError:
        return None


def split_fragment(uri: str) -> tuple[str, str | None]:
    """Split *uri* at the first ``#`` into ``(source, fragment)``.

    ``fragment`` is None when the URI carries no ``#`` at all.
    """
    source, sep, fragment = uri.partition("#")
    return source, (fragment if sep else None)


def has_temporal(fragment: str | None) -> bool:
    """True if the fragment body carries a ``t=`` token, valid or not."""
    return bool(fragment) and _TEMPORAL_RE.search(fragment) is not None


def parse_temporal(fragment: str | None) -> TemporalFragment | None:
    """Decode ``t=start[,end]`` from a fragment body.

    An empty start with an end present (``t=,20``) starts at 0. The result is
    None when both sides are empty, a side is not a number, or the end is not
    strictly after the start.
    """
    if not fragment:
        return None
    match = _TEMPORAL_RE.search(fragment)
    if match is None:
        return None

    start_run = match.group(1)
    end_run = match.group(2) or ""
    if not start_run and not end_run:
        logger.debug("Empty temporal fragment in %r", fragment)
        return None

    start = _to_number(start_run) if start_run else 0.0
    if start is None or start < 0:
        logger.debug("Invalid temporal start in %r", fragment)
        return None

    if not end_run:
        return TemporalFragment(start=start)

    end = _to_number(end_run)
    if end is None or end <= start:
        logger.debug("Invalid temporal end in %r", fragment)
        return None
    return TemporalFragment(start=start, end=end)


def parse_spatial(fragment: str | None) -> SpatialFragment | None:
    """Decode ``xywh=[pixel:|percent:]x,y,w,h`` from a fragment body.

    All four values are required. Percent regions must fit inside a 100x100
    canvas; anything else yields None rather than a clamped region.
    """
    if not fragment:
        return None
    match = _SPATIAL_RE.search(fragment)
    if match is None:
        return None

    unit = match.group(1) or PIXEL
    values = [_to_number(run) for run in match.group(2, 3, 4, 5)]
    if any(v is None for v in values):
        logger.debug("Invalid spatial values in %r", fragment)
        return None
    x, y, width, height = values

    if unit == PERCENT:
        if any(v > 100 for v in values) or x + width > 100 or y + height > 100:
            logger.debug("Percent region out of bounds in %r", fragment)
            return None

    return SpatialFragment(x=x, y=y, width=width, height=height, unit=unit)


def parse_fragment(source: str, fragment: str | None) -> ParsedTarget:
    """Attach whatever temporal/spatial parts *fragment* holds to *source*."""
    return ParsedTarget(
        source=source,
        temporal=parse_temporal(fragment),
        spatial=parse_spatial(fragment),
    )


def parse_fragment_uri(uri: str) -> ParsedTarget:
    """Parse a URI that may end in a media fragment.

    >>> parse_fragment_uri("https://example.org/canvas#t=10,20").temporal
    TemporalFragment(start=10.0, end=20.0)
    """
    source, fragment = split_fragment(uri)
    return parse_fragment(source, fragment)
