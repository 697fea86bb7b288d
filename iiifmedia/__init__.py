"""Parsers for IIIF ranges, WebVTT voice tags and W3C media fragments."""

from iiifmedia.captions import extract_speaker_segments
from iiifmedia.fragments import parse_fragment_uri
from iiifmedia.models import Chapter, ParsedTarget, SpatialFragment, SpeakerSegment, TemporalFragment
from iiifmedia.ranges import resolve_chapters
from iiifmedia.target import parse_target

__version__ = "0.1.0"

__all__ = [
    "Chapter",
    "ParsedTarget",
    "SpatialFragment",
    "SpeakerSegment",
    "TemporalFragment",
    "extract_speaker_segments",
    "parse_fragment_uri",
    "parse_target",
    "resolve_chapters",
]
