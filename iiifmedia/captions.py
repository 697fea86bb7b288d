"""WebVTT speaker extraction from ``<v Speaker>`` voice tags."""

import logging
import re
from dataclasses import dataclass

from iiifmedia.models import SpeakerSegment

logger = logging.getLogger(__name__)

_TIMING_RE = re.compile(r"^\s*(\d[\d:.]*)\s+-->\s+(\d[\d:.]*)(?:\s.*)?$")
_TIMESTAMP_RE = re.compile(r"^(?:(\d+):)?(\d{2}):(\d{2}\.\d+)$")
_NOTE_RE = re.compile(r"^NOTE(?:\s|$)", re.IGNORECASE)
_VOICE_RE = re.compile(r"^<v\s+([^>]+)>", re.IGNORECASE)


@dataclass
class Cue:
    """One timed caption entry."""

    start: float
    end: float
    text: str
    speaker: str | None = None


def parse_timestamp(value: str) -> float | None:
    """Convert ``HH:MM:SS.mmm`` or ``MM:SS.mmm`` to seconds.

    Returns None if *value* is not a WebVTT timestamp.
    """
    match = _TIMESTAMP_RE.match(value)
    if match is None:
        return None
    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2))
    seconds = float(match.group(3))
    return hours * 3600 + minutes * 60 + seconds


def extract_speaker(text: str) -> str | None:
    """Return the trimmed name from a leading ``<v Name>`` tag, if any."""
    match = _VOICE_RE.match(text)
    if match is None:
        return None
    return match.group(1).strip() or None


def parse_cues(vtt_text: str) -> list[Cue]:
    """Tokenize WebVTT text into cues, in document order.

    Cues whose timing line does not parse are dropped along with their
    payload. ``NOTE`` lines inside a payload are ignored.
    """
    lines = vtt_text.splitlines()
    cues: list[Cue] = []
    i = 0
    while i < len(lines):
        timing = _TIMING_RE.match(lines[i])
        i += 1
        if timing is None:
            continue

        payload: list[str] = []
        while i < len(lines) and lines[i].strip() and not _TIMING_RE.match(lines[i]):
            line = lines[i].strip()
            if not _NOTE_RE.match(line):
                payload.append(line)
            i += 1

        start = parse_timestamp(timing.group(1))
        end = parse_timestamp(timing.group(2))
        if start is None or end is None:
            logger.debug("Dropping cue with malformed timing line %r", timing.group(0))
            continue
        if end < start:
            logger.debug("Dropping cue ending before it starts: %r", timing.group(0))
            continue

        text = " ".join(payload)
        cues.append(Cue(start=start, end=end, text=text, speaker=extract_speaker(text)))
    return cues


def merge_cues(cues: list[Cue]) -> list[SpeakerSegment]:
    """Merge consecutive same-speaker cues into segments.

    A cue joins the open segment only when its speaker is identical and it
    starts exactly where the segment ends. Cues without a speaker are skipped.
    """
    segments: list[SpeakerSegment] = []
    speaker: str | None = None
    start = end = 0.0

    for cue in cues:
        if cue.speaker is None:
            continue
        if speaker is not None and cue.speaker == speaker and cue.start == end:
            end = cue.end
            continue
        if speaker is not None:
            segments.append(SpeakerSegment(speaker=speaker, start_time=start, end_time=end))
        speaker, start, end = cue.speaker, cue.start, cue.end

    if speaker is not None:
        segments.append(SpeakerSegment(speaker=speaker, start_time=start, end_time=end))

    return sorted(segments, key=lambda s: s.start_time)


def extract_speaker_segments(vtt_text: str | None) -> list[SpeakerSegment]:
    """Parse WebVTT content into speaker segments sorted by start time.

    Empty or whitespace-only input gives an empty list.
    """
    if vtt_text is None:
        return []
    if not isinstance(vtt_text, str):
        raise TypeError(f"Caption text must be a string, not {type(vtt_text).__name__}")
    if not vtt_text.strip():
        return []
    return merge_cues(parse_cues(vtt_text))
