"""Value types produced by the iiifmedia parsers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

PIXEL = "pixel"
PERCENT = "percent"


@dataclass(frozen=True)
class TemporalFragment:
    """A ``t=start[,end]`` media fragment, in seconds."""

    start: float
    end: float | None = None

    def to_dict(self) -> dict:
        data = {"start": self.start}
        if self.end is not None:
            data["end"] = self.end
        return data


@dataclass(frozen=True)
class SpatialFragment:
    """An ``xywh=`` region in pixels or percent of the canvas."""

    x: float
    y: float
    width: float
    height: float
    unit: str = PIXEL

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "unit": self.unit,
        }


@dataclass(frozen=True)
class ParsedTarget:
    """A source URI with its fragment stripped and decoded."""

    source: str
    temporal: TemporalFragment | None = None
    spatial: SpatialFragment | None = None

    def to_dict(self) -> dict:
        data: dict = {"source": self.source}
        if self.temporal is not None:
            data["temporal"] = self.temporal.to_dict()
        if self.spatial is not None:
            data["spatial"] = self.spatial.to_dict()
        return data


@dataclass(frozen=True)
class Chapter:
    """A playable time segment resolved from a IIIF Range."""

    id: str
    label: str
    start_time: float
    end_time: float
    thumbnail: str | None = None
    metadata: Mapping[str, str] | None = field(default=None, hash=False)

    def __post_init__(self):
        if self.metadata is not None:
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict:
        data: dict = {
            "id": self.id,
            "label": self.label,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
        if self.thumbnail is not None:
            data["thumbnail"] = self.thumbnail
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data


@dataclass(frozen=True)
class SpeakerSegment:
    """A continuous run of captions spoken by one voice."""

    speaker: str
    start_time: float
    end_time: float

    def to_dict(self) -> dict:
        return {
            "speaker": self.speaker,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
