"""Decoded VITAL document: devices, tracks and their samples."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

import numpy as np


@dataclass(frozen=True)
class Sample:
    timestamp: float  # seconds
    value: float


@dataclass(frozen=True)
class DeviceRecord:
    id: int
    name: str


@dataclass
class Track:
    id: int
    name: str
    samples: Sequence[Sample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def dtstart(self) -> float | None:
        if not self.samples:
            return None
        return min(s.timestamp for s in self.samples)

    @property
    def dtend(self) -> float | None:
        if not self.samples:
            return None
        return max(s.timestamp for s in self.samples)

    def series(self) -> tuple[np.ndarray, np.ndarray]:
        """Return (timestamps, values) as float64 / float32 arrays.

        Samples keep their arrival order; nothing is sorted.
        """
        n = len(self.samples)
        ts = np.fromiter((s.timestamp for s in self.samples),
                         dtype=np.float64, count=n)
        vals = np.fromiter((s.value for s in self.samples),
                           dtype=np.float32, count=n)
        return ts, vals


@dataclass
class Document:
    format_version: str = ""
    tz_offset: int = 0  # minutes, "dgmt"
    devices: Mapping[int, DeviceRecord] = field(default_factory=dict)
    tracks: Mapping[int, Track] = field(default_factory=dict)
    finalized: bool = False

    def finalize(self) -> None:
        """Freeze the document once the stream has ended."""
        if self.finalized:
            return
        for track in self.tracks.values():
            track.samples = tuple(track.samples)
        self.devices = MappingProxyType(dict(self.devices))
        self.tracks = MappingProxyType(dict(self.tracks))
        self.finalized = True

    def find_track(self, name: str) -> Track | None:
        for track in self.tracks.values():
            if track.name == name:
                return track
        return None

    @property
    def sample_count(self) -> int:
        return sum(len(t) for t in self.tracks.values())

    @property
    def dtstart(self) -> float | None:
        starts = [t.dtstart for t in self.tracks.values() if t.samples]
        return min(starts) if starts else None

    @property
    def dtend(self) -> float | None:
        ends = [t.dtend for t in self.tracks.values() if t.samples]
        return max(ends) if ends else None
