"""Loading and exact lookup of SEP adjustment tables."""

from __future__ import annotations

import os
import re
import struct

from txtproc.grid import DEFAULT_GRID_SIZE, SpatialGrid

SEP_HASH_SIZE = 8192
MATCH_TOLERANCE = 1e-10

_FLOAT = r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)(?![\d.])"
_ROW_RE = re.compile(rf"\s*({_FLOAT})\s*({_FLOAT})\s*({_FLOAT})", re.IGNORECASE)


def _hash(longitude: float, latitude: float) -> int:
    a, b = struct.unpack("<II", struct.pack("<d", longitude))
    c, d = struct.unpack("<II", struct.pack("<d", latitude))
    return (a ^ b ^ c ^ d) % SEP_HASH_SIZE


class SepHashTable:
    """Exact-coordinate lookup of adjustments, keyed by the bits of the coordinates."""

    def __init__(self, size: int = SEP_HASH_SIZE) -> None:
        if size < 1:
            raise ValueError("table size must be at least 1")
        self.size = size
        self.count = 0
        self._buckets: list[list[tuple[float, float, float]]] = [[] for _ in range(size)]

    def __len__(self) -> int:
        return self.count

    def _bucket(self, longitude: float, latitude: float) -> list[tuple[float, float, float]]:
        return self._buckets[_hash(longitude, latitude) % self.size]

    def insert(self, longitude: float, latitude: float, adjustment: float) -> None:
        """Add an entry; a later entry for the same point hides earlier ones."""
        self._bucket(longitude, latitude).append((longitude, latitude, adjustment))
        self.count += 1

    def lookup(self, longitude: float, latitude: float) -> float | None:
        """Return the adjustment stored for this point, or ``None``."""
        for lon, lat, adjustment in reversed(self._bucket(longitude, latitude)):
            if abs(lon - longitude) < MATCH_TOLERANCE and abs(lat - latitude) < MATCH_TOLERANCE:
                return adjustment
        return None


class SepData:
    """A SEP table held for exact lookup, as a point list, and in a spatial grid."""

    def __init__(
        self, lat_grid_size: int = DEFAULT_GRID_SIZE, lon_grid_size: int = DEFAULT_GRID_SIZE
    ) -> None:
        self.hash_table = SepHashTable()
        self.points: list[tuple[float, float, float]] = []
        self.spatial_grid = SpatialGrid(lat_grid_size, lon_grid_size)

    @property
    def count(self) -> int:
        """Number of points loaded."""
        return self.hash_table.count

    def __len__(self) -> int:
        return self.count

    def add(self, longitude: float, latitude: float, adjustment: float) -> None:
        """Add one point to every index."""
        self.hash_table.insert(longitude, latitude, adjustment)
        self.points.append((longitude, latitude, adjustment))
        self.spatial_grid.add_point(longitude, latitude, adjustment)

    @classmethod
    def load(cls, sep_path: str | os.PathLike[str]) -> SepData:
        """Read ``longitude latitude adjustment`` rows from a SEP file.

        Text after ``;`` is a comment; blank and malformed lines are skipped.
        Raises ``OSError`` when the file cannot be opened.
        """
        data = cls()
        with open(sep_path, encoding="utf-8", errors="replace") as stream:
            for line in stream:
                text = line.split(";", 1)[0].replace("\t", " ").strip()
                if not text:
                    continue
                match = _ROW_RE.match(text)
                if match is None:
                    continue
                longitude, latitude, adjustment = (float(value) for value in match.groups())
                data.add(longitude, latitude, adjustment)
        return data