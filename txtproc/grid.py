"""Spatial grid of adjustment points with two-neighbour interpolation."""

from __future__ import annotations

import math
import sys

EARTH_RADIUS_M = 6371000.0
DEFAULT_GRID_SIZE = 50

_Point = tuple[float, float, float]


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in metres between two points given in degrees."""
    dlat = (lat2 - lat1) * math.pi / 180.0
    dlon = (lon2 - lon1) * math.pi / 180.0
    a = (
        math.sin(dlat / 2) * math.sin(dlat / 2)
        + math.cos(lat1 * math.pi / 180.0)
        * math.cos(lat2 * math.pi / 180.0)
        * math.sin(dlon / 2)
        * math.sin(dlon / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


class SpatialGrid:
    """A latitude/longitude grid of cells holding (longitude, latitude, adjustment) points.

    The covered range grows as points are added; a point is placed in the
    cell that the range at the time of insertion assigns to it, and points
    added before the range has any extent go to the first cell.
    """

    def __init__(
        self, lat_grid_size: int = DEFAULT_GRID_SIZE, lon_grid_size: int = DEFAULT_GRID_SIZE
    ) -> None:
        if lat_grid_size < 1 or lon_grid_size < 1:
            raise ValueError("grid sizes must be at least 1")
        self.lat_grid_size = lat_grid_size
        self.lon_grid_size = lon_grid_size
        self.min_lat = sys.float_info.max
        self.max_lat = -sys.float_info.max
        self.min_lon = sys.float_info.max
        self.max_lon = -sys.float_info.max
        self.lat_resolution = 0.0
        self.lon_resolution = 0.0
        self._cells: list[list[list[_Point]]] = [
            [[] for _ in range(lon_grid_size)] for _ in range(lat_grid_size)
        ]

    def __len__(self) -> int:
        return sum(len(cell) for row in self._cells for cell in row)

    @staticmethod
    def _index(value: float, low: float, high: float, resolution: float, size: int) -> int:
        if high == low or resolution <= 0.0:
            return 0
        index = int((value - low) / resolution)
        return max(0, min(index, size - 1))

    def _indices(self, latitude: float, longitude: float) -> tuple[int, int]:
        lat_index = self._index(
            latitude, self.min_lat, self.max_lat, self.lat_resolution, self.lat_grid_size
        )
        lon_index = self._index(
            longitude, self.min_lon, self.max_lon, self.lon_resolution, self.lon_grid_size
        )
        return lat_index, lon_index

    def add_point(self, longitude: float, latitude: float, adjustment: float) -> None:
        """Add a point, widening the covered range as needed."""
        self.min_lat = min(self.min_lat, latitude)
        self.max_lat = max(self.max_lat, latitude)
        self.min_lon = min(self.min_lon, longitude)
        self.max_lon = max(self.max_lon, longitude)

        if self.max_lat > self.min_lat:
            self.lat_resolution = (self.max_lat - self.min_lat) / self.lat_grid_size
        if self.max_lon > self.min_lon:
            self.lon_resolution = (self.max_lon - self.min_lon) / self.lon_grid_size

        point = (longitude, latitude, adjustment)
        if self.lat_resolution == 0 or self.lon_resolution == 0:
            self._cells[0][0].append(point)
            return
        lat_index, lon_index = self._indices(latitude, longitude)
        self._cells[lat_index][lon_index].append(point)

    def lookup(self, longitude: float, latitude: float) -> float | None:
        """Interpolate the adjustment at a location from its two nearest points.

        Rings of cells around the location's cell are searched outwards until
        two points have been seen; their adjustments are weighted by inverse
        distance. With a single point its adjustment is returned; with none,
        ``None``.
        """
        ci, cj = self._indices(latitude, longitude)
        best0 = (math.inf, 0.0)
        best1 = (math.inf, 0.0)

        for r in range(max(self.lat_grid_size, self.lon_grid_size)):
            imin, imax = max(0, ci - r), min(self.lat_grid_size - 1, ci + r)
            jmin, jmax = max(0, cj - r), min(self.lon_grid_size - 1, cj + r)
            for i in range(imin, imax + 1):
                for j in range(jmin, jmax + 1):
                    if i not in (imin, imax) and j not in (jmin, jmax):
                        continue
                    for lon, lat, adjustment in self._cells[i][j]:
                        d = haversine_distance(latitude, longitude, lat, lon)
                        if d < best0[0]:
                            best1 = best0
                            best0 = (d, adjustment)
                        elif d < best1[0]:
                            best1 = (d, adjustment)
            if best1[0] < math.inf:
                d1, a1 = best0
                d2, a2 = best1
                if d1 + d2 == 0.0:
                    return (a1 + a2) * 0.5
                return (a2 * d1 + a1 * d2) / (d1 + d2)

        if best0[0] < math.inf:
            return best0[1]
        return None