"""
Track path - Append-only centerline under construction.
"""

from typing import List, Tuple

from coastergen.track.frame import TrackPoint, start_point


class TrackPath:
    """Raw centerline built up by the segment primitives.

    Holds the points in travel order and the running nominal length.
    Points are only appended; the tail is looked up by index.

    Usage:
        path = TrackPath()
        add_straight(path, 35.0)
        tail = path.tail()
    """

    def __init__(self):
        self._points: List[TrackPoint] = []
        self._length: float = 0.0

    def __len__(self) -> int:
        return len(self._points)

    @property
    def length(self) -> float:
        """Running nominal length (sum of primitive lengths)."""
        return self._length

    @property
    def points(self) -> Tuple[TrackPoint, ...]:
        """Snapshot of the points in travel order."""
        return tuple(self._points)

    def tail(self) -> TrackPoint:
        """Get the last point, or the start frame for an empty path."""
        if not self._points:
            return start_point()
        return self._points[len(self._points) - 1]

    def append(self, point: TrackPoint) -> None:
        self._points.append(point)

    def add_length(self, length: float) -> None:
        """Account a primitive's nominal length."""
        self._length += length
