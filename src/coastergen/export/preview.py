"""
Preview payload - Position stream for the 3D viewer.

The viewer only needs positions in travel order; frames stay behind.
"""

from typing import Dict, Iterable, List
import json
import numpy as np

from coastergen.track.frame import TrackPoint


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def position_stream(points: Iterable[TrackPoint]) -> List[Dict[str, float]]:
    """Positions as ``{"x", "y", "z"}`` dicts in travel order."""
    return [
        {"x": p.position[0], "y": p.position[1], "z": p.position[2]}
        for p in points
    ]


def preview_message(points: Iterable[TrackPoint]) -> str:
    """JSON message the viewer consumes.

    Args:
        points: Track points in travel order

    Returns:
        ``{"type": "track", "points": [...]}`` as a JSON string
    """
    payload = {
        "type": "track",
        "points": position_stream(points),
    }
    return json.dumps(payload, cls=NumpyEncoder)
