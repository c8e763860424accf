"""
Track resampling - Uniform arc-length re-parameterization of a raw path.

Provides:
- Output step selection (fixed export preset or requested step)
- Arc-length walk with linear interpolation
- Frame repair from the resampled positions
"""

from typing import List, Sequence
import numpy as np

from coastergen.track.frame import TrackPoint, WORLD_FORWARD, make_point, safe_direction
from coastergen.track.primitives import INTERNAL_STEP


PRESET_STEP = 1.10     # Step required by the NoLimits 2 exchange preset
MIN_STEP = 0.1         # Smallest honoured requested step
STEP_TOLERANCE = 0.01  # Steps closer than this to INTERNAL_STEP skip resampling


def resolve_step(use_fixed_preset: bool, requested_step: float) -> float:
    """Pick the output step.

    Args:
        use_fixed_preset: Use the export preset step
        requested_step: Caller's step, used when the preset is off

    Returns:
        Step in meters
    """
    if use_fixed_preset:
        return PRESET_STEP
    return max(MIN_STEP, requested_step)


def needs_resampling(step: float, use_fixed_preset: bool = False) -> bool:
    """Whether a raw path must be resampled to reach ``step``."""
    return use_fixed_preset or abs(step - INTERNAL_STEP) > STEP_TOLERANCE


def cumulative_distances(points: Sequence[TrackPoint]) -> np.ndarray:
    """Chord arc length from the first point to every point.

    Args:
        points: Points in travel order

    Returns:
        Array of distances, starting at 0
    """
    if not points:
        return np.zeros(0)
    positions = np.array([p.position for p in points])
    chords = np.linalg.norm(np.diff(positions, axis=0), axis=1)
    return np.concatenate(([0.0], np.cumsum(chords)))


def resample(points: Sequence[TrackPoint], step: float) -> List[TrackPoint]:
    """Resample a path at a uniform arc-length step.

    The first point is kept. Positions are then taken every ``step``
    along the chord length; the remainder below one step at the end is
    dropped. ``up`` is interpolated linearly (not spherically) and the
    frames are rebuilt afterwards by ``repair_frames``.

    Args:
        points: Raw points in travel order
        step: Output spacing in meters

    Returns:
        Resampled points with repaired frames
    """
    if len(points) < 2:
        return list(points)

    distances = cumulative_distances(points)
    total = distances[-1]
    count = int(np.floor(total / step + 1e-9))
    targets = step * np.arange(1, count + 1)
    targets = targets[targets <= total]

    positions = np.array([p.position for p in points])
    ups = np.array([p.up for p in points])

    # Bracketing pair: distances[idx] < target <= distances[idx + 1]
    idx = np.searchsorted(distances, targets, side="left") - 1
    idx = np.clip(idx, 0, len(points) - 2)

    seg_len = distances[idx + 1] - distances[idx]
    safe_len = np.where(seg_len > 0, seg_len, 1.0)
    fraction = np.where(seg_len > 0, (targets - distances[idx]) / safe_len, 0.0)
    fraction = fraction[:, np.newaxis]

    new_positions = positions[idx] + (positions[idx + 1] - positions[idx]) * fraction
    new_ups = ups[idx] + (ups[idx + 1] - ups[idx]) * fraction

    all_positions = np.vstack((positions[:1], new_positions))
    all_ups = np.vstack((ups[:1], new_ups))

    return repair_frames(all_positions, all_ups)


def repair_frames(positions: np.ndarray, ups: np.ndarray) -> List[TrackPoint]:
    """Rebuild frames from positions.

    Each front points at the successor; left and up follow from
    make_point. The last point has no successor and copies the frame of
    the point before it.

    Args:
        positions: (N, 3) positions in travel order
        ups: (N, 3) approximate up vectors

    Returns:
        Points with orthonormal frames
    """
    count = len(positions)
    if count == 0:
        return []
    if count == 1:
        return [make_point(positions[0], WORLD_FORWARD, ups[0])]

    result: List[TrackPoint] = []
    front = WORLD_FORWARD
    for i in range(count - 1):
        # Coincident neighbours keep the previous tangent
        front = safe_direction(positions[i + 1] - positions[i], front)
        result.append(make_point(positions[i], front, ups[i]))

    prev = result[-1]
    result.append(TrackPoint(
        position=np.array(positions[-1], dtype=float),
        front=prev.front.copy(),
        left=prev.left.copy(),
        up=prev.up.copy(),
    ))
    return result
