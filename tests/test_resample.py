"""Tests for arc-length resampling."""

import pytest
import numpy as np

from coastergen.track.frame import is_orthonormal, make_point
from coastergen.track.path import TrackPath
from coastergen.track.primitives import add_straight, add_turn
from coastergen.track.resample import (
    PRESET_STEP,
    cumulative_distances,
    needs_resampling,
    repair_frames,
    resample,
    resolve_step,
)


def straight_points(length):
    path = TrackPath()
    add_straight(path, length)
    return list(path.points)


class TestStepSelection:
    """Test output step policy."""

    def test_preset_ignores_requested(self):
        """Test the preset always uses 1.10."""
        assert resolve_step(True, 5.0) == PRESET_STEP
        assert resolve_step(True, 0.01) == PRESET_STEP

    def test_requested_step_floor(self):
        """Test very small requested steps are raised to 0.1."""
        assert resolve_step(False, 0.01) == 0.1
        assert resolve_step(False, 2.0) == 2.0

    def test_needs_resampling(self):
        """Test steps near the internal step skip resampling."""
        assert not needs_resampling(0.5)
        assert not needs_resampling(0.505)
        assert needs_resampling(1.0)
        assert needs_resampling(0.5, use_fixed_preset=True)


class TestResample:
    """Test the resampling walk."""

    def test_cumulative_distances(self):
        """Test chord lengths accumulate."""
        distances = cumulative_distances(straight_points(5.0))

        assert distances[0] == 0.0
        assert np.allclose(np.diff(distances), 0.5)

    def test_uniform_spacing(self):
        """Test a 200 m path at step 2.0 gives ~100 evenly spaced points."""
        points = resample(straight_points(200.0), 2.0)

        assert 99 <= len(points) <= 101
        positions = np.array([p.position for p in points])
        gaps = np.linalg.norm(np.diff(positions[:-1], axis=0), axis=1)
        assert np.allclose(gaps, 2.0)

    def test_keeps_first_point(self):
        """Test the walk starts at the first raw point."""
        raw = straight_points(20.0)
        points = resample(raw, 1.1)

        assert np.allclose(points[0].position, raw[0].position)

    def test_never_overruns(self):
        """Test the last point lies within the raw path."""
        raw = straight_points(20.0)
        points = resample(raw, 3.0)

        total = cumulative_distances(raw)[-1]
        walked = cumulative_distances(points)[-1]
        assert walked <= total + 1e-9
        assert total - walked < 3.0

    def test_curved_path(self):
        """Test a turn resamples with valid frames and even spacing."""
        path = TrackPath()
        add_straight(path, 10.0)
        add_turn(path, 60.0, 180.0, 45.0)
        points = resample(list(path.points), PRESET_STEP)

        positions = np.array([p.position for p in points])
        gaps = np.linalg.norm(np.diff(positions[:-1], axis=0), axis=1)
        assert np.allclose(gaps, PRESET_STEP, atol=1e-2)
        for point in points:
            assert is_orthonormal(point)

    def test_short_input_unchanged(self):
        """Test fewer than two points are returned as they are."""
        single = [make_point([0.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, 1.0, 0.0])]

        assert resample(single, 1.0) == single
        assert resample([], 1.0) == []


class TestRepairFrames:
    """Test frame reconstruction."""

    def test_front_points_to_successor(self):
        """Test each front is the direction to the next point."""
        positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0]])
        ups = np.array([[0.0, 1.0, 0.0], [0.0, 1.0, 0.0], [-1.0, 0.0, 0.0]])

        points = repair_frames(positions, ups)

        assert np.allclose(points[0].front, [1.0, 0.0, 0.0])
        assert np.allclose(points[1].front, [0.0, 1.0, 0.0])
        for point in points:
            assert is_orthonormal(point)

    def test_last_copies_previous_frame(self):
        """Test the final point reuses the previous frame."""
        positions = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, 1.0, 2.0]])
        ups = np.tile([0.0, 1.0, 0.0], (3, 1))

        points = repair_frames(positions, ups)

        assert np.allclose(points[-1].position, positions[-1])
        assert np.array_equal(points[-1].front, points[-2].front)
        assert np.array_equal(points[-1].left, points[-2].left)
        assert np.array_equal(points[-1].up, points[-2].up)

    def test_coincident_points(self):
        """Test duplicate positions keep the previous tangent."""
        positions = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, 0.0, 1.0], [0.0, 0.0, 2.0]])
        ups = np.tile([0.0, 1.0, 0.0], (4, 1))

        points = repair_frames(positions, ups)

        assert np.allclose(points[1].front, [0.0, 0.0, 1.0])
        for point in points:
            assert is_orthonormal(point)
