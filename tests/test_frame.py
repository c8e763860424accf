"""Tests for track frames."""

import pytest
import numpy as np

from coastergen.track.frame import (
    TrackPoint,
    WORLD_FORWARD,
    WORLD_UP,
    fallback_left,
    flatten,
    is_orthonormal,
    make_point,
    rotate,
    safe_direction,
    start_point,
)


class TestMakePoint:
    """Test frame construction."""

    def test_start_frame(self):
        """Test the fixed start frame."""
        point = start_point()

        assert np.allclose(point.position, [0.0, 0.0, 0.0])
        assert np.allclose(point.front, [0.0, 0.0, 1.0])
        assert np.allclose(point.left, [1.0, 0.0, 0.0])
        assert np.allclose(point.up, [0.0, 1.0, 0.0])

    def test_reorthogonalizes_up(self):
        """Test a skewed up vector is made perpendicular to front."""
        point = make_point([1.0, 2.0, 3.0], [0.0, 0.0, 2.0], [0.0, 1.0, 1.0])

        assert is_orthonormal(point)
        assert np.allclose(point.front, [0.0, 0.0, 1.0])
        assert np.allclose(point.up, [0.0, 1.0, 0.0])

    def test_right_handed(self):
        """Test up = front x left."""
        point = make_point([0.0, 0.0, 0.0], [1.0, 0.3, -0.2], [0.1, 1.0, 0.0])

        assert np.allclose(np.cross(point.front, point.left), point.up)
        assert np.allclose(np.cross(point.up, point.front), point.left)

    def test_up_parallel_to_front(self):
        """Test degenerate input still gives a valid frame."""
        point = make_point([0.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 1.0, 0.0])

        assert is_orthonormal(point)
        assert not np.any(np.isnan(point.left))

    def test_zero_front(self):
        """Test a zero front falls back to world forward."""
        point = make_point([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 1.0, 0.0])

        assert np.allclose(point.front, WORLD_FORWARD)
        assert is_orthonormal(point)

    def test_as_row(self):
        """Test export row ordering."""
        point = make_point([1.0, 2.0, 3.0], WORLD_FORWARD, WORLD_UP)
        row = point.as_row()

        assert len(row) == 12
        assert row[:3] == (1.0, 2.0, 3.0)
        assert row[3:6] == (0.0, 0.0, 1.0)

    def test_get_state(self):
        """Test state dict holds plain float lists."""
        point = make_point([1.0, 2.0, 3.0], WORLD_FORWARD, WORLD_UP)
        state = point.get_state()

        assert set(state) == {"position", "front", "left", "up"}
        assert state["position"] == [1.0, 2.0, 3.0]
        assert state["front"] == [0.0, 0.0, 1.0]
        assert state["left"] == [1.0, 0.0, 0.0]
        assert state["up"] == [0.0, 1.0, 0.0]
        assert all(type(v) is float for axis in state.values() for v in axis)


class TestAxisHelpers:
    """Test degenerate axis handling and rotation."""

    def test_safe_direction_normalizes(self):
        """Test regular vectors are normalized."""
        assert np.allclose(safe_direction(np.array([3.0, 0.0, 4.0]), WORLD_UP), [0.6, 0.0, 0.8])

    def test_safe_direction_fallback(self):
        """Test zero vectors return the fallback."""
        result = safe_direction(np.zeros(3), WORLD_FORWARD)
        assert np.allclose(result, WORLD_FORWARD)

    def test_fallback_left_is_perpendicular(self):
        """Test fallback lateral axis for several fronts."""
        for front in ([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]):
            front = np.array(front)
            left = fallback_left(front)
            assert abs(np.dot(left, front)) < 1e-9
            assert np.isclose(np.linalg.norm(left), 1.0)

    def test_flatten_vertical(self):
        """Test a vertical direction flattens to world forward."""
        assert np.allclose(flatten(np.array([0.0, 1.0, 0.0])), WORLD_FORWARD)

    def test_flatten_pitched(self):
        """Test flattening drops the vertical component."""
        flat = flatten(np.array([0.0, 0.5, 0.5]))
        assert np.allclose(flat, [0.0, 0.0, 1.0])

    def test_rotate_about_up(self):
        """Test positive rotation about +Y turns +Z toward +X."""
        result = rotate(WORLD_FORWARD, WORLD_UP, np.pi / 2)
        assert np.allclose(result, [1.0, 0.0, 0.0])

    def test_rotate_full_turn(self):
        """Test a full turn returns the input."""
        vector = np.array([0.3, -0.4, 0.5])
        result = rotate(vector, np.array([1.0, 1.0, 0.0]), 2 * np.pi)
        assert np.allclose(result, vector)


class TestOrthonormalCheck:
    """Test the frame invariant check."""

    def test_detects_bad_frame(self):
        """Test a hand-built skewed frame fails the check."""
        point = TrackPoint(
            position=np.zeros(3),
            front=np.array([0.0, 0.0, 1.0]),
            left=np.array([1.0, 0.0, 0.0]),
            up=np.array([0.0, 1.0, 1.0]),
        )
        assert not is_orthonormal(point)
