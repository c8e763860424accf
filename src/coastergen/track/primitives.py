"""
Segment primitives - Closed-form curve pieces appended to a track path.

Provides:
- Straight and zero-g roll (straight with a full roll)
- Pitch transition with smoothstep easing
- Constant-radius banked turn
- Camelback (sinusoidal hill or dip)
- Circular vertical loop

Every primitive starts from the path tail, appends points spaced
INTERNAL_STEP apart and adds its nominal length to the path's running
total. Frames always go through make_point.
"""

import numpy as np

from coastergen.track.frame import (
    WORLD_UP,
    flatten,
    make_point,
    rotate,
)
from coastergen.track.path import TrackPath


INTERNAL_STEP = 0.5  # Raw sampling step in meters

# Bank reaches its target over the first and last 20% of a turn
BANK_RAMP_FRACTION = 0.2


def step_count(length: float) -> int:
    """Number of raw points a primitive of the given length emits."""
    if length <= 0:
        return 0
    return int(length / INTERNAL_STEP)


def smoothstep(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def add_straight(path: TrackPath, length: float) -> None:
    """Advance along the tail's front without changing orientation.

    Args:
        path: Path to extend
        length: Segment length in meters
    """
    start = path.tail()
    for i in range(1, step_count(length) + 1):
        position = start.position + start.front * (i * INTERNAL_STEP)
        path.append(make_point(position, start.front, start.up))
    path.add_length(length)


def add_transition(
    path: TrackPath,
    length: float,
    target_bank: float,
    target_slope: float,
) -> None:
    """Ease the pitch from the tail's current value to a target slope.

    Pitch goes from ``asin(front.y)`` to ``atan(target_slope)`` with a
    smoothstep profile while the heading is kept. Roll is not
    interpolated: ``target_bank`` is accepted for symmetry with the other
    primitives and the frame is rebuilt unbanked from world up.

    Args:
        path: Path to extend
        length: Segment length in meters
        target_bank: Bank at the end, in degrees (not applied)
        target_slope: Gradient at the end (rise over run)
    """
    start = path.tail()
    steps = step_count(length)

    start_pitch = float(np.arcsin(np.clip(start.front[1], -1.0, 1.0)))
    target_pitch = float(np.arctan(target_slope))
    heading = flatten(start.front)

    position = start.position
    for i in range(1, steps + 1):
        t = i / steps
        pitch = start_pitch + (target_pitch - start_pitch) * smoothstep(t)

        front = heading * np.cos(pitch) + WORLD_UP * np.sin(pitch)
        point = make_point(position + front * INTERNAL_STEP, front, WORLD_UP)
        path.append(point)
        position = point.position
    path.add_length(length)


def add_turn(
    path: TrackPath,
    length: float,
    angle_deg: float,
    bank_deg: float,
) -> None:
    """Constant-radius turn about the vertical axis.

    The arc sweeps to the left with ``radius = length / angle``. Bank
    ramps linearly to ``bank_deg`` over the first 20% of the arc, holds,
    and ramps back out over the last 20%. It tilts the roof into the turn.

    Args:
        path: Path to extend
        length: Nominal arc length in meters
        angle_deg: Swept heading change in degrees
        bank_deg: Peak bank in degrees
    """
    angle = np.radians(angle_deg)
    if abs(angle) < 1e-9:
        add_straight(path, length)
        return

    start = path.tail()
    steps = step_count(length)

    radius = length / angle
    heading = flatten(start.front)
    inward = np.cross(WORLD_UP, heading)
    center = start.position + inward * radius
    offset = start.position - center

    peak_bank = np.radians(bank_deg) * np.sign(angle)
    for i in range(1, steps + 1):
        t = i / steps
        swept = angle * t

        position = center + rotate(offset, WORLD_UP, swept)
        front = rotate(start.front, WORLD_UP, swept)

        ramp = min(1.0, t / BANK_RAMP_FRACTION, (1.0 - t) / BANK_RAMP_FRACTION)
        unbanked = make_point(position, front, WORLD_UP)
        # Negative roll about front leans the roof toward the inside
        up = rotate(unbanked.up, unbanked.front, -peak_bank * ramp)
        path.append(make_point(position, unbanked.front, up))
    path.add_length(length)


def add_camelback(path: TrackPath, length: float, height: float) -> None:
    """Hill (positive height) or dip (negative height) with a sine profile.

    The profile is ``height * sin(pi * t)`` over a horizontal run of
    ``length``; the tangent follows the profile's analytic slope.

    Args:
        path: Path to extend
        length: Horizontal run in meters
        height: Peak height offset in meters
    """
    start = path.tail()
    steps = step_count(length)
    heading = flatten(start.front)
    base_y = start.position[1]

    for i in range(1, steps + 1):
        t = i / steps

        position = start.position + heading * (length * t)
        position[1] = base_y + height * np.sin(np.pi * t)

        slope = height * np.pi * np.cos(np.pi * t) / length
        pitch = np.arctan(slope)
        front = heading * np.cos(pitch) + WORLD_UP * np.sin(pitch)

        path.append(make_point(position, front, WORLD_UP))
    path.add_length(length)


def add_vertical_loop(path: TrackPath, height: float) -> None:
    """Full circular loop of diameter ``height``.

    The centre sits above the tail along its up axis. Position, front and
    up are turned about the tail's left axis, pitching up first. The
    running length grows by the circumference.

    Args:
        path: Path to extend
        height: Loop height in meters
    """
    start = path.tail()
    radius = height / 2.0
    circumference = 2.0 * np.pi * radius
    steps = step_count(circumference)

    center = start.position + start.up * radius
    offset = start.position - center

    for i in range(1, steps + 1):
        # Pitching up is a negative rotation about left
        angle = -2.0 * np.pi * i / steps

        position = center + rotate(offset, start.left, angle)
        front = rotate(start.front, start.left, angle)
        up = rotate(start.up, start.left, angle)
        path.append(make_point(position, front, up))
    path.add_length(circumference)


def add_zero_g_roll(path: TrackPath, length: float) -> None:
    """Straight travel while the roof rolls a full turn about the tangent.

    Args:
        path: Path to extend
        length: Segment length in meters
    """
    start = path.tail()
    steps = step_count(length)

    for i in range(1, steps + 1):
        roll = 2.0 * np.pi * i / steps

        position = start.position + start.front * (i * INTERNAL_STEP)
        up = rotate(start.up, start.front, roll)
        path.append(make_point(position, start.front, up))
    path.add_length(length)
