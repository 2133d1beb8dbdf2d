"""Game yaw <-> standard planar angle.

The plane is (x, z) with x as the abscissa and z as the ordinate. Every
conversion in the package goes through this module: atan2 takes (dz, dx) and
polar offsets map cos -> x, sin -> z.

Yaw follows the game's facing convention: 0 faces south (+Z), 90 faces west
(-X), 180 faces north (-Z), -90 faces east (+X), clockwise seen from above.
In the standard frame that is

    angle = radians(yaw + 90)
"""

from __future__ import annotations

import math

_YAW_OFFSET_DEG = 90.0


def normalize_bearing(bearing_degrees: float) -> float:
    """Wrap a yaw into (-180, 180], the range the debug screen shows."""
    wrapped = bearing_degrees % 360.0
    if wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


def bearing_to_angle(bearing_degrees: float) -> float:
    """Yaw in degrees -> standard angle in radians (0 = +X, counter-clockwise)."""
    return math.radians(bearing_degrees + _YAW_OFFSET_DEG)


def angle_to_bearing(angle_radians: float) -> float:
    """Inverse of bearing_to_angle, normalized to (-180, 180]."""
    return normalize_bearing(math.degrees(angle_radians) - _YAW_OFFSET_DEG)


def bearing_direction(bearing_degrees: float) -> tuple[float, float]:
    """Unit (dx, dz) a player facing this yaw looks along."""
    angle = bearing_to_angle(bearing_degrees)
    return (math.cos(angle), math.sin(angle))
