"""
Targeting Geometry
==================

Converts Limelight angular readings into physical distance and heading.

This is the one place the formulas live. The resolver, the diagnostics and
any standalone tester import from here.

Distance model (fixed-height target seen from a fixed-height, tilted camera):

    distance = (target_height - limelight_height) / tan(limelight_angle + ty)

Usage:
    distance = calculate_distance(ty, 36.0, 40.0, 15.0)
    heading = calculate_angle_radians(tx)
    nx = normalize(tx, 29.8)
"""

import math

# Below this sightline angle (radians) tan() is too close to zero to divide by
MIN_SIGHTLINE_RADIANS = 0.01

# Returned for a near-horizontal sightline
FAR_DISTANCE = 1000.0

MIN_DISTANCE = 0.0
MAX_DISTANCE = 200.0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(value, high))


def calculate_distance(
    ty: float,
    target_height: float,
    limelight_height: float,
    limelight_angle: float
) -> float:
    """
    Calculate distance to a target from its vertical offset.

    Args:
        ty: Vertical offset from crosshair in degrees
        target_height: Height of target centre from floor
        limelight_height: Height of Limelight lens from floor
        limelight_angle: Mounting tilt of Limelight in degrees (positive = up)

    Returns:
        Distance in the same unit as the heights, clamped to [0, 200],
        or exactly 1000.0 when the sightline is nearly horizontal or
        not a finite angle.
    """
    angle_to_target = math.radians(limelight_angle + ty)

    # inf and NaN readings are treated like an unusable sightline
    if not math.isfinite(angle_to_target) or abs(angle_to_target) < MIN_SIGHTLINE_RADIANS:
        return FAR_DISTANCE

    height_difference = target_height - limelight_height
    distance = height_difference / math.tan(angle_to_target)

    return clamp(distance, MIN_DISTANCE, MAX_DISTANCE)


def calculate_angle_radians(tx: float) -> float:
    """Convert horizontal offset (degrees) to heading (radians)."""
    return math.radians(tx)


def normalize(angle: float, half_fov: float) -> float:
    """
    Map an angular offset to screen space.

    Not clamped: detections at the lens edge can read slightly past +/-1.
    """
    return angle / half_fov
