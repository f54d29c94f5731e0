"""
Utility Modules for Limelight Targeting
"""

from .targeting_math import (
    calculate_distance,
    calculate_angle_radians,
    normalize,
    clamp,
    FAR_DISTANCE,
    MAX_DISTANCE,
)

__all__ = [
    'calculate_distance',
    'calculate_angle_radians',
    'normalize',
    'clamp',
    'FAR_DISTANCE',
    'MAX_DISTANCE',
]
