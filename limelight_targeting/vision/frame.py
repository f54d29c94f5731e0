"""
Detection Frame
===============

Backend-neutral snapshot of one Limelight read.

Both transports translate their native payloads into these types, using
degrees for angles and percent of image for area, so nothing downstream
needs to know where a frame came from.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple


def finite_float(value) -> float:
    """
    Convert a reading to float, rejecting inf and NaN.

    Raises:
        ValueError: If the value is not a finite number
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite reading: {value!r}")
    return number


@dataclass(frozen=True)
class FiducialDetection:
    """
    A single AprilTag detection.

    Attributes:
        fiducial_id: AprilTag ID
        tx: Horizontal offset from crosshair in degrees
        ty: Vertical offset from crosshair in degrees
        ta: Target area as percentage of image (0-100)
    """
    fiducial_id: int
    tx: float
    ty: float
    ta: float


@dataclass(frozen=True)
class ColorDetection:
    """A single colour blob detection (same units as FiducialDetection)."""
    tx: float
    ty: float
    ta: float


@dataclass(frozen=True)
class DetectionFrame:
    """
    Result of one fetch from the Limelight.

    Attributes:
        valid: Whether the camera reported a valid result
        fiducials: AprilTag detections in reported order
        colors: Colour detections in reported order
        pipeline_index: Pipeline index the camera says it is running
    """
    valid: bool = False
    fiducials: Tuple[FiducialDetection, ...] = field(default_factory=tuple)
    colors: Tuple[ColorDetection, ...] = field(default_factory=tuple)
    pipeline_index: int = 0

    def __post_init__(self):
        # Accept lists from callers but store immutable tuples
        object.__setattr__(self, 'fiducials', tuple(self.fiducials))
        object.__setattr__(self, 'colors', tuple(self.colors))

    @classmethod
    def invalid(cls) -> 'DetectionFrame':
        """The frame returned for any connectivity or payload failure."""
        return cls()

    @property
    def has_detections(self) -> bool:
        """Check if any tag or colour was detected."""
        return len(self.fiducials) > 0 or len(self.colors) > 0

    def find_fiducial(self, fiducial_id: int) -> Optional[FiducialDetection]:
        """Get the first detection with the given tag ID."""
        for fiducial in self.fiducials:
            if fiducial.fiducial_id == fiducial_id:
                return fiducial
        return None

    def largest_color(self) -> Optional[ColorDetection]:
        """Get the colour detection with the largest area (earliest on ties)."""
        if not self.colors:
            return None
        return max(self.colors, key=lambda c: c.ta)
