"""
Vision Target
=============

Resolved targeting answer: raw Limelight readings (tx, ty, ta) plus the
values calculated from them (distance, heading, screen position).
"""

import time
from dataclasses import dataclass
from enum import Enum, auto


class TargetType(Enum):
    """Kind of target being tracked."""
    APRIL_TAG = auto()
    BALL = auto()
    NONE = auto()


class BallColor(Enum):
    """Game ball colours."""
    PURPLE = auto()
    GREEN = auto()
    NONE = auto()


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class VisionTarget:
    """
    A single targeting result.

    Attributes:
        target_type: APRIL_TAG, BALL or NONE
        tx: Horizontal offset in degrees
        ty: Vertical offset in degrees
        ta: Target area as percentage of image
        distance: Distance to target in inches, clamped to [0, 200]
            (1000.0 when the sightline is nearly horizontal)
        angle_to_target: Heading to the target in radians
        target_x: Normalized screen X coordinate (about -1 to 1)
        target_y: Normalized screen Y coordinate (about -1 to 1)
        april_tag_id: Tag ID, or -1 if not an AprilTag
        ball_color: Ball colour, or NONE if not a ball
        target_found: True if the target is visible
        timestamp_ms: Wall clock time of capture in milliseconds
    """
    target_type: TargetType
    tx: float
    ty: float
    ta: float
    distance: float
    angle_to_target: float
    target_x: float
    target_y: float
    april_tag_id: int
    ball_color: BallColor
    target_found: bool
    timestamp_ms: int

    def __post_init__(self):
        if self.target_found == (self.target_type is TargetType.NONE):
            raise ValueError(
                f"target_found={self.target_found} contradicts "
                f"target_type={self.target_type.name}"
            )

    @classmethod
    def no_target(cls) -> 'VisionTarget':
        """A target indicating nothing was found."""
        return cls(
            target_type=TargetType.NONE,
            tx=0.0, ty=0.0, ta=0.0,
            distance=0.0,
            angle_to_target=0.0,
            target_x=0.0, target_y=0.0,
            april_tag_id=-1,
            ball_color=BallColor.NONE,
            target_found=False,
            timestamp_ms=now_ms(),
        )

    def __str__(self) -> str:
        if not self.target_found:
            return "VisionTarget{NO TARGET FOUND}"

        parts = [f"type={self.target_type.name}"]
        if self.target_type is TargetType.APRIL_TAG:
            parts.append(f"tagId={self.april_tag_id}")
        elif self.target_type is TargetType.BALL:
            parts.append(f"color={self.ball_color.name}")
        parts.append(f"tx={self.tx:.2f}")
        parts.append(f"ty={self.ty:.2f}")
        parts.append(f"ta={self.ta:.2f}")
        parts.append(f"distance={self.distance:.2f}")
        parts.append(f"angle={self.angle_to_target:.3f}")
        return "VisionTarget{" + ", ".join(parts) + "}"
