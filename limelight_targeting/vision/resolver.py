"""
Target Resolver
===============

Answers the game-level vision questions:
- Where is our alliance's pillar AprilTag? (tag 24 red, tag 20 blue)
- Which ball order does the center AprilTag encode? (tags 21-23)
- Where is the nearest ball of a given colour?

Pipeline Configuration:
- PURPLE_BALL: purple ball colour detection
- GREEN_BALL:  green ball colour detection
- PILLAR_TAGS: pillar AprilTag detection (tags 20 and 24 ONLY)
- CENTER_TAGS: center AprilTag detection (tags 21, 22, 23 ONLY)

Usage:
    adapter = create_adapter(config, hardware_map)
    resolver = TargetResolver(adapter, config.calibration, config.pipelines)

    target = resolver.get_alliance_target(is_red_alliance=True)
    if target.target_found:
        print(target.distance, target.angle_to_target)

    sequence = resolver.read_center_tag()
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import CalibrationConfig, PipelineConfig
from ..utils.targeting_math import calculate_angle_radians, calculate_distance, normalize
from .frame import ColorDetection, FiducialDetection
from .pipelines import Pipeline, PipelineController
from .target import BallColor, TargetType, VisionTarget, now_ms

logger = logging.getLogger(__name__)

# ===== APRILTAG IDS =====
APRILTAG_BLUE_PILLAR = 20   # left pillar
APRILTAG_RED_PILLAR = 24    # right pillar
APRILTAG_CENTER_START = 21
APRILTAG_CENTER_END = 23

_P = BallColor.PURPLE
_G = BallColor.GREEN

# Center tag -> ball collection order
CENTER_TAG_SEQUENCES: Dict[int, Tuple[BallColor, BallColor, BallColor]] = {
    21: (_G, _P, _P),
    22: (_P, _G, _P),
    23: (_P, _P, _G),
}


def pillar_tag_for(is_red_alliance: bool) -> int:
    """Get the pillar tag ID an alliance targets."""
    return APRILTAG_RED_PILLAR if is_red_alliance else APRILTAG_BLUE_PILLAR


class TargetResolver:
    """
    Turns Limelight frames into targets.

    Args:
        adapter: Connected transport (fetch_frame / switch_mode / close)
        calibration: Mounting geometry (defaults if None)
        pipeline_config: Pipeline slot numbers (defaults if None)
        sync_on_start: Send the initial pipeline to the camera on construction
    """

    def __init__(
        self,
        adapter: Any,
        calibration: Optional[CalibrationConfig] = None,
        pipeline_config: Optional[PipelineConfig] = None,
        sync_on_start: bool = True,
    ):
        self.adapter = adapter
        self.calibration = calibration or CalibrationConfig()
        self.pipelines = PipelineController(adapter, pipeline_config)

        if sync_on_start:
            self.pipelines.sync()

    # ===== PIPELINES =====

    def current_pipeline(self) -> Pipeline:
        """Get the pipeline the resolver believes is active."""
        return self.pipelines.current

    def reported_pipeline(self) -> Optional[int]:
        """
        Get the pipeline index the camera itself reports.

        Returns:
            Index from a fresh valid frame, or None if the frame is invalid
        """
        frame = self.adapter.fetch_frame()
        if not frame.valid:
            return None
        return frame.pipeline_index

    def switch_to_pillar_tags(self) -> bool:
        return self.pipelines.switch_to_pillar_tags()

    def switch_to_center_tags(self) -> bool:
        return self.pipelines.switch_to_center_tags()

    def switch_to_ball_pipeline(self, color: BallColor) -> bool:
        return self.pipelines.switch_to_ball_pipeline(color)

    # ===== APRILTAGS =====

    def get_alliance_target(self, is_red_alliance: bool) -> VisionTarget:
        """
        Find the pillar AprilTag for an alliance.

        Red alliance targets tag 24 (right pillar), blue alliance tag 20
        (left pillar). If a frame reports the tag more than once, the
        first entry wins.

        Args:
            is_red_alliance: True for red (tag 24), False for blue (tag 20)

        Returns:
            VisionTarget with tag data, or no_target() if not visible
        """
        self.pipelines.switch_to(Pipeline.PILLAR_TAGS)
        tag_id = pillar_tag_for(is_red_alliance)

        frame = self.adapter.fetch_frame()
        if not frame.valid:
            return VisionTarget.no_target()

        fiducial = frame.find_fiducial(tag_id)
        if fiducial is None:
            return VisionTarget.no_target()

        return self._tag_target(fiducial)

    def read_center_tag(self) -> List[BallColor]:
        """
        Read the center AprilTag to get the ball collection order.

        Tag 21: [GREEN, PURPLE, PURPLE]
        Tag 22: [PURPLE, GREEN, PURPLE]
        Tag 23: [PURPLE, PURPLE, GREEN]

        Returns:
            Ball colours in collection order, or [] if no center tag is seen
        """
        self.pipelines.switch_to(Pipeline.CENTER_TAGS)

        frame = self.adapter.fetch_frame()
        if not frame.valid:
            return []

        for fiducial in frame.fiducials:
            tag_id = fiducial.fiducial_id
            if APRILTAG_CENTER_START <= tag_id <= APRILTAG_CENTER_END:
                sequence = list(CENTER_TAG_SEQUENCES[tag_id])
                logger.info(f"Center tag {tag_id}: {[c.name for c in sequence]}")
                return sequence

        logger.debug("Center tag not found")
        return []

    # ===== BALLS =====

    def get_ball_target(self, color: BallColor) -> VisionTarget:
        """
        Find the largest visible ball of a colour.

        Raises:
            InvalidPipelineRequest: If color is BallColor.NONE
        """
        self.pipelines.switch_to_ball_pipeline(color)

        frame = self.adapter.fetch_frame()
        if not frame.valid:
            return VisionTarget.no_target()

        blob = frame.largest_color()
        if blob is None:
            return VisionTarget.no_target()

        return self._ball_target(blob, color)

    # ===== STATUS =====

    def has_target(self) -> bool:
        """Check whether the camera currently reports a valid result."""
        return self.adapter.fetch_frame().valid

    def stop(self) -> None:
        """Stop the Limelight. Call when the op mode ends."""
        self.adapter.close()

    # ===== HELPERS =====

    def _tag_target(self, fiducial: FiducialDetection) -> VisionTarget:
        cal = self.calibration
        return VisionTarget(
            target_type=TargetType.APRIL_TAG,
            tx=fiducial.tx, ty=fiducial.ty, ta=fiducial.ta,
            distance=calculate_distance(
                fiducial.ty, cal.apriltag_height,
                cal.limelight_height, cal.limelight_angle,
            ),
            angle_to_target=calculate_angle_radians(fiducial.tx),
            target_x=normalize(fiducial.tx, cal.horizontal_half_fov),
            target_y=normalize(fiducial.ty, cal.vertical_half_fov),
            april_tag_id=fiducial.fiducial_id,
            ball_color=BallColor.NONE,
            target_found=True,
            timestamp_ms=now_ms(),
        )

    def _ball_target(self, blob: ColorDetection, color: BallColor) -> VisionTarget:
        cal = self.calibration
        return VisionTarget(
            target_type=TargetType.BALL,
            tx=blob.tx, ty=blob.ty, ta=blob.ta,
            distance=calculate_distance(
                blob.ty, cal.ball_height,
                cal.limelight_height, cal.limelight_angle,
            ),
            angle_to_target=calculate_angle_radians(blob.tx),
            target_x=normalize(blob.tx, cal.horizontal_half_fov),
            target_y=normalize(blob.ty, cal.vertical_half_fov),
            april_tag_id=-1,
            ball_color=color,
            target_found=True,
            timestamp_ms=now_ms(),
        )
