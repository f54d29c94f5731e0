"""
Pipeline Control
================

Tracks which Limelight pipeline is active and switches only on change.

Pipeline switches make the camera stall while it reconfigures, so the
controller never issues a switch for the pipeline it already tracks.
Switches are fire-and-forget: the tracked pipeline is updated once the
request is sent, whether or not the camera acknowledged it.
"""

import logging
from enum import Enum, auto
from typing import Any, Dict, Optional

from ..core.config import PipelineConfig
from ..core.errors import InvalidPipelineRequest
from .target import BallColor

logger = logging.getLogger(__name__)


class Pipeline(Enum):
    """Detection pipelines configured on the camera."""
    PURPLE_BALL = auto()    # purple ball colour detection
    GREEN_BALL = auto()     # green ball colour detection
    PILLAR_TAGS = auto()    # AprilTags 20 and 24 only
    CENTER_TAGS = auto()    # AprilTags 21, 22, 23 only

    @classmethod
    def for_color(cls, color: BallColor) -> 'Pipeline':
        """
        Get the detection pipeline for a ball colour.

        Raises:
            InvalidPipelineRequest: If color is BallColor.NONE
        """
        if color is BallColor.PURPLE:
            return cls.PURPLE_BALL
        if color is BallColor.GREEN:
            return cls.GREEN_BALL
        raise InvalidPipelineRequest(f"Cannot switch to pipeline for {color}")


def pipeline_indices(config: Optional[PipelineConfig] = None) -> Dict[Pipeline, int]:
    """Map every Pipeline to its slot number on the camera."""
    config = config or PipelineConfig()
    return {
        Pipeline.PURPLE_BALL: config.purple_ball,
        Pipeline.GREEN_BALL: config.green_ball,
        Pipeline.PILLAR_TAGS: config.pillar_tags,
        Pipeline.CENTER_TAGS: config.center_tags,
    }


class PipelineController:
    """
    Pipeline state machine over a transport.

    Args:
        transport: Anything with switch_mode(index) -> bool
        config: Pipeline slot numbers
        initial: Pipeline assumed active at startup

    Usage:
        controller = PipelineController(adapter)
        controller.switch_to(Pipeline.CENTER_TAGS)   # one switch
        controller.switch_to(Pipeline.CENTER_TAGS)   # no-op
    """

    def __init__(
        self,
        transport: Any,
        config: Optional[PipelineConfig] = None,
        initial: Pipeline = Pipeline.PILLAR_TAGS,
    ):
        self.transport = transport
        self._indices = pipeline_indices(config)
        self._current = initial

    @property
    def current(self) -> Pipeline:
        return self._current

    def current_pipeline(self) -> Pipeline:
        """Get the pipeline the controller believes is active."""
        return self._current

    def index_of(self, pipeline: Pipeline) -> int:
        """Get the camera slot number for a pipeline."""
        return self._indices[pipeline]

    def switch_to(self, pipeline: Pipeline) -> bool:
        """
        Switch pipeline if it differs from the current one.

        Returns:
            True if a switch was issued, False if already active
        """
        if not isinstance(pipeline, Pipeline):
            raise TypeError(f"Expected Pipeline, got {type(pipeline).__name__}")

        if pipeline is self._current:
            return False

        self._send(pipeline)
        return True

    def sync(self) -> None:
        """Send the tracked pipeline to the camera unconditionally."""
        self._send(self._current)

    def _send(self, pipeline: Pipeline) -> None:
        index = self._indices[pipeline]
        self.transport.switch_mode(index)
        self._current = pipeline
        logger.info(f"Switched to {pipeline.name} pipeline ({index})")

    def switch_to_pillar_tags(self) -> bool:
        """Switch to pillar AprilTag detection (tags 20, 24)."""
        return self.switch_to(Pipeline.PILLAR_TAGS)

    def switch_to_center_tags(self) -> bool:
        """Switch to center AprilTag detection (tags 21-23)."""
        return self.switch_to(Pipeline.CENTER_TAGS)

    def switch_to_ball_pipeline(self, color: BallColor) -> bool:
        """
        Switch to the colour detection pipeline for a ball colour.

        Raises:
            InvalidPipelineRequest: If color is BallColor.NONE
        """
        return self.switch_to(Pipeline.for_color(color))
