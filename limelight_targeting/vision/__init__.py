"""
Vision Module
=============

Frame model, target model, pipeline control and target resolution.
"""

from .frame import DetectionFrame, FiducialDetection, ColorDetection
from .target import VisionTarget, TargetType, BallColor
from .pipelines import Pipeline, PipelineController, pipeline_indices
from .resolver import (
    TargetResolver,
    CENTER_TAG_SEQUENCES,
    APRILTAG_BLUE_PILLAR,
    APRILTAG_RED_PILLAR,
    APRILTAG_CENTER_START,
    APRILTAG_CENTER_END,
    pillar_tag_for,
)

__all__ = [
    'DetectionFrame',
    'FiducialDetection',
    'ColorDetection',
    'VisionTarget',
    'TargetType',
    'BallColor',
    'Pipeline',
    'PipelineController',
    'pipeline_indices',
    'TargetResolver',
    'CENTER_TAG_SEQUENCES',
    'APRILTAG_BLUE_PILLAR',
    'APRILTAG_RED_PILLAR',
    'APRILTAG_CENTER_START',
    'APRILTAG_CENTER_END',
    'pillar_tag_for',
]
