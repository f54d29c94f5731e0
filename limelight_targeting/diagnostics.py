"""
Vision Diagnostics
==================

Measurements a test harness runs against a live Limelight:
- Distance accuracy against a tape-measured distance (pass if error < 10%)
- Detection reliability over many frames (pass if rate >= 90%)
- Pipeline switching (does the camera report the pipeline we asked for?)

None of these render anything; they return plain result objects for the
caller to display.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from .vision.pipelines import Pipeline
from .vision.target import VisionTarget

logger = logging.getLogger(__name__)

DISTANCE_TOLERANCE_PERCENT = 10.0
MIN_DETECTION_RATE = 90.0


@dataclass(frozen=True)
class DistanceCheck:
    """Calculated vs measured distance."""
    calculated: float
    actual: float
    error: float
    error_percent: float
    passed: bool


@dataclass(frozen=True)
class ReliabilityReport:
    """
    Result of a detection reliability sweep.

    Statistics are over detected frames only and are 0.0 when nothing
    was detected.
    """
    total_frames: int
    detected_frames: int
    detection_rate: float
    mean_tx: float
    mean_ty: float
    mean_distance: float
    min_distance: float
    max_distance: float
    passed: bool


def check_distance(
    target: VisionTarget,
    actual_distance: float,
    tolerance_percent: float = DISTANCE_TOLERANCE_PERCENT
) -> DistanceCheck:
    """
    Compare a target's calculated distance with a measured one.

    Args:
        target: Found target
        actual_distance: Tape-measured distance (same unit, > 0)
        tolerance_percent: Maximum absolute error in percent to pass

    Raises:
        ValueError: If actual_distance is not positive or the target was
            not found
    """
    if actual_distance <= 0:
        raise ValueError(f"actual_distance must be positive, got {actual_distance}")
    if not target.target_found:
        raise ValueError("Cannot check distance of a target that was not found")

    error = target.distance - actual_distance
    error_percent = error / actual_distance * 100.0

    return DistanceCheck(
        calculated=target.distance,
        actual=actual_distance,
        error=error,
        error_percent=error_percent,
        passed=abs(error_percent) < tolerance_percent,
    )


def run_reliability_sweep(
    resolver,
    is_red_alliance: bool,
    frames: int = 100,
    interval: float = 0.05,
    sleep: Callable[[float], None] = time.sleep,
    min_rate: float = MIN_DETECTION_RATE,
) -> ReliabilityReport:
    """
    Sample the alliance pillar tag repeatedly and report detection stats.

    Args:
        resolver: TargetResolver
        is_red_alliance: Which pillar tag to look for
        frames: Number of samples
        interval: Seconds between samples (0.05 = 20 Hz)
        sleep: Sleep function (injectable for tests)
        min_rate: Detection rate in percent required to pass
    """
    if frames <= 0:
        raise ValueError(f"frames must be positive, got {frames}")

    samples = []
    for i in range(frames):
        target = resolver.get_alliance_target(is_red_alliance)
        if target.target_found:
            samples.append((target.tx, target.ty, target.distance))

        if (i + 1) % 20 == 0:
            logger.info(f"Progress: {i + 1}/{frames}")

        if interval > 0 and i < frames - 1:
            sleep(interval)

    detected = len(samples)
    rate = detected * 100.0 / frames

    if detected:
        data = np.asarray(samples, dtype=float)
        mean_tx, mean_ty, mean_distance = data.mean(axis=0)
        min_distance = data[:, 2].min()
        max_distance = data[:, 2].max()
    else:
        mean_tx = mean_ty = mean_distance = min_distance = max_distance = 0.0

    return ReliabilityReport(
        total_frames=frames,
        detected_frames=detected,
        detection_rate=rate,
        mean_tx=float(mean_tx),
        mean_ty=float(mean_ty),
        mean_distance=float(mean_distance),
        min_distance=float(min_distance),
        max_distance=float(max_distance),
        passed=rate >= min_rate,
    )


def check_pipeline_switching(
    resolver,
    settle: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[Pipeline, bool]:
    """
    Switch through every pipeline and confirm the camera reports it.

    The camera only reports its pipeline index in a valid result, so
    something must be in view for each pipeline. A pipeline that yields no
    valid frame counts as not confirmed. Ends back on PILLAR_TAGS.

    Returns:
        Pipeline -> whether the reported index matched
    """
    controller = resolver.pipelines
    results: Dict[Pipeline, bool] = {}

    order = [p for p in Pipeline if p is not controller.current] + [controller.current]
    for pipeline in order:
        controller.switch_to(pipeline)
        if settle > 0:
            sleep(settle)
        reported = resolver.reported_pipeline()
        expected = controller.index_of(pipeline)
        results[pipeline] = reported == expected
        if reported is None:
            logger.warning(f"Pipeline {pipeline.name}: no valid frame, nothing in view?")
        elif results[pipeline]:
            logger.info(f"Pipeline {pipeline.name}: SUCCESS (reported {reported})")
        else:
            logger.warning(f"Pipeline {pipeline.name}: FAILED (expected {expected}, reported {reported})")

    controller.switch_to(Pipeline.PILLAR_TAGS)
    return results
