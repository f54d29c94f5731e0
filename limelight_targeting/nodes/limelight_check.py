#!/usr/bin/env python3
"""
Limelight Check
===============

Command line checks against a Limelight reachable over the network.

Commands:
    status       connection mode, current pipeline, target visible?
    distance     one pillar tag reading, optionally compared with a measurement
    reliability  100-frame detection rate sweep
    pipelines    switch through all pipelines and verify
    sequence     read the center tag ball order

Usage:
    limelight_check status
    limelight_check distance --alliance red --actual 48
    limelight_check reliability --alliance blue --frames 100
    limelight_check --host 10.0.0.11 pipelines
"""

import argparse
import logging
import sys
from typing import List, Optional

from limelight_targeting.core import (
    LimelightNotFoundError,
    configure_logging,
    get_config,
    load_config,
)
from limelight_targeting.diagnostics import (
    check_distance,
    check_pipeline_switching,
    run_reliability_sweep,
)
from limelight_targeting.transport import create_adapter
from limelight_targeting.vision import TargetResolver, pillar_tag_for

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_LIMELIGHT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="limelight_check",
        description="Limelight vision checks",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--host", help="Limelight hostname or IP")
    parser.add_argument("--port", type=int, help="Limelight JSON API port")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Show connection and pipeline")

    distance = sub.add_parser("distance", help="Read pillar tag distance")
    distance.add_argument("--alliance", choices=["red", "blue"], required=True)
    distance.add_argument("--actual", type=float, help="Measured distance (inches)")

    reliability = sub.add_parser("reliability", help="Detection rate sweep")
    reliability.add_argument("--alliance", choices=["red", "blue"], required=True)
    reliability.add_argument("--frames", type=int, default=100)
    reliability.add_argument("--interval", type=float, default=0.05)

    sub.add_parser("pipelines", help="Verify pipeline switching")
    sub.add_parser("sequence", help="Read center tag ball sequence")

    return parser


def _status(resolver: TargetResolver) -> int:
    print(f"Connection: {resolver.adapter.connection_mode.name}")
    print(f"Pipeline: {resolver.current_pipeline().name}")
    print(f"Target: {'YES' if resolver.has_target() else 'NO'}")
    return EXIT_OK


def _distance(resolver: TargetResolver, is_red: bool, actual: Optional[float]) -> int:
    target = resolver.get_alliance_target(is_red)
    if not target.target_found:
        print(f"No target detected. Make sure tag {pillar_tag_for(is_red)} is visible.")
        return EXIT_FAILED

    print(f"Tag ID: {target.april_tag_id}")
    print(f"tx: {target.tx:.2f} deg  ty: {target.ty:.2f} deg  ta: {target.ta:.2f} %")
    print(f"Calculated Distance: {target.distance:.2f} in")
    print(f"Angle to Target: {target.angle_to_target:.3f} rad")

    if actual is None:
        return EXIT_OK

    check = check_distance(target, actual)
    print(f"Error: {check.error:.2f} in ({check.error_percent:.1f}%)")
    print(f"Result: {'PASS' if check.passed else 'FAIL'} (error < 10%)")
    return EXIT_OK if check.passed else EXIT_FAILED


def _reliability(resolver: TargetResolver, is_red: bool, frames: int, interval: float) -> int:
    report = run_reliability_sweep(resolver, is_red, frames=frames, interval=interval)

    print(f"Detected Frames: {report.detected_frames}/{report.total_frames}")
    print(f"Detection Rate: {report.detection_rate:.1f} %")
    if report.detected_frames:
        print(f"Average tx: {report.mean_tx:.2f} deg")
        print(f"Average ty: {report.mean_ty:.2f} deg")
        print(f"Average Distance: {report.mean_distance:.2f} in")
        print(f"Distance Range: {report.min_distance:.2f} - {report.max_distance:.2f} in")
    print(f"Result: {'PASS' if report.passed else 'FAIL'} (detection rate >= 90%)")
    return EXIT_OK if report.passed else EXIT_FAILED


def _pipelines(resolver: TargetResolver) -> int:
    results = check_pipeline_switching(resolver)
    for pipeline, ok in results.items():
        print(f"{'OK  ' if ok else 'FAIL'} {pipeline.name}")
    return EXIT_OK if all(results.values()) else EXIT_FAILED


def _sequence(resolver: TargetResolver) -> int:
    sequence = resolver.read_center_tag()
    if not sequence:
        print("No center tag detected (21-23). Make sure tag is visible.")
        return EXIT_FAILED
    print("Ball Sequence: " + ", ".join(color.name for color in sequence))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config) if args.config else get_config()
    if args.host:
        config.network.host = args.host
    if args.port:
        config.network.port = args.port
    if args.verbose:
        config.logging.level = "DEBUG"
    configure_logging(config.logging)

    try:
        adapter = create_adapter(config)
    except LimelightNotFoundError as e:
        logger.error(f"{e}. Is {config.network.base_url} reachable?")
        return EXIT_NO_LIMELIGHT

    resolver = TargetResolver(adapter, config.calibration, config.pipelines)
    try:
        if args.command == "status":
            return _status(resolver)
        if args.command == "distance":
            return _distance(resolver, args.alliance == "red", args.actual)
        if args.command == "reliability":
            return _reliability(resolver, args.alliance == "red", args.frames, args.interval)
        if args.command == "pipelines":
            return _pipelines(resolver)
        return _sequence(resolver)
    finally:
        resolver.stop()


if __name__ == '__main__':
    sys.exit(main())
