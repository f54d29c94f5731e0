"""
Limelight Targeting Package
===========================

Limelight camera targeting for the competition robot: pipeline control,
AprilTag and ball targeting, and distance/heading estimation. Works the
same whether the camera is on the robot controller's local bus or reached
over its HTTP JSON API.

Subpackages:
    - core:        Configuration, logging setup, error types
    - vision:      Frame/target models, pipeline control, target resolver
    - transport:   Local bus and HTTP transports, connection adapter
    - utils:       Targeting geometry (distance, heading, normalization)
    - nodes:       Command line entry points
    - diagnostics: Distance/reliability/pipeline checks for test harnesses

Example:
    from limelight_targeting.core import get_config
    from limelight_targeting.transport import create_adapter
    from limelight_targeting.vision import TargetResolver

    config = get_config()
    resolver = TargetResolver(create_adapter(config), config.calibration)
    target = resolver.get_alliance_target(is_red_alliance=True)
"""

__version__ = '1.0.0'
