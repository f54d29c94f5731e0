"""
Limelight Targeting - Test Suite
================================

Test Categories:
    - unit/test_targeting_math.py   : distance, heading, normalization
    - unit/test_frame.py            : DetectionFrame and VisionTarget
    - unit/test_pipelines.py        : pipeline switch-on-change
    - unit/test_transport.py        : local bus and HTTP transports
    - unit/test_adapter.py          : transport selection and settle delay
    - unit/test_resolver.py         : alliance tags, center tags, balls
    - unit/test_diagnostics.py      : distance/reliability/pipeline checks
    - unit/test_limelight_check.py  : command line entry point
    - unit/test_config.py           : configuration and logging setup

Network tests run against a fake Limelight HTTP server on 127.0.0.1;
no camera is needed.

Usage:
    # Run all tests
    pytest test/

    # Skip tests that open local sockets
    pytest test/ -m "not network"
"""

__version__ = "1.0.0"
