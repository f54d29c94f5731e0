"""
Core Module
===========

Contains core functionality shared across the package:
- Configuration management
- Logging setup
- Error types
"""

from .config import (
    Config,
    CalibrationConfig,
    NetworkConfig,
    LocalBusConfig,
    PipelineConfig,
    LoggingConfig,
    get_config,
    load_config,
)
from .errors import (
    LimelightError,
    LimelightNotFoundError,
    DeviceNotFoundError,
    InvalidPipelineRequest,
)
from .logging_setup import configure_logging

__all__ = [
    'Config',
    'CalibrationConfig',
    'NetworkConfig',
    'LocalBusConfig',
    'PipelineConfig',
    'LoggingConfig',
    'get_config',
    'load_config',
    'LimelightError',
    'LimelightNotFoundError',
    'DeviceNotFoundError',
    'InvalidPipelineRequest',
    'configure_logging',
]
