"""
Error Types
===========

Only construction and caller-contract problems are raised. Connectivity and
payload problems never surface as exceptions; they come back as an invalid
DetectionFrame.
"""


class LimelightError(Exception):
    """Base class for all limelight_targeting errors."""


class LimelightNotFoundError(LimelightError, RuntimeError):
    """Neither the local bus nor the network API answered at startup."""


class DeviceNotFoundError(LimelightError, KeyError):
    """Requested device name is not present in the hardware map."""


class InvalidPipelineRequest(LimelightError, ValueError):
    """A pipeline switch was requested for a colour that has no pipeline."""
