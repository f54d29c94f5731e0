"""
Transport Module
================

Provides Limelight access over two interchangeable transports:
- Local bus (camera plugged into the robot controller)
- HTTP network (camera reached through its JSON API)

Uses Strategy pattern; TransportAdapter picks one at construction.
"""

from .base import TransportBase, ConnectionMode
from .local_bus import (
    LocalBusTransport,
    LocalBusDevice,
    HardwareMap,
    MockLimelightDevice,
    RawResult,
    RawFiducial,
    RawColor,
    frame_from_raw,
)
from .network import HttpTransport, MalformedPayloadError, parse_results
from .adapter import TransportAdapter, build_transports, create_adapter

__all__ = [
    'TransportBase',
    'ConnectionMode',
    'LocalBusTransport',
    'LocalBusDevice',
    'HardwareMap',
    'MockLimelightDevice',
    'RawResult',
    'RawFiducial',
    'RawColor',
    'frame_from_raw',
    'HttpTransport',
    'MalformedPayloadError',
    'parse_results',
    'TransportAdapter',
    'build_transports',
    'create_adapter',
]
