"""
Local Bus Transport
===================

Reaches a Limelight plugged directly into the robot controller.

The robot platform provides a hardware map that can open a device by its
configured name. The opened handle exposes:

    set_mode(index)   switch pipeline
    start()           begin result polling
    latest_frame()    newest RawResult, or None
    stop()            stop polling

Raw results use the driver's own field names (target_x_degrees, ...);
frame_from_raw() converts them to the shared DetectionFrame.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.errors import DeviceNotFoundError
from ..vision.frame import ColorDetection, DetectionFrame, FiducialDetection, finite_float
from .base import ConnectionMode, TransportBase

logger = logging.getLogger(__name__)


@dataclass
class RawFiducial:
    """AprilTag entry as reported by the device driver."""
    fiducial_id: int
    target_x_degrees: float
    target_y_degrees: float
    target_area: float


@dataclass
class RawColor:
    """Colour blob entry as reported by the device driver."""
    target_x_degrees: float
    target_y_degrees: float
    target_area: float


@dataclass
class RawResult:
    """One result as reported by the device driver."""
    valid: bool
    fiducials: List[RawFiducial] = field(default_factory=list)
    colors: List[RawColor] = field(default_factory=list)
    pipeline_index: int = 0


def frame_from_raw(raw: Optional[RawResult]) -> DetectionFrame:
    """
    Convert a driver result into a DetectionFrame.

    Args:
        raw: Driver result, or None when the driver has nothing yet

    Returns:
        DetectionFrame (invalid when raw is None or not valid)
    """
    if raw is None or not raw.valid:
        return DetectionFrame.invalid()

    fiducials = [
        FiducialDetection(
            fiducial_id=int(f.fiducial_id),
            tx=finite_float(f.target_x_degrees),
            ty=finite_float(f.target_y_degrees),
            ta=finite_float(f.target_area),
        )
        for f in raw.fiducials
        if f.fiducial_id >= 0
    ]
    colors = [
        ColorDetection(
            tx=finite_float(c.target_x_degrees),
            ty=finite_float(c.target_y_degrees),
            ta=finite_float(c.target_area),
        )
        for c in raw.colors
    ]

    return DetectionFrame(
        valid=True,
        fiducials=fiducials,
        colors=colors,
        pipeline_index=int(raw.pipeline_index),
    )


class LocalBusDevice(ABC):
    """Handle to an opened Limelight on the local bus."""

    @abstractmethod
    def set_mode(self, index: int) -> None:
        """Switch pipeline."""
        pass

    @abstractmethod
    def start(self) -> None:
        """Start result polling."""
        pass

    @abstractmethod
    def latest_frame(self) -> Optional[RawResult]:
        """Get the newest result, or None."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop result polling."""
        pass


class HardwareMap:
    """
    Registry of devices present in the robot configuration.

    Usage:
        hardware_map = HardwareMap()
        hardware_map.register("limelight", device)
        handle = hardware_map.open("limelight")
    """

    def __init__(self, devices: Optional[Dict[str, LocalBusDevice]] = None):
        self._devices: Dict[str, LocalBusDevice] = dict(devices or {})

    def register(self, name: str, device: LocalBusDevice) -> None:
        """Add a device under its configured name."""
        self._devices[name] = device

    def names(self) -> List[str]:
        """Get configured device names."""
        return list(self._devices.keys())

    def open(self, name: str) -> LocalBusDevice:
        """
        Get the device configured under name.

        Raises:
            DeviceNotFoundError: If no such device is configured
        """
        if name not in self._devices:
            raise DeviceNotFoundError(name)
        return self._devices[name]


class MockLimelightDevice(LocalBusDevice):
    """
    Mock Limelight for testing without hardware.

    Returns queued results in order; once the queue is down to one entry,
    that entry is repeated. Records every set_mode() call.

    Usage:
        device = MockLimelightDevice()
        device.queue_result(RawResult(valid=True, fiducials=[...]))
    """

    def __init__(self, results: Optional[List[Optional[RawResult]]] = None):
        self._results: List[Optional[RawResult]] = list(results or [])
        self.mode_calls: List[int] = []
        self.current_mode = 0
        self.running = False
        self.fail_reads = False

    def queue_result(self, result: Optional[RawResult]) -> None:
        """Add a result to return from latest_frame()."""
        self._results.append(result)

    def set_mode(self, index: int) -> None:
        self.mode_calls.append(index)
        self.current_mode = index

    def start(self) -> None:
        self.running = True
        logger.info("Mock Limelight started")

    def stop(self) -> None:
        self.running = False
        logger.info("Mock Limelight stopped")

    def latest_frame(self) -> Optional[RawResult]:
        if self.fail_reads:
            raise RuntimeError("Mock Limelight read failure")
        if not self.running or not self._results:
            return None
        if len(self._results) > 1:
            return self._results.pop(0)
        return self._results[0]


class LocalBusTransport(TransportBase):
    """
    Transport over a directly connected Limelight.

    Args:
        hardware_map: Object with open(name) returning a LocalBusDevice
        device_name: Name of the Limelight in the robot configuration
    """

    def __init__(self, hardware_map: HardwareMap, device_name: str = "limelight"):
        self.hardware_map = hardware_map
        self.device_name = device_name
        self._device: Optional[LocalBusDevice] = None

    @property
    def name(self) -> str:
        return f"Local bus ({self.device_name})"

    @property
    def connection_mode(self) -> ConnectionMode:
        return ConnectionMode.LOCAL_BUS

    @property
    def is_open(self) -> bool:
        return self._device is not None

    def probe(self) -> bool:
        """Open and start the device if it is present in the hardware map."""
        if self._device is not None:
            return True

        try:
            device = self.hardware_map.open(self.device_name)
            device.start()
        except DeviceNotFoundError:
            logger.info(f"No '{self.device_name}' in hardware map")
            return False
        except Exception as e:
            logger.warning(f"Failed to start '{self.device_name}': {e}")
            return False

        self._device = device
        logger.info(f"Limelight opened on local bus as '{self.device_name}'")
        return True

    def fetch_frame(self) -> DetectionFrame:
        if self._device is None:
            return DetectionFrame.invalid()

        try:
            raw = self._device.latest_frame()
        except Exception as e:
            logger.error(f"Local bus read error: {e}")
            return DetectionFrame.invalid()

        try:
            return frame_from_raw(raw)
        except (TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(f"Malformed local bus result: {e}")
            return DetectionFrame.invalid()

    def switch_mode(self, index: int) -> bool:
        if self._device is None:
            return False

        try:
            self._device.set_mode(index)
        except Exception as e:
            logger.error(f"Local bus pipeline switch to {index} failed: {e}")
            return False
        return True

    def close(self) -> None:
        if self._device is None:
            return

        try:
            self._device.stop()
        except Exception as e:
            logger.error(f"Error stopping '{self.device_name}': {e}")
        self._device = None
