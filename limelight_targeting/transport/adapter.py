"""
Transport Adapter
=================

Supports both ways a Limelight can be connected:
1. Local bus - plugged directly into the robot controller
2. HTTP network - plugged into a laptop / network, accessed via JSON API

The adapter tries the local bus first, then falls back to HTTP. Whichever
answers is kept for the adapter's lifetime; there is no re-probing or
failover afterwards. A transport that starts failing keeps returning
invalid frames.

Usage:
    adapter = create_adapter(config, hardware_map)
    frame = adapter.fetch_frame()
    adapter.switch_mode(3)
"""

import logging
import time
from typing import Any, Callable, List, Optional, Sequence

from ..core.errors import LimelightNotFoundError
from ..vision.frame import DetectionFrame
from .base import ConnectionMode, TransportBase
from .local_bus import LocalBusTransport
from .network import HttpTransport

logger = logging.getLogger(__name__)

# Time the camera needs after a pipeline switch before results reflect it
DEFAULT_SETTLE_TIME = 0.2


class TransportAdapter:
    """
    Uniform front for the selected transport.

    Args:
        transports: Candidate transports in priority order
        settle_time: Seconds to wait after every pipeline switch
        sleep: Sleep function (injectable for tests)

    Raises:
        LimelightNotFoundError: If no candidate transport answers its probe
    """

    def __init__(
        self,
        transports: Sequence[TransportBase],
        settle_time: float = DEFAULT_SETTLE_TIME,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settle_time = settle_time
        self._sleep = sleep
        self._active = self._select(transports)

    @staticmethod
    def _select(transports: Sequence[TransportBase]) -> TransportBase:
        tried = []
        for transport in transports:
            logger.info(f"Probing {transport.name}...")
            if transport.probe():
                logger.info(f"Connected via {transport.name}")
                return transport
            tried.append(transport.name)

        message = "Limelight not accessible via " + (" or ".join(tried) or "any transport")
        logger.error(message)
        raise LimelightNotFoundError(message)

    @property
    def transport(self) -> TransportBase:
        """The selected transport."""
        return self._active

    @property
    def connection_mode(self) -> ConnectionMode:
        return self._active.connection_mode

    def probe(self) -> bool:
        """Check the selected transport is still answering."""
        return self._active.probe()

    def fetch_frame(self) -> DetectionFrame:
        """Fetch the latest frame (invalid on any failure)."""
        return self._active.fetch_frame()

    def switch_mode(self, index: int) -> bool:
        """
        Request a pipeline switch, then wait settle_time.

        Returns:
            Whether the request appeared to succeed
        """
        ok = self._active.switch_mode(index)
        if not ok:
            logger.warning(f"Pipeline switch to {index} not acknowledged")
        if self.settle_time > 0:
            self._sleep(self.settle_time)
        return ok

    def close(self) -> None:
        self._active.close()

    def __repr__(self) -> str:
        return f"TransportAdapter({self._active.name})"


def build_transports(
    config: Any,
    hardware_map: Optional[Any] = None
) -> List[TransportBase]:
    """
    Build the candidate transport list from configuration.

    The local bus is only a candidate when a hardware map is supplied and
    config.local_bus.enabled is set.
    """
    transports: List[TransportBase] = []

    if hardware_map is not None and config.local_bus.enabled:
        transports.append(LocalBusTransport(
            hardware_map,
            device_name=config.local_bus.device_name,
        ))

    net = config.network
    transports.append(HttpTransport(
        host=net.host,
        port=net.port,
        results_path=net.results_path,
        settings_path=net.settings_path,
        probe_timeout=net.probe_timeout,
        poll_timeout=net.poll_timeout,
    ))

    return transports


def create_adapter(
    config: Any = None,
    hardware_map: Optional[Any] = None,
    **kwargs
) -> TransportAdapter:
    """
    Convenience function to create a connected adapter.

    Args:
        config: Configuration object (global config if None)
        hardware_map: Robot hardware map, if running on the robot controller
        **kwargs: Passed to TransportAdapter (settle_time, sleep)

    Returns:
        Connected TransportAdapter

    Raises:
        LimelightNotFoundError: If the Limelight cannot be reached
    """
    if config is None:
        from ..core.config import get_config
        config = get_config()

    kwargs.setdefault('settle_time', config.pipelines.settle_time)
    return TransportAdapter(build_transports(config, hardware_map), **kwargs)
