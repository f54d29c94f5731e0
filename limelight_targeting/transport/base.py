"""
Transport Base Class
====================

Abstract base class for the ways the Limelight can be reached.
Implements Strategy pattern: the adapter picks one transport at startup
and every call goes through this interface.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from ..vision.frame import DetectionFrame


class ConnectionMode(Enum):
    """How the Limelight is connected."""
    LOCAL_BUS = auto()      # Direct USB connection to the robot controller
    HTTP_NETWORK = auto()   # Network connection via the JSON API


class TransportBase(ABC):
    """
    Abstract base class for Limelight transports.

    Contract:
        - probe() reports reachability and never raises
        - fetch_frame() never raises for connectivity or payload problems;
          it returns DetectionFrame.invalid() instead
        - switch_mode() returns whether the call appeared to succeed; it does
          not confirm the camera actually changed pipeline
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get transport name."""
        pass

    @property
    @abstractmethod
    def connection_mode(self) -> ConnectionMode:
        """Get the connection mode this transport provides."""
        pass

    @abstractmethod
    def probe(self) -> bool:
        """
        Check whether the Limelight is reachable through this transport.

        Returns:
            True if available, False otherwise
        """
        pass

    @abstractmethod
    def fetch_frame(self) -> DetectionFrame:
        """
        Fetch the latest results.

        Returns:
            DetectionFrame (invalid on any failure)
        """
        pass

    @abstractmethod
    def switch_mode(self, index: int) -> bool:
        """
        Ask the camera to switch pipeline.

        Args:
            index: Pipeline slot number

        Returns:
            True if the request appeared to succeed
        """
        pass

    def close(self) -> None:
        """Release resources. Override in subclasses if needed."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"
