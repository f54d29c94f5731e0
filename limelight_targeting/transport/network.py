"""
HTTP Network Transport
======================

Reaches a Limelight over its JSON API, for when the camera is plugged into
a laptop or otherwise on the network instead of the robot controller.

Endpoints:
    GET  /results    latest results (JSON)
    POST /settings   {"pipeline": <index>}

Results payload (fields used):
    v         valid flag (0/1 or bool)
    pID       pipeline index (may be sent as a float)
    Fiducial  [{"fID": int, "tx": deg, "ty": deg, "ta": percent}, ...]
    Retro / Detector
              [{"tx": deg, "ty": deg, "ta": percent}, ...]

Some firmware versions wrap everything in a top level "Results" object;
both shapes are accepted.
"""

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Optional, Tuple

from ..vision.frame import ColorDetection, DetectionFrame, FiducialDetection, finite_float
from .base import ConnectionMode, TransportBase

logger = logging.getLogger(__name__)

DEFAULT_HOST = "limelight.local"
DEFAULT_PORT = 5807

COLOR_RESULT_KEYS = ("Retro", "Detector")

# Everything a request can fail with short of a programming error
REQUEST_ERRORS = (urllib.error.URLError, http.client.HTTPException, OSError, ValueError)


class MalformedPayloadError(ValueError):
    """Results payload does not have the expected structure."""


def _as_list(value: Any, key: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedPayloadError(f"'{key}' is not a list")
    return value


def parse_results(payload: Any) -> DetectionFrame:
    """
    Convert a /results JSON document into a DetectionFrame.

    Args:
        payload: Decoded JSON

    Returns:
        DetectionFrame

    Raises:
        MalformedPayloadError: If the document cannot be interpreted
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError("results payload is not an object")

    if isinstance(payload.get('Results'), dict):
        payload = payload['Results']

    try:
        valid = bool(int(payload.get('v', 0)))
        if not valid:
            return DetectionFrame.invalid()

        pipeline_index = int(payload.get('pID', 0))

        fiducials = []
        for entry in _as_list(payload.get('Fiducial'), 'Fiducial'):
            fiducial_id = int(entry.get('fID', -1))
            if fiducial_id < 0:
                continue
            fiducials.append(FiducialDetection(
                fiducial_id=fiducial_id,
                tx=finite_float(entry.get('tx', 0.0)),
                ty=finite_float(entry.get('ty', 0.0)),
                ta=finite_float(entry.get('ta', 0.0)),
            ))

        colors = []
        for key in COLOR_RESULT_KEYS:
            if key in payload:
                for entry in _as_list(payload[key], key):
                    colors.append(ColorDetection(
                        tx=finite_float(entry.get('tx', 0.0)),
                        ty=finite_float(entry.get('ty', 0.0)),
                        ta=finite_float(entry.get('ta', 0.0)),
                    ))
                break

    except (TypeError, ValueError, AttributeError, OverflowError) as e:
        raise MalformedPayloadError(str(e)) from e

    return DetectionFrame(
        valid=True,
        fiducials=fiducials,
        colors=colors,
        pipeline_index=pipeline_index,
    )


class HttpTransport(TransportBase):
    """
    Transport over the Limelight HTTP JSON API.

    Args:
        host: Limelight hostname or IP
        port: JSON API port (usually 5807)
        results_path: Path of the results endpoint
        settings_path: Path of the pipeline switch endpoint
        probe_timeout: Connect+read timeout for probe() in seconds
        poll_timeout: Connect+read timeout for steady-state calls in seconds
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        results_path: str = "/results",
        settings_path: str = "/settings",
        probe_timeout: float = 2.0,
        poll_timeout: float = 0.5,
    ):
        self.host = host
        self.port = port
        self.results_path = results_path
        self.settings_path = settings_path
        self.probe_timeout = probe_timeout
        self.poll_timeout = poll_timeout
        # The camera is always on the local network; never route via a proxy
        self._opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def name(self) -> str:
        return f"HTTP network ({self.host}:{self.port})"

    @property
    def connection_mode(self) -> ConnectionMode:
        return ConnectionMode.HTTP_NETWORK

    def _request(
        self,
        method: str,
        path: str,
        timeout: float,
        body: Optional[dict] = None
    ) -> Tuple[int, bytes]:
        """Issue one request and return (status, body). Raises on failure."""
        data = None
        headers = {}
        if body is not None:
            data = json.dumps(body).encode('utf-8')
            headers['Content-Type'] = 'application/json'

        request = urllib.request.Request(
            self.base_url + path, data=data, headers=headers, method=method
        )
        with self._opener.open(request, timeout=timeout) as response:
            return response.status, response.read()

    def probe(self) -> bool:
        try:
            status, _ = self._request('GET', self.results_path, self.probe_timeout)
        except REQUEST_ERRORS as e:
            logger.info(f"Limelight not reachable at {self.base_url}: {e}")
            return False

        if not 200 <= status < 300:
            logger.info(f"Limelight at {self.base_url} answered {status}")
            return False
        return True

    def fetch_frame(self) -> DetectionFrame:
        try:
            status, body = self._request('GET', self.results_path, self.poll_timeout)
            if not 200 <= status < 300:
                logger.warning(f"Results request returned {status}")
                return DetectionFrame.invalid()
            return parse_results(json.loads(body.decode('utf-8')))
        except REQUEST_ERRORS as e:
            # MalformedPayloadError and JSONDecodeError are ValueErrors
            logger.warning(f"Results fetch failed: {e}")
            return DetectionFrame.invalid()

    def switch_mode(self, index: int) -> bool:
        try:
            status, _ = self._request(
                'POST', self.settings_path, self.poll_timeout,
                body={'pipeline': int(index)},
            )
        except REQUEST_ERRORS as e:
            logger.warning(f"Pipeline switch to {index} failed: {e}")
            return False

        return 200 <= status < 300
