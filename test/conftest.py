"""
Pytest Configuration for Limelight Targeting Tests
==================================================

Provides fixtures and configuration for the test suite:
- RecordingTransport: in-memory transport that counts every call
- FakeLimelightServer: real HTTP server speaking the Limelight JSON API
"""

import json
import os
import socket
import sys
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from limelight_targeting.core.config import Config
from limelight_targeting.transport.base import ConnectionMode, TransportBase
from limelight_targeting.transport.network import HttpTransport
from limelight_targeting.vision.frame import DetectionFrame


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "network: mark test as using a local HTTP server"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# In-memory transport
# =============================================================================

class RecordingTransport(TransportBase):
    """
    Transport double that records every call.

    Frames are returned in order; the last one repeats. With no frames,
    fetch_frame() returns an invalid frame.
    """

    def __init__(self, frames=None, available=True, switch_ok=True,
                 mode=ConnectionMode.HTTP_NETWORK, label="recording"):
        self.frames = list(frames or [])
        self.available = available
        self.switch_ok = switch_ok
        self.mode = mode
        self.label = label

        self.probe_calls = 0
        self.fetch_calls = 0
        self.switch_calls = []
        self.closed = False

    @property
    def name(self):
        return self.label

    @property
    def connection_mode(self):
        return self.mode

    def probe(self):
        self.probe_calls += 1
        return self.available

    def fetch_frame(self):
        self.fetch_calls += 1
        if not self.frames:
            return DetectionFrame.invalid()
        if len(self.frames) > 1:
            return self.frames.pop(0)
        return self.frames[0]

    def switch_mode(self, index):
        self.switch_calls.append(index)
        return self.switch_ok

    def close(self):
        self.closed = True


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport


# =============================================================================
# Fake Limelight HTTP server
# =============================================================================

class _LimelightHandler(BaseHTTPRequestHandler):

    def log_message(self, format, *args):
        pass

    def _reply(self, status, body=b""):
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        fake = self.server.fake
        if fake.delay:
            time.sleep(fake.delay)

        if self.path != "/results":
            self._reply(404)
            return

        fake.result_requests += 1
        if fake.raw_body is not None:
            body = fake.raw_body
        else:
            body = json.dumps(fake.payload).encode("utf-8")
        self._reply(fake.results_status, body)

    def do_POST(self):
        fake = self.server.fake
        length = int(self.headers.get("Content-Length", 0))
        body = json.loads(self.rfile.read(length) or b"{}")

        if self.path != "/settings":
            self._reply(404)
            return

        fake.pipeline_requests.append(body)
        if 200 <= fake.switch_status < 300 and "pipeline" in body:
            fake.payload["pID"] = body["pipeline"]
        self._reply(fake.switch_status, b"{}")


class FakeLimelightServer:
    """Serves /results and /settings on 127.0.0.1 with an ephemeral port."""

    def __init__(self):
        self.payload = {"v": 1, "pID": 2, "Fiducial": [], "Retro": []}
        self.raw_body = None
        self.results_status = 200
        self.switch_status = 200
        self.delay = 0.0
        self.result_requests = 0
        self.pipeline_requests = []

        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), _LimelightHandler)
        self._httpd.fake = self
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def port(self):
        return self._httpd.server_address[1]

    def start(self):
        self._thread.start()
        return self

    def stop(self):
        self._httpd.shutdown()
        self._httpd.server_close()


@pytest.fixture
def fake_limelight():
    """Running fake Limelight HTTP server."""
    server = FakeLimelightServer().start()
    yield server
    server.stop()


@pytest.fixture
def http_transport(fake_limelight):
    """HttpTransport pointed at the fake server."""
    return HttpTransport(
        host="127.0.0.1",
        port=fake_limelight.port,
        probe_timeout=2.0,
        poll_timeout=2.0,
    )


@pytest.fixture
def unused_port():
    """A local port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def fresh_config():
    """Config singleton reset before and after the test."""
    Config.reset()
    yield
    Config.reset()
