#!/usr/bin/env python3
"""
Test Device Send

Run the controller against a fake WLED device served from a local
HTTP server, so no panel is needed.
"""

import json
import socket
import sys
import tempfile
import threading
from contextlib import contextmanager
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path

import pytest
import requests
from PIL import Image, ImageDraw

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wled_control.config import DeviceConfig, PanelConfig, WledSettings
from wled_control.core import WledController
from wled_control.errors import (
    ConnectionFailedError,
    ImageNotFoundError,
    NonSuccessStatusError,
    TransportError,
    TransportTimeoutError,
)

DEVICE_STATE = {"on": True, "bri": 100, "seg": [{"id": 0, "start": 0, "stop": 256}]}


class FakeDevice(BaseHTTPRequestHandler):
    """Answers /json/state like a WLED device and records every request."""

    status = 200
    reply = None
    delay = 0.0

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.requests.append({
            "method": self.command,
            "path": self.path,
            "headers": dict(self.headers),
            "body": body,
        })
        if self.delay:
            threading.Event().wait(self.delay)

        reply = self.reply
        if reply is None:
            reply = json.dumps(DEVICE_STATE if self.command == "GET" else {"success": True})
        data = reply.encode("utf-8")

        self.send_response(self.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    do_GET = _handle
    do_POST = _handle

    def log_message(self, format, *args):
        pass


@contextmanager
def fake_device(status=200, reply=None, delay=0.0):
    """Serve a FakeDevice on a free localhost port."""
    handler = type("Handler", (FakeDevice,), {"status": status, "reply": reply, "delay": delay})

    server = HTTPServer(("127.0.0.1", 0), handler)
    server.requests = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


def local_session() -> requests.Session:
    """Session that ignores proxy settings from the environment."""
    session = requests.Session()
    session.trust_env = False
    return session


def controller_for(server, timeout=5.0) -> WledController:
    host, port = server.server_address[:2]
    return WledController(DeviceConfig(host, port=port, timeout=timeout), local_session())


def free_port() -> int:
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_state_update_is_posted_verbatim():
    """The prebuilt command is posted as-is with both fixed headers."""
    command = '{"on":true,"bri":100,"seg":{"i":[0,1,[255,0,0]]}}'

    with fake_device() as server:
        with controller_for(server) as controller:
            response = controller.send_state_update(command)

    assert response.status_code == 200
    request = server.requests[0]
    assert request["method"] == "POST"
    assert request["path"] == "/json/state"
    assert request["body"] == command.encode("utf-8")
    assert request["headers"]["Content-Type"] == "application/json"
    assert request["headers"]["User-Agent"].startswith("wled-control/")
    print("  ✓ state update posted")


def test_send_off():
    with fake_device() as server:
        with controller_for(server) as controller:
            controller.send_off()

    assert server.requests[0]["method"] == "POST"
    assert json.loads(server.requests[0]["body"]) == {"on": False, "bri": 0}


def test_query_state_uses_get():
    """Reading state is a bodiless GET returning the parsed JSON."""
    with fake_device() as server:
        with controller_for(server) as controller:
            state = controller.query_state()

    assert state == DEVICE_STATE
    assert server.requests[0]["method"] == "GET"
    assert server.requests[0]["body"] == b""


def test_query_state_invalid_json():
    with fake_device(reply="<html>oops</html>") as server:
        with controller_for(server) as controller:
            with pytest.raises(TransportError):
                controller.query_state()


def test_http_500_is_an_error():
    """A 500 from the device must not look like success."""
    with fake_device(status=500, reply="boom") as server:
        with controller_for(server) as controller:
            with pytest.raises(NonSuccessStatusError) as exc:
                controller.send_state_update('{"on":true,"bri":1}')

    assert exc.value.status_code == 500
    assert exc.value.body == "boom"
    print("  ✓ HTTP 500 -> NonSuccessStatusError(500)")


def test_unreachable_device():
    """Nothing listening on the port is a connection failure."""
    device = DeviceConfig("127.0.0.1", port=free_port(), timeout=2.0)

    with WledController(device, local_session()) as controller:
        with pytest.raises(ConnectionFailedError):
            controller.send_off()


def test_slow_device_times_out():
    with fake_device(delay=1.0) as server:
        with controller_for(server, timeout=0.2) as controller:
            with pytest.raises(TransportTimeoutError):
                controller.send_off()


def test_send_image_pipeline():
    """Image file in, run-length payload out."""
    img = Image.new('RGB', (8, 8), (0, 0, 0))
    ImageDraw.Draw(img).rectangle([0, 0, 7, 3], fill=(255, 0, 0))

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "half.png"
        img.save(path)

        with fake_device() as server:
            with controller_for(server) as controller:
                controller.send_image(path, PanelConfig(8, 8), brightness=200)

    payload = json.loads(server.requests[0]["body"])
    assert payload == {
        "on": True,
        "bri": 200,
        "seg": {"i": [0, 32, [255, 0, 0], 32, 64, [0, 0, 0]]},
    }
    print("  ✓ image pipeline sends two runs")


def test_apply_settings():
    """WledSettings drives off, brightness-only and image updates."""
    with fake_device() as server:
        host, port = server.server_address[:2]
        device = DeviceConfig(host, port=port)
        with WledController(device, local_session()) as controller:
            controller.apply(WledSettings(device=device, on=False))
            controller.apply(WledSettings(device=device, brightness=5))

    assert json.loads(server.requests[0]["body"]) == {"on": False, "bri": 0}
    assert json.loads(server.requests[1]["body"]) == {"on": True, "bri": 5}


def test_missing_image_sends_nothing():
    with fake_device() as server:
        with controller_for(server) as controller:
            with pytest.raises(ImageNotFoundError):
                controller.send_image("no_such_image.png", PanelConfig(4, 4))

    assert server.requests == []


def main():
    print("\n" + "=" * 50)
    print("   Device Send Tests")
    print("=" * 50)
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    sys.exit(main())
