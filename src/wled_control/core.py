"""
Core HTTP Communication Module

Handles talking to a WLED device over its JSON API and runs the
image -> panel -> runs -> command -> device pipeline.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import requests

from .commands import build_off_command, build_query_request, build_state_command
from .config import DEFAULT_BRIGHTNESS, DeviceConfig, PanelConfig, WledSettings
from .encoder import encode_runs
from .errors import (
    ConnectionFailedError,
    NonSuccessStatusError,
    TransportError,
    TransportTimeoutError,
)
from .graphics import load_for_panel

logger = logging.getLogger(__name__)


class WledController:
    """
    Controller for sending state and images to one WLED device.

    Each call is a single HTTP request. Failures are raised as
    TransportError subclasses and never retried here.
    """

    def __init__(self, device: DeviceConfig, session: Optional[requests.Session] = None):
        """
        Initialize the controller.

        Args:
            device: Address, timeout and user agent of the device.
            session: Optional requests session to reuse connections.
        """
        self.device = device
        self.session = session or requests.Session()

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.device.user_agent,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, body: Optional[str] = None) -> requests.Response:
        url = self.device.state_url
        data = body.encode("utf-8") if body is not None else None
        logger.info(f"[{self.device.address}] {method} {url} ({len(data or b'')} bytes)")

        try:
            response = self.session.request(
                method,
                url,
                data=data,
                headers=self.headers,
                timeout=self.device.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"[{self.device.address}] Timeout!")
            raise TransportTimeoutError(f"Request to {url} timed out", url) from e
        except (requests.exceptions.ConnectionError,
                requests.exceptions.InvalidURL,
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema) as e:
            logger.error(f"[{self.device.address}] Connection failed: {e}")
            raise ConnectionFailedError(f"Could not reach {url}: {e}", url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"[{self.device.address}] Error: {e}")
            raise TransportError(f"Request to {url} failed: {e}", url) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"[{self.device.address}] HTTP {response.status_code}")
            raise NonSuccessStatusError(response.status_code, url, response.text)

        logger.debug(f"[{self.device.address}] Response: {response.text}")
        return response

    # -------------------------------------------------------------------------
    # Device operations
    # -------------------------------------------------------------------------

    def send_state_update(self, command: str) -> requests.Response:
        """POST a prebuilt state command as-is."""
        return self._request("POST", command)

    def send_off(self) -> requests.Response:
        """Switch the device off."""
        return self._request("POST", build_off_command())

    def query_state(self) -> dict[str, Any]:
        """
        Read the device's current state.

        Returns:
            The parsed JSON object returned by /json/state.
        """
        response = self._request("GET", build_query_request())
        try:
            state = response.json()
        except ValueError as e:
            raise TransportError(
                f"Device returned invalid JSON: {response.text[:80]!r}",
                self.device.state_url,
            ) from e
        if not isinstance(state, dict):
            raise TransportError("Device state is not a JSON object", self.device.state_url)
        return state

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def send_image(
        self,
        image_path: Union[Path, str],
        panel: PanelConfig,
        on: bool = True,
        brightness: int = DEFAULT_BRIGHTNESS,
        compact: bool = False
    ) -> requests.Response:
        """
        Load an image, fit it to the panel and push it to the device.

        Args:
            image_path: Image file to display.
            panel: LED grid size and crop preference.
            on: Power state to send along with the image.
            brightness: Device brightness, 0-255.
            compact: Use the single-LED shorthand in the payload.

        Returns:
            The device's HTTP response.
        """
        grid = load_for_panel(image_path, panel)
        runs = encode_runs(grid)
        logger.info(f"Encoded {len(grid)} pixels into {len(runs)} run(s)")

        command = build_state_command(on, brightness, runs, compact)
        return self.send_state_update(command)

    def apply(self, settings: WledSettings) -> requests.Response:
        """Carry out one invocation described by WledSettings."""
        if not settings.on:
            return self.send_off()
        if settings.image_path is None:
            return self.send_state_update(
                build_state_command(True, settings.brightness, ())
            )
        return self.send_image(
            settings.image_path,
            settings.panel,
            on=True,
            brightness=settings.brightness,
            compact=settings.compact,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "WledController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for device operations."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
