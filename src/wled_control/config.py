"""
Configuration

Validated settings records handed to the core by the command-line layer.
Nothing here is read from or written to disk.
"""

import ipaddress
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .errors import InvalidInputError

DEFAULT_USER_AGENT = f"wled-control/{__version__}"
DEFAULT_TIMEOUT = 5.0
DEFAULT_BRIGHTNESS = 128
STATE_ENDPOINT = "/json/state"

_HOSTNAME_RE = re.compile(
    r"^[A-Za-z0-9]([A-Za-z0-9-]{0,62})"
    r"(\.[A-Za-z0-9]([A-Za-z0-9-]{0,62}))*\.?$"
)


def validate_brightness(brightness: int) -> int:
    """Check that brightness fits the device's 0-255 range."""
    if isinstance(brightness, bool) or not isinstance(brightness, int):
        raise InvalidInputError(f"Brightness must be an integer, got {brightness!r}")
    if not 0 <= brightness <= 255:
        raise InvalidInputError(f"Brightness must be 0-255, got {brightness}")
    return brightness


@dataclass(frozen=True)
class PanelConfig:
    """Physical LED grid of the panel."""
    width: int
    height: int
    crop_on_aspect_mismatch: bool = False

    def __post_init__(self):
        for value in (self.width, self.height):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"Panel size must be integers, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(
                f"Panel size must be positive, got {self.width}x{self.height}"
            )

    @property
    def led_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class DeviceConfig:
    """
    Where the WLED device lives and how to talk to it.

    A malformed address (empty, with a scheme or path, or not a valid IP or
    hostname) raises InvalidInputError here, before any request is made.
    Only failures that happen on the wire are TransportError.
    """
    address: str
    port: Optional[int] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        address = str(self.address).strip()
        if not address:
            raise InvalidInputError("Device address is empty")
        if "://" in address or "/" in address or any(c.isspace() for c in address):
            raise InvalidInputError(f"Malformed device address: {address!r}")
        if not (_is_ip(address) or _HOSTNAME_RE.match(address)):
            raise InvalidInputError(f"Malformed device address: {address!r}")
        if self.port is not None and not 0 < self.port < 65536:
            raise InvalidInputError(f"Port must be 1-65535, got {self.port}")
        # frozen dataclass
        object.__setattr__(self, 'address', address)

    @property
    def base_url(self) -> str:
        host = self.address
        if _is_ipv6(host):
            host = f"[{host}]"
        if self.port is not None:
            host = f"{host}:{self.port}"
        return f"http://{host}"

    @property
    def state_url(self) -> str:
        return f"{self.base_url}{STATE_ENDPOINT}"


@dataclass(frozen=True)
class WledSettings:
    """Everything one invocation needs."""
    device: DeviceConfig
    panel: Optional[PanelConfig] = None
    image_path: Optional[Path] = None
    brightness: int = DEFAULT_BRIGHTNESS
    on: bool = True
    compact: bool = False

    def __post_init__(self):
        validate_brightness(self.brightness)
        if self.image_path is not None:
            object.__setattr__(self, 'image_path', Path(self.image_path))
            if self.panel is None:
                raise InvalidInputError("Panel size is required to send an image")


def _is_ip(address: str) -> bool:
    try:
        ipaddress.ip_address(address)
        return True
    except ValueError:
        return False


def _is_ipv6(address: str) -> bool:
    try:
        return ipaddress.ip_address(address).version == 6
    except ValueError:
        return False
