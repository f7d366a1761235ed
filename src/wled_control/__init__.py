"""
wled-control - WLED LED Panel Controller

A Python toolkit for pushing images to WLED-powered LED panels over the
device's HTTP JSON API.

Supports:
- Any panel size (width x height LEDs)
- Fill-and-crop or stretch resizing
- Run-length compressed segment updates
- Power, brightness and state queries

License: MIT
"""

__version__ = "0.2.0"
__author__ = "wled-control Contributors"

from .config import DeviceConfig, PanelConfig, WledSettings
from .core import WledController, setup_logging
from .commands import (
    build_device_command,
    build_off_command,
    build_query_request,
    build_state_command,
    render_command,
)
from .encoder import decode_runs, encode_runs
from .errors import (
    ConnectionFailedError,
    ImageDecodeError,
    ImageError,
    ImageNotFoundError,
    InvalidInputError,
    NonSuccessStatusError,
    TransportError,
    TransportTimeoutError,
    WledError,
)
from .graphics import (
    fit_to_panel,
    load_for_panel,
    load_image,
    normalize_for_panel,
    open_image,
    resize_image,
)
from .models import DeviceCommand, PixelGrid, Run

__all__ = [
    # Config
    "DeviceConfig",
    "PanelConfig",
    "WledSettings",
    # Core
    "WledController",
    "setup_logging",
    # Commands
    "build_device_command",
    "build_off_command",
    "build_query_request",
    "build_state_command",
    "render_command",
    # Encoding
    "encode_runs",
    "decode_runs",
    # Graphics
    "open_image",
    "load_image",
    "load_for_panel",
    "fit_to_panel",
    "normalize_for_panel",
    "resize_image",
    # Models
    "DeviceCommand",
    "PixelGrid",
    "Run",
    # Errors
    "WledError",
    "ImageError",
    "ImageNotFoundError",
    "ImageDecodeError",
    "InvalidInputError",
    "TransportError",
    "ConnectionFailedError",
    "TransportTimeoutError",
    "NonSuccessStatusError",
]
