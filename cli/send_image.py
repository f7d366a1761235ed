#!/usr/bin/env python3
"""
Send Image to a WLED Panel

Fit an image file to the panel, compress it into color runs and send it
to the device together with brightness and power state.
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wled_control.config import DEFAULT_BRIGHTNESS, DeviceConfig, PanelConfig, WledSettings
from wled_control.core import WledController, setup_logging
from wled_control.errors import WledError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send an image to a WLED-powered LED panel."
    )
    parser.add_argument("path", type=Path, help="Image to send")
    parser.add_argument("-i", "--ip", required=True, help="IP address or hostname of the device")
    parser.add_argument("--port", type=int, help="HTTP port, if not 80")
    parser.add_argument("-W", "--width", type=int, required=True, help="Panel width in LEDs")
    parser.add_argument("-H", "--height", type=int, required=True, help="Panel height in LEDs")
    parser.add_argument(
        "--crop",
        action="store_true",
        help="Fill and center crop when the aspect ratio differs (default: stretch)",
    )
    parser.add_argument(
        "-b", "--bright",
        dest="brightness",
        type=int,
        default=DEFAULT_BRIGHTNESS,
        help="Brightness 0-255. Very low values may leave the panel dark.",
    )
    parser.add_argument("--off", action="store_true", help="Turn the panel off instead")
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Use the single-LED shorthand to shrink the payload",
    )
    parser.add_argument("--timeout", type=float, default=5.0, help="Request timeout in seconds")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    setup_logging()
    args = parse_args(argv)

    print("\n" + "=" * 50)
    print("   wled-control - Send Image")
    print("=" * 50)
    print(f"\nImage: {args.path}")

    try:
        settings = WledSettings(
            device=DeviceConfig(args.ip, port=args.port, timeout=args.timeout),
            panel=PanelConfig(args.width, args.height, crop_on_aspect_mismatch=args.crop),
            image_path=args.path,
            brightness=args.brightness,
            on=not args.off,
            compact=args.compact,
        )
        with WledController(settings.device) as controller:
            response = controller.apply(settings)
    except WledError as e:
        print(f"❌ Failed: {e}")
        return 1

    print(f"✓ Sent to {settings.device.address} (HTTP {response.status_code})")
    print(f"  {response.text}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
