#!/usr/bin/env python3
"""
Power and State

Turn a WLED device off or print its current state.
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wled_control.config import DeviceConfig
from wled_control.core import WledController, setup_logging
from wled_control.errors import WledError


def print_state(state: dict) -> None:
    """Show the interesting bits of /json/state."""
    print(f"  Power:      {'on' if state.get('on') else 'off'}")
    print(f"  Brightness: {state.get('bri', '?')}")
    segments = state.get("seg", [])
    print(f"  Segments:   {len(segments)}")
    for seg in segments:
        print(f"    • #{seg.get('id', '?')}: LEDs {seg.get('start', '?')}-{seg.get('stop', '?')}")


def main(argv=None) -> int:
    """Main entry point."""
    setup_logging()

    parser = argparse.ArgumentParser(description="Turn a WLED device off or read its state.")
    parser.add_argument("action", choices=["off", "state"])
    parser.add_argument("-i", "--ip", required=True, help="IP address or hostname of the device")
    parser.add_argument("--port", type=int, help="HTTP port, if not 80")
    args = parser.parse_args(argv)

    try:
        device = DeviceConfig(args.ip, port=args.port)
        with WledController(device) as controller:
            if args.action == "off":
                controller.send_off()
                print(f"✓ {device.address} switched off")
            else:
                state = controller.query_state()
                print(f"\nState of {device.address}:")
                print_state(state)
    except WledError as e:
        print(f"❌ Failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
