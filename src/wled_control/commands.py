"""
Command Builder

Renders device commands as the exact JSON text the WLED state endpoint
expects. The text is assembled by hand so the wire shape stays fixed:

    {"on":true,"bri":128,"seg":{"i":[0,16,[10,20,30],16,17,[255,0,0]]}}
"""

from typing import Iterable, Optional

from .config import validate_brightness
from .models import DeviceCommand, Run

OFF_COMMAND = '{"on":false,"bri":0}'


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _color(run: Run) -> str:
    r, g, b = (int(c) for c in run.color)
    return f"[{r},{g},{b}]"


def render_run(run: Run, compact: bool = False) -> str:
    """
    Render one run as seg.i entries.

    With compact=True a single LED run uses the device's "index, color"
    shorthand instead of "start, end, color".
    """
    if compact and run.length == 1:
        return f"{run.start},{_color(run)}"
    return f"{run.start},{run.end},{_color(run)}"


def build_device_command(on: bool, brightness: int, runs: Iterable[Run]) -> DeviceCommand:
    """Bundle power, brightness and runs into a DeviceCommand."""
    return DeviceCommand(
        on=bool(on),
        brightness=validate_brightness(brightness),
        segments=tuple(runs),
    )


def render_command(command: DeviceCommand, compact: bool = False) -> str:
    """Serialize a DeviceCommand to the device's JSON text."""
    validate_brightness(command.brightness)
    body = f'{{"on":{_bool(command.on)},"bri":{command.brightness}'
    if command.segments:
        entries = ",".join(render_run(run, compact) for run in command.segments)
        body += f',"seg":{{"i":[{entries}]}}'
    return body + "}"


def build_state_command(
    on: bool,
    brightness: int,
    runs: Iterable[Run],
    compact: bool = False
) -> str:
    """Build the state update payload carrying power, brightness and colors."""
    return render_command(build_device_command(on, brightness, runs), compact)


def build_off_command() -> str:
    """Payload that switches the device off."""
    return OFF_COMMAND


def build_query_request() -> Optional[str]:
    """A state query has no body."""
    return None
