"""
Run-Length Encoder

Collapses a pixel grid into runs of identical color, the form the WLED
segment API ("seg.i") accepts.
"""

from typing import Iterable

from .errors import InvalidInputError
from .models import PixelGrid, Run


def encode_runs(grid: PixelGrid) -> list[Run]:
    """
    Split the grid into maximal runs of equal RGB color.

    Pixels are walked in row-major order. Alpha is ignored. The runs cover
    [0, width * height) without gaps, in ascending order, and no two
    neighbouring runs share a color.

    Raises:
        InvalidInputError: the grid has no pixels.
    """
    count = len(grid)
    if count == 0:
        raise InvalidInputError("Cannot encode an empty image")

    runs: list[Run] = []
    run_start = 0
    current = grid.rgb_at(0)

    for index in range(1, count):
        color = grid.rgb_at(index)
        if color != current:
            runs.append(Run(run_start, index, current))
            run_start = index
            current = color

    # the last run is never closed inside the loop
    runs.append(Run(run_start, count, current))
    return runs


def decode_runs(runs: Iterable[Run], width: int, height: int) -> PixelGrid:
    """
    Paint runs back into a fully opaque grid.

    Shows what the panel will display for a given set of runs. Indices not
    covered by any run stay black.
    """
    pixels = [(0, 0, 0, 255)] * (width * height)
    for run in runs:
        if run.start < 0 or run.end > len(pixels) or run.start >= run.end:
            raise InvalidInputError(
                f"Run [{run.start}, {run.end}) does not fit a {width}x{height} grid"
            )
        r, g, b = run.color
        pixels[run.start:run.end] = [(r, g, b, 255)] * run.length
    return PixelGrid(width, height, tuple(pixels))
