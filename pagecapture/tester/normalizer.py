"""Capture normalisation against display pixel density.

HiDPI displays produce captures with more physical pixels than the page has
logical pixels.  Reference images are stored at logical resolution, so
captures from any scaled display are halved before comparison.

Only "scale is 1" and "scale is not 1" are distinguished.  A display at 1.5x
is still halved: the existing reference images were produced that way and
would stop matching under a proportional resize.
"""

from __future__ import annotations

from rich.console import Console

from .bitmap import Bitmap
from .display import DisplayInfoProvider, Point
from .surface import Surface

console = Console()

HIDPI_DIVISOR = 2.0


def normalize(position: Point, raw: Bitmap, displays: DisplayInfoProvider) -> Bitmap:
    """Rescale *raw* for the display nearest *position*.

    Returns *raw* itself when it is empty or the display is unscaled.
    """
    display = displays.nearest_display(position)
    rescale_factor = 1.0 / display.scale_factor

    if raw.is_empty or rescale_factor == 1:
        return raw

    console.print(
        f"[dim]Display scale {display.scale_factor:g}: halving "
        f"{raw.width}x{raw.height} capture[/dim]"
    )
    return raw.resize(raw.width / HIDPI_DIVISOR, raw.height / HIDPI_DIVISOR)


async def capture_normalized(surface: Surface, displays: DisplayInfoProvider) -> Bitmap:
    """Capture *surface* and normalise the result for its current display."""
    position = await surface.position()
    raw = await surface.capture()
    return normalize(position, raw, displays)
