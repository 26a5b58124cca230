"""CHIP-8 rendering utilities for visualization."""

import jax.numpy as jnp
import numpy as np
from typing import Optional, Tuple

from chipjax.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    "octo": ((255, 204, 0), (153, 102, 0)),  # Octo default palette
}


def create_color_scheme(scheme: str = "white") -> Tuple[Color, Color]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name, one of ``COLOR_SCHEMES``

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )

    return COLOR_SCHEMES[scheme]


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
    pixel_outlines: bool = False,
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (32, 64), or the flat row-major
            framebuffer of 2048 cells
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels
        pixel_outlines: Draw a one-pixel off-color border around every
            upscaled lit pixel (needs ``scale > 2``)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    pixels = np.asarray(display, dtype=np.bool_).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)

    rgb_frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    if pixel_outlines and scale > 2:
        border = np.zeros((scale, scale), dtype=np.bool_)
        border[[0, -1], :] = True
        border[:, [0, -1]] = True
        outline = np.tile(border, (SCREEN_HEIGHT, SCREEN_WIDTH))
        rgb_frame[outline] = off_color

    return rgb_frame


def display_to_text(display: jnp.ndarray, on: str = "#", off: str = ".") -> str:
    """Render the display as one text line per row."""
    pixels = np.asarray(display, dtype=np.bool_).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
    return "\n".join("".join(on if p else off for p in row) for row in pixels)


def resolve_colors(
    scheme: str,
    fg_color: Optional[Color] = None,
    bg_color: Optional[Color] = None,
) -> Tuple[Color, Color]:
    """Named scheme with optional per-color overrides."""
    on_color, off_color = create_color_scheme(scheme)
    return tuple(fg_color or on_color), tuple(bg_color or off_color)
