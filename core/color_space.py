# core/color_space.py

import re
import numpy as np
from typing import Optional, Tuple

HEX_COLOR_PATTERN = re.compile(r'^#[0-9a-fA-F]{6}$')

# sRGB -> XYZ, D65
SRGB_TO_XYZ = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505],
])
D65_WHITE = np.array([0.95047, 1.0, 1.08883])

LAB_EPSILON = 0.008856
LAB_KAPPA = 7.787

def hex_to_rgb(color: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """
    Parse a ``#RRGGBB`` string into an RGB triple.

    Returns None for anything that is not exactly six hex digits behind a
    leading '#'. Case-insensitive, surrounding whitespace is ignored.
    """
    if not isinstance(color, str):
        return None

    color = color.strip()
    if not HEX_COLOR_PATTERN.match(color):
        return None

    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)

def rgb_to_lab(r: int, g: int, b: int) -> np.ndarray:
    """
    Convert an sRGB triple (0-255 per channel) to CIE Lab

    Returns:
        Array of shape (3,) holding L, a, b
    """
    rgb = np.array([r, g, b], dtype=np.float64) / 255.0

    # Inverse sRGB gamma
    linear = np.where(rgb > 0.04045, ((rgb + 0.055) / 1.055) ** 2.4, rgb / 12.92)

    xyz = SRGB_TO_XYZ @ linear / D65_WHITE

    f = np.where(xyz > LAB_EPSILON, np.cbrt(xyz), LAB_KAPPA * xyz + 16 / 116)
    fx, fy, fz = f

    return np.array([116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)])

def hex_to_lab(color: Optional[str]) -> Optional[np.ndarray]:
    """Parse and convert in one step; None on malformed input"""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return None
    return rgb_to_lab(*rgb)
