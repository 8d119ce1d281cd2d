# core/color_similarity.py

from typing import Optional, Sequence
import numpy as np

from core.color_space import hex_to_lab

DEFAULT_DELTA_E_SCALE = 50.0

def delta_e(lab1: np.ndarray, lab2: np.ndarray) -> float:
    """Euclidean distance between two Lab triples"""
    return float(np.linalg.norm(lab1 - lab2))

def color_similarity(color1: Optional[str], color2: Optional[str],
                     delta_e_scale: float = DEFAULT_DELTA_E_SCALE) -> float:
    """
    Perceptual similarity between two hex colors

    Args:
        color1: First color as #RRGGBB
        color2: Second color as #RRGGBB
        delta_e_scale: Delta-E at which similarity reaches 0

    Returns:
        Similarity in [0, 1]; 0 if either color is malformed
    """
    lab1 = hex_to_lab(color1)
    lab2 = hex_to_lab(color2)
    if lab1 is None or lab2 is None:
        return 0.0

    return max(0.0, 1.0 - delta_e(lab1, lab2) / delta_e_scale)

def max_color_similarity(target: Optional[str], colors: Sequence[Optional[str]],
                         delta_e_scale: float = DEFAULT_DELTA_E_SCALE) -> float:
    """Best similarity between target and any color of a palette"""
    if not colors:
        return 0.0
    return max(color_similarity(target, c, delta_e_scale) for c in colors)

def average_palette_similarity(colors1: Sequence[Optional[str]],
                               colors2: Sequence[Optional[str]],
                               delta_e_scale: float = DEFAULT_DELTA_E_SCALE) -> float:
    """
    Average over colors1 of each color's mean similarity to all of colors2
    """
    if not colors1 or not colors2:
        return 0.0

    per_color = [
        np.mean([color_similarity(c1, c2, delta_e_scale) for c2 in colors2])
        for c1 in colors1
    ]
    return float(np.mean(per_color))
