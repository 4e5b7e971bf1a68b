# renderer/tone_mapping.py
import math
from typing import Tuple

import numpy as np
from numba import njit

from core.vector import Vector3

# Linear intensities are clamped below 1 so that 256 * sqrt(c) stays under 256.
MAX_INTENSITY = 0.999


def _encode(c: float) -> int:
    c = min(max(c, 0.0), MAX_INTENSITY)
    return int(256 * math.sqrt(c))


def to_rgb8(color_sum: Vector3, samples: int) -> Tuple[int, int, int]:
    """
    Average a sum of samples, clamp, apply gamma 2 and scale to 0..255.
    """
    scale = 1.0 / samples
    return (_encode(color_sum.x * scale),
            _encode(color_sum.y * scale),
            _encode(color_sum.z * scale))


@njit
def tone_mapping_kernel(accumulated, scale, output):
    height, width, channels = accumulated.shape
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                v = accumulated[y, x, c] * scale
                if v < 0.0:
                    v = 0.0
                elif v > MAX_INTENSITY:
                    v = MAX_INTENSITY
                output[y, x, c] = int(256.0 * math.sqrt(v))


def tone_map(accumulated: np.ndarray, samples: int) -> np.ndarray:
    """
    Convert an accumulated (height, width, 3) radiance buffer holding the sum
    of `samples` passes into a displayable uint8 image.
    """
    output = np.zeros(accumulated.shape, dtype=np.uint8)
    if samples <= 0:
        return output
    tone_mapping_kernel(np.ascontiguousarray(accumulated, dtype=np.float64), 1.0 / samples, output)
    return output
