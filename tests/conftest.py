"""
Pytest fixtures shared across test modules.
"""
import numpy as np
import pytest

# Two RGBA colors whose packed values sort A < B (alpha is the high byte).
COLOR_A = (10, 20, 30, 64)
COLOR_B = (200, 100, 50, 192)


def pack_rgba(r, g, b, a):
    """Pack an RGBA tuple the way color sources do."""
    return (a << 24) | (r << 16) | (g << 8) | b


@pytest.fixture
def packed_colors():
    """Packed values of COLOR_A and COLOR_B."""
    return pack_rgba(*COLOR_A), pack_rgba(*COLOR_B)


@pytest.fixture
def full_grid():
    """4x4 grayscale grid with every sample above 0.5."""
    return np.ones((4, 4), dtype=np.float32)


@pytest.fixture
def low_corner_grid():
    """4x4 grayscale grid with a single low sample at (0, 0)."""
    data = np.ones((4, 4), dtype=np.float32)
    data[0, 0] = 0.0
    return data


@pytest.fixture
def two_color_rgba():
    """4x4 RGBA grid: columns 0-1 are COLOR_A, columns 2-3 are COLOR_B."""
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:, :2] = COLOR_A
    pixels[:, 2:] = COLOR_B
    return pixels.reshape(-1)


@pytest.fixture
def solid_rgba():
    """4x4 RGBA grid of a single opaque red."""
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:, :] = (255, 0, 0, 255)
    return pixels.reshape(-1)
