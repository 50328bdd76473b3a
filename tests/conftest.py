"""
Pytest configuration and shared fixtures for Lunar Atelier tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import io
from pathlib import Path

import pytest
from PIL import Image

from LA_Libs.EditStoreLib.edit_store import EditStore


@pytest.fixture
def temp_store_dir(tmp_path):
    """
    Provide a temporary directory for saved edits and albums.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path / "store"


@pytest.fixture
def edit_store(temp_store_dir):
    """Provide an empty EditStore rooted in a temporary directory."""
    return EditStore(temp_store_dir)


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
    ]


@pytest.fixture
def swatch_image(sample_rgba_colors):
    """A 6x1 RGBA image with one pixel of each sample color."""
    image = Image.new("RGBA", (len(sample_rgba_colors), 1))
    image.putdata(sample_rgba_colors)
    return image


@pytest.fixture
def moon_image():
    """A 40x30 RGBA image with a horizontal gray gradient and a bright disc."""
    image = Image.new("RGBA", (40, 30))
    pixels = image.load()
    for y in range(30):
        for x in range(40):
            value = x * 6
            if (x - 20) ** 2 + (y - 15) ** 2 < 64:
                value = 230
            pixels[x, y] = (value, value, max(0, value - 10), 255)
    return image


@pytest.fixture
def moon_png_path(tmp_path, moon_image):
    """The moon image saved as a PNG file."""
    path = tmp_path / "moon.png"
    moon_image.save(path, format="PNG")
    return path


@pytest.fixture
def moon_png_bytes(moon_image):
    """The moon image encoded as PNG bytes."""
    buffer = io.BytesIO()
    moon_image.save(buffer, format="PNG")
    return buffer.getvalue()
