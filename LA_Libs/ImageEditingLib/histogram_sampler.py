"""
Histogram sampling for Lunar Atelier.

Counts red, green and blue intensities of an image into 256 bins. Large
images are first downscaled so their longer side is at most
``HISTOGRAM_MAX_SIDE`` pixels; the counts then describe the downscaled
image.

Functions:
    compute_sampling_size: Size an image is sampled at
    downscale_for_sampling: Resize an image to its sampling size
    bin_channels: Count channel intensities of a pixel array
    sample_histogram: Histogram of a PIL image
    sample_histogram_from_buffer: Histogram of a raw RGBA buffer
    sample_histogram_from_source: Decode an image source and sample it
"""

import logging
from typing import Any, Tuple

import numpy as np

from LA_Libs.pillow_compat import Image
from LA_Libs.errors import InvalidImageError
from LA_Libs.constants import HISTOGRAM_BINS, HISTOGRAM_MAX_SIDE
from LA_Libs.ImageEditingLib.image_models import Histogram
from LA_Libs.ImageSourceLib.image_loader import load_image

logger = logging.getLogger(__name__)


def compute_sampling_size(width: int, height: int, max_side: int = HISTOGRAM_MAX_SIDE) -> Tuple[int, int]:
    """
    Compute the size an image is sampled at.

    Images already within the bound keep their size. Otherwise the longer
    side becomes exactly *max_side* and the shorter side is scaled by the
    same factor ``max_side / longest_side`` and floored.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_side: Upper bound for the longer side

    Returns:
        Tuple of (width, height)

    Raises:
        InvalidImageError: If either dimension is not positive

    Example:
        >>> compute_sampling_size(1600, 1200)
        (800, 600)
    """
    if width <= 0 or height <= 0:
        raise InvalidImageError(f"Image has no pixels: {width}x{height}")
    if max_side <= 0:
        raise ValueError(f"max_side must be positive, got {max_side}")

    longest = max(width, height)
    if longest <= max_side:
        return width, height

    # integer floor of side * max_side / longest, exact for square images
    if width >= height:
        return max_side, height * max_side // longest
    return width * max_side // longest, max_side


def downscale_for_sampling(image: Any, max_side: int = HISTOGRAM_MAX_SIDE) -> Any:
    """
    Resize *image* to its sampling size.

    Returns the same image object when no downscale is needed. Resampling is
    bilinear.

    Raises:
        InvalidImageError: If the image is empty or a side floors to zero
    """
    width, height = image.size
    target = compute_sampling_size(width, height, max_side)
    if target == (width, height):
        return image

    if target[0] == 0 or target[1] == 0:
        raise InvalidImageError(
            f"Image {width}x{height} has no pixels after downscaling to {target[0]}x{target[1]}"
        )

    logger.debug(f"Downscaling {width}x{height} to {target[0]}x{target[1]} for histogram")
    return image.resize(target, Image.Resampling.BILINEAR)


def bin_channels(pixels: np.ndarray) -> Histogram:
    """
    Count the red, green and blue intensities of a pixel array.

    Args:
        pixels: uint8 array shaped (height, width, channels) with at least
                3 channels; any fourth (alpha) channel is ignored

    Returns:
        Histogram with 256 bins per channel

    Raises:
        InvalidImageError: If the array is not an image array or has no pixels
    """
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise InvalidImageError(f"Expected an (H, W, C>=3) pixel array, got shape {pixels.shape}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise InvalidImageError("Image has no pixels")
    if pixels.dtype != np.uint8:
        raise InvalidImageError(f"Expected 8-bit channels, got {pixels.dtype}")

    counts = []
    for channel in range(3):
        values = pixels[:, :, channel].ravel()
        counts.append(np.bincount(values, minlength=HISTOGRAM_BINS))

    red, green, blue = (tuple(int(c) for c in channel_counts) for channel_counts in counts)
    max_count = max(max(red), max(green), max(blue))
    return Histogram(red=red, green=green, blue=blue, max_count=max_count)


def sample_histogram(image: Any, max_side: int = HISTOGRAM_MAX_SIDE) -> Histogram:
    """
    Compute the RGB histogram of a PIL image.

    Args:
        image: A PIL Image in any mode (converted to RGB; alpha is dropped
               before resampling so transparent pixels keep their colour)
        max_side: Longest side the image is sampled at

    Returns:
        Histogram of the (possibly downscaled) image

    Raises:
        TypeError: If *image* is not a PIL Image
        InvalidImageError: If the image has no pixels
    """
    if not isinstance(image, Image.Image):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    width, height = image.size
    if width == 0 or height == 0:
        raise InvalidImageError(f"Image has no pixels: {width}x{height}")

    rgb = image if image.mode == "RGB" else image.convert("RGB")
    sampled = downscale_for_sampling(rgb, max_side)
    histogram = bin_channels(np.asarray(sampled))

    logger.debug(
        f"Sampled histogram of {width}x{height} image at "
        f"{sampled.size[0]}x{sampled.size[1]} (max bin {histogram.max_count})"
    )
    return histogram


def sample_histogram_from_buffer(
    buffer: bytes,
    width: int,
    height: int,
    max_side: int = HISTOGRAM_MAX_SIDE,
) -> Histogram:
    """
    Compute the RGB histogram of a raw RGBA buffer.

    Args:
        buffer: Row-major RGBA pixels, 8 bits per channel
        width: Image width in pixels
        height: Image height in pixels
        max_side: Longest side the image is sampled at

    Raises:
        InvalidImageError: If the size is empty or does not match the buffer length
    """
    if width <= 0 or height <= 0:
        raise InvalidImageError(f"Image has no pixels: {width}x{height}")

    expected = width * height * 4
    if len(buffer) != expected:
        raise InvalidImageError(
            f"RGBA buffer for {width}x{height} must hold {expected} bytes, got {len(buffer)}"
        )

    image = Image.frombuffer("RGBA", (width, height), bytes(buffer), "raw", "RGBA", 0, 1)
    return sample_histogram(image, max_side)


def sample_histogram_from_source(source: Any, max_side: int = HISTOGRAM_MAX_SIDE) -> Histogram:
    """
    Decode an image source and compute its histogram.

    The source is fully decoded before any counting starts, so a failed load
    never yields a partial histogram.

    Args:
        source: Anything accepted by :func:`LA_Libs.ImageSourceLib.image_loader.load_image`

    Raises:
        ImageLoadError: If the source cannot be fetched or decoded
        InvalidImageError: If the decoded image has no pixels
    """
    image = load_image(source)
    return sample_histogram(image, max_side)
