"""
Image source provider for Lunar Atelier.

Decodes images from the places an edit can start from: a user upload (raw
bytes or a ``data:`` URL), a file on disk, or a remote stock photo URL.
Every image is fully decoded and converted to RGBA before it is returned,
and every failure surfaces as :class:`ImageLoadError`.

Functions:
    load_image: Decode any supported source
    load_image_from_path: Decode a file on disk
    load_image_from_bytes: Decode encoded image bytes
    load_image_from_data_url: Decode a base64 ``data:`` URL
    load_image_from_url: Fetch and decode a remote image
    encode_data_url: Encode an image as a ``data:`` URL
    get_supported_image_formats: Supported file extensions
    is_supported_format: Check a path's extension
    get_stock_photo: Look up a stock photo by id
"""

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Tuple, Union
from urllib.parse import unquote, urlparse

import requests

from LA_Libs.pillow_compat import Image, UnidentifiedImageError
from LA_Libs.errors import ImageLoadError
from LA_Libs.constants import (
    SUPPORTED_STANDARD_IMAGES,
    HTTP_TIMEOUT_SECONDS,
    DATA_URL_FORMAT,
    STOCK_PHOTOS as _STOCK_PHOTO_ROWS,
)

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, bytearray]

DATA_URL_PREFIX = "data:"
HTTP_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class StockPhoto:
    id: int
    title: str
    url: str


STOCK_PHOTOS: Tuple[StockPhoto, ...] = tuple(StockPhoto(*row) for row in _STOCK_PHOTO_ROWS)


def get_stock_photo(photo_id: int) -> StockPhoto:
    """
    Look up a stock photo by id.

    Raises:
        KeyError: If no stock photo has that id
    """
    for photo in STOCK_PHOTOS:
        if photo.id == photo_id:
            return photo
    raise KeyError(f"Unknown stock photo id: {photo_id}")


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported standard image formats.

    Returns:
        List of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: Path) -> bool:
    """Check if a file path has a supported image extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def _decode(stream: Any, description: str) -> Any:
    """Fully decode *stream* into an RGBA image."""
    try:
        with Image.open(stream) as opened:
            opened.load()
            image = opened.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageLoadError(f"Could not decode image from {description}: {exc}") from exc

    if image.size[0] == 0 or image.size[1] == 0:
        raise ImageLoadError(f"Image from {description} has no pixels")

    logger.debug(f"Decoded {image.size[0]}x{image.size[1]} image from {description}")
    return image


def load_image_from_path(file_path: Union[str, Path]) -> Any:
    """
    Decode an image file.

    Raises:
        ImageLoadError: If the file is missing, unreadable or not an image
    """
    path = Path(file_path)
    if not path.is_file():
        raise ImageLoadError(f"Image file not found: {path}")
    return _decode(path, str(path))


def load_image_from_bytes(data: Union[bytes, bytearray]) -> Any:
    """
    Decode encoded image bytes (PNG, JPEG, ...).

    Raises:
        ImageLoadError: If the bytes are empty or not an image
    """
    if not data:
        raise ImageLoadError("Image data is empty")
    return _decode(io.BytesIO(bytes(data)), f"{len(data)} bytes")


def load_image_from_data_url(data_url: str) -> Any:
    """
    Decode a ``data:image/...;base64,...`` URL.

    Raises:
        ImageLoadError: If the URL is malformed or its payload is not an image
    """
    header, separator, payload = data_url.partition(",")
    if not header.startswith(DATA_URL_PREFIX) or not separator:
        raise ImageLoadError("Malformed data URL")
    if not header.endswith(";base64"):
        raise ImageLoadError("Only base64 data URLs are supported")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageLoadError(f"Invalid base64 payload in data URL: {exc}") from exc

    return load_image_from_bytes(data)


def load_image_from_url(url: str, timeout: float = HTTP_TIMEOUT_SECONDS) -> Any:
    """
    Fetch and decode a remote image.

    Raises:
        ImageLoadError: If the request fails, returns an error status, or the
                        body is not an image
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ImageLoadError(f"Failed to fetch image from {url}: {exc}") from exc

    return _decode(io.BytesIO(response.content), url)


def load_image(source: ImageSource) -> Any:
    """
    Decode an image from any supported source.

    Args:
        source: Encoded bytes, a ``data:`` URL, an ``http(s)://`` or
                ``file://`` URL, or a filesystem path

    Returns:
        Fully decoded RGBA PIL Image

    Raises:
        ImageLoadError: If the source cannot be fetched or decoded
        TypeError: If *source* is of an unsupported type
    """
    if isinstance(source, (bytes, bytearray)):
        return load_image_from_bytes(source)

    if isinstance(source, Path):
        return load_image_from_path(source)

    if not isinstance(source, str):
        raise TypeError(f"Unsupported image source type: {type(source).__name__}")

    if source.startswith(DATA_URL_PREFIX):
        return load_image_from_data_url(source)

    parsed = urlparse(source)
    if parsed.scheme in HTTP_SCHEMES:
        return load_image_from_url(source)
    if parsed.scheme == "file":
        return load_image_from_path(unquote(parsed.path))

    return load_image_from_path(source)


def encode_data_url(image: Any, image_format: str = DATA_URL_FORMAT) -> str:
    """
    Encode *image* as a base64 ``data:`` URL.

    JPEG output drops the alpha channel.
    """
    image_format = image_format.upper()
    if image_format == "JPG":
        image_format = "JPEG"

    if image_format == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    payload = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{image_format.lower()};base64,{payload}"
