"""
ImageSourceLib - Image decoding for Lunar Atelier

Loads images from files, uploaded bytes, data URLs and remote URLs.
"""

from LA_Libs.ImageSourceLib.image_loader import (
    StockPhoto,
    STOCK_PHOTOS,
    get_stock_photo,
    get_supported_image_formats,
    is_supported_format,
    load_image,
    load_image_from_path,
    load_image_from_bytes,
    load_image_from_data_url,
    load_image_from_url,
    encode_data_url,
)

__all__ = [
    "StockPhoto",
    "STOCK_PHOTOS",
    "get_stock_photo",
    "get_supported_image_formats",
    "is_supported_format",
    "load_image",
    "load_image_from_path",
    "load_image_from_bytes",
    "load_image_from_data_url",
    "load_image_from_url",
    "encode_data_url",
]
