"""
Constants and configuration values for Lunar Atelier.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Adjustment domains (inclusive) and neutral values
BRIGHTNESS_RANGE = (50.0, 200.0)
CONTRAST_RANGE = (50.0, 200.0)
SATURATION_RANGE = (0.0, 200.0)
BLUR_RADIUS_RANGE = (0.0, 10.0)
HUE_ROTATION_RANGE = (-180.0, 180.0)
TEMPERATURE_RANGE = (-50.0, 50.0)

NEUTRAL_BRIGHTNESS = 100
NEUTRAL_CONTRAST = 100
NEUTRAL_SATURATION = 100
NEUTRAL_BLUR_RADIUS = 0
NEUTRAL_HUE_ROTATION = 0
NEUTRAL_TEMPERATURE = 0

# Persisted settings keys
SETTING_BRIGHTNESS = "brightness"
SETTING_CONTRAST = "contrast"
SETTING_SATURATION = "saturate"
SETTING_BLUR = "blur"
SETTING_HUE = "hue"
SETTING_TEMPERATURE = "temperature"

# Filter operation names
OP_BRIGHTNESS = "brightness"
OP_CONTRAST = "contrast"
OP_SATURATE = "saturate"
OP_BLUR = "blur"
OP_HUE_ROTATE = "hue-rotate"
OP_SEPIA = "sepia"

# Operation units
UNIT_PERCENT = "%"
UNIT_PIXELS = "px"
UNIT_DEGREES = "deg"
UNIT_NONE = ""

# Renderings
RENDERING_PREVIEW = "preview"
RENDERING_EXPORT = "export"

# Temperature mapping
TEMPERATURE_SEPIA_DIVISOR = 100.0
TEMPERATURE_HUE_FACTOR = 2.0

# Histogram sampling
HISTOGRAM_BINS = 256
HISTOGRAM_MAX_SIDE = 800

# Presets (table order)
PRESET_LUNAR_SURFACE = "lunar-surface"
PRESET_DEEP_CRATER = "deep-crater"
PRESET_BRIGHT_MOON = "bright-moon"
PRESET_MONOCHROME = "monochrome"

# Store layout
EDITS_DIR_NAME = "Edits"
ALBUMS_DIR_NAME = "Albums"
EDIT_EXTENSION = ".laedit"
ALBUM_EXTENSION = ".laalbum"
SCHEMA_VERSION = 1
DEFAULT_EDIT_LABEL = "Custom"
SESSION_EDIT_LABEL = "Custom Edit"

# Store field names
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_ID = "id"
FIELD_LABEL = "label"
FIELD_NAME = "name"
FIELD_DESCRIPTION = "description"
FIELD_CREATED_AT = "created_at"
FIELD_UPDATED_AT = "updated_at"
FIELD_IMAGE_REF = "image_ref"
FIELD_SETTINGS = "settings"
FIELD_ALBUM_ID = "album_id"

# File naming
OUTPUT_FILE_PREFIX = "lunar_"
DEFAULT_OUTPUT_FORMAT = "PNG"
DEFAULT_EXPORT_FILENAME = "lunar-edit.png"
DEFAULT_JPEG_QUALITY = 95
DATA_URL_FORMAT = "JPEG"

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}

# Remote sources
HTTP_TIMEOUT_SECONDS = 30

# Stock moon photos
STOCK_PHOTOS = (
    (1, "Full Moon", "https://images.unsplash.com/photo-1509773896068-7fd415d91e2e?w=800"),
    (2, "Crescent Moon", "https://images.unsplash.com/photo-1532693322450-2cb5c511067d?w=800"),
    (3, "Moon Surface", "https://images.unsplash.com/photo-1581822261290-991b38693d1b?w=800"),
    (4, "Blood Moon", "https://images.unsplash.com/photo-1446941611757-91d2c3bd3d45?w=800"),
    (5, "Half Moon", "https://images.unsplash.com/photo-1520034475321-cbe63696469a?w=800"),
    (6, "Lunar Eclipse", "https://images.unsplash.com/photo-1517699418036-fb5d179fef0c?w=800"),
)
