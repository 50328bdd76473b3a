"""
LA_Libs - Lunar Atelier Library Modules

This package contains core functionality for the Lunar Atelier photo editor,
organized into specialized sub-packages:

- ImageEditingLib: Adjustment parameters, histogram sampling, filter pipeline
  compilation, presets and raster rendering
- ImageSourceLib: Decoding images from files, bytes, data URLs and remote URLs
- EditStoreLib: Persistence of saved edits and albums
"""

__version__ = "0.1.0"
