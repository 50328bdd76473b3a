"""
EditStoreLib - Saved edit storage and management

This module handles persistence of Lunar Atelier edits and albums.
"""

from LA_Libs.EditStoreLib.edit_store import (
    EditRecord,
    AlbumRecord,
    EditStore,
)

__all__ = [
    "EditRecord",
    "AlbumRecord",
    "EditStore",
]
