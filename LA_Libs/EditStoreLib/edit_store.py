"""
Saved edit and album storage for Lunar Atelier.

This module handles the persistence layer for edits, storing each edit and
each album as a small JSON file under a base directory passed in by the
caller.

The edit file schema includes:
- Edit metadata (id, label, creation date, schema version)
- The opaque image reference the edit applies to
- The six adjustment settings
- The album the edit belongs to, if any

Classes:
    EditRecord: A saved edit as read back from disk
    AlbumRecord: A saved album with its edit count
    EditStore: Creates, lists, loads and deletes edits and albums
"""

import json
import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from LA_Libs.errors import EditNotFoundError, InvalidParameterError
from LA_Libs.constants import (
    EDITS_DIR_NAME,
    ALBUMS_DIR_NAME,
    EDIT_EXTENSION,
    ALBUM_EXTENSION,
    SCHEMA_VERSION,
    DEFAULT_EDIT_LABEL,
    FIELD_SCHEMA_VERSION,
    FIELD_ID,
    FIELD_LABEL,
    FIELD_NAME,
    FIELD_DESCRIPTION,
    FIELD_CREATED_AT,
    FIELD_UPDATED_AT,
    FIELD_IMAGE_REF,
    FIELD_SETTINGS,
    FIELD_ALBUM_ID,
)
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters

logger = logging.getLogger(__name__)

_RECORD_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


@dataclass(frozen=True)
class EditRecord:
    id: str
    label: str
    image_ref: str
    parameters: AdjustmentParameters
    created_at: str
    album_id: Optional[str] = None


@dataclass(frozen=True)
class AlbumRecord:
    id: str
    name: str
    description: str
    created_at: str
    edit_count: int = 0


def _timestamp() -> str:
    return datetime.now().isoformat(timespec="microseconds")


def _new_record_id() -> str:
    return uuid.uuid4().hex


class EditStore:
    """
    File-backed store for saved edits and albums.

    The store owns ``<base_dir>/Edits`` and ``<base_dir>/Albums``. Each
    instance is independent; pass the store to whatever needs to persist.

    Example:
        >>> store = EditStore(Path("~/lunar").expanduser())
        >>> edit_id = store.save_edit(params, "Crater study", "moon.png")
        >>> store.load_edit(edit_id).parameters == params
        True
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def edits_dir(self) -> Path:
        edits_dir = self.base_dir / EDITS_DIR_NAME
        edits_dir.mkdir(parents=True, exist_ok=True)
        return edits_dir

    @property
    def albums_dir(self) -> Path:
        albums_dir = self.base_dir / ALBUMS_DIR_NAME
        albums_dir.mkdir(parents=True, exist_ok=True)
        return albums_dir

    def _record_path(self, directory: Path, record_id: str, extension: str, kind: str) -> Path:
        record_id = str(record_id)
        if not _RECORD_ID_PATTERN.match(record_id):
            raise EditNotFoundError(f"{kind} not found: {record_id}")
        return directory / f"{record_id}{extension}"

    def _edit_path(self, edit_id: str) -> Path:
        return self._record_path(self.edits_dir, edit_id, EDIT_EXTENSION, "Edit")

    def _album_path(self, album_id: str) -> Path:
        return self._record_path(self.albums_dir, album_id, ALBUM_EXTENSION, "Album")

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _write(path: Path, payload: Dict[str, Any]) -> None:
        payload[FIELD_SCHEMA_VERSION] = SCHEMA_VERSION
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    @staticmethod
    def _read(path: Path, kind: str, record_id: str) -> Dict[str, Any]:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise EditNotFoundError(f"{kind} not found: {record_id}") from None

        if not isinstance(payload, dict):
            raise ValueError(f"{kind} file is not a JSON object: {path}")
        return payload

    def _read_all(self, directory: Path, extension: str) -> List[Tuple[Path, Dict[str, Any]]]:
        """Read every store file in *directory* as (path, payload) pairs."""
        payloads: List[Tuple[Path, Dict[str, Any]]] = []
        for path in sorted(directory.glob(f"*{extension}")):
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning(f"Skipping unreadable store file {path}: {exc}")
                continue
            if not isinstance(payload, dict):
                logger.warning(f"Skipping malformed store file {path}")
                continue
            payload.setdefault(FIELD_ID, path.stem)
            payloads.append((path, payload))
        return payloads

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    @staticmethod
    def _edit_from_payload(payload: Dict[str, Any]) -> EditRecord:
        settings = payload.get(FIELD_SETTINGS)
        if not isinstance(settings, dict):
            settings = {}
        album_id = payload.get(FIELD_ALBUM_ID)
        return EditRecord(
            id=str(payload.get(FIELD_ID, "")),
            label=str(payload.get(FIELD_LABEL) or DEFAULT_EDIT_LABEL),
            image_ref=str(payload.get(FIELD_IMAGE_REF, "")),
            parameters=AdjustmentParameters.from_dict(settings),
            created_at=str(payload.get(FIELD_CREATED_AT, "")),
            album_id=str(album_id) if album_id else None,
        )

    def save_edit(
        self,
        params: AdjustmentParameters,
        label: str,
        image_ref: str,
        album_id: Optional[str] = None,
    ) -> str:
        """
        Persist an edit.

        Args:
            params: The adjustment settings
            label: Display label; blank labels become 'Custom'
            image_ref: Opaque reference to the edited image (path, URL or data URL)
            album_id: Optional album to file the edit under

        Returns:
            The new edit id

        Raises:
            ValueError: If image_ref is empty
            EditNotFoundError: If album_id does not exist
        """
        if not image_ref:
            raise ValueError("Image reference is required")

        if album_id is not None and not self._album_path(album_id).exists():
            raise EditNotFoundError(f"Album not found: {album_id}")

        edit_id = _new_record_id()
        payload: Dict[str, Any] = {
            FIELD_ID: edit_id,
            FIELD_LABEL: (label or "").strip() or DEFAULT_EDIT_LABEL,
            FIELD_CREATED_AT: _timestamp(),
            FIELD_IMAGE_REF: str(image_ref),
            FIELD_SETTINGS: params.to_dict(),
            FIELD_ALBUM_ID: album_id,
        }
        self._write(self._edit_path(edit_id), payload)
        logger.debug(f"Saved edit {edit_id} ({payload[FIELD_LABEL]})")
        return edit_id

    def load_edit(self, edit_id: str) -> EditRecord:
        """
        Load a saved edit.

        Raises:
            EditNotFoundError: If no edit has that id
        """
        payload = self._read(self._edit_path(edit_id), "Edit", edit_id)
        payload.setdefault(FIELD_ID, edit_id)
        return self._edit_from_payload(payload)

    def list_edits(self, album_id: Optional[str] = None) -> List[EditRecord]:
        """List saved edits, newest first, optionally only those in *album_id*."""
        records: List[EditRecord] = []
        for path, payload in self._read_all(self.edits_dir, EDIT_EXTENSION):
            try:
                records.append(self._edit_from_payload(payload))
            except InvalidParameterError as exc:
                logger.warning(f"Skipping edit with invalid settings {path}: {exc}")
        if album_id is not None:
            records = [r for r in records if r.album_id == album_id]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def delete_edit(self, edit_id: str) -> str:
        """
        Delete a saved edit.

        Returns:
            The deleted id

        Raises:
            EditNotFoundError: If no edit has that id
        """
        path = self._edit_path(edit_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise EditNotFoundError(f"Edit not found: {edit_id}") from None
        logger.debug(f"Deleted edit {edit_id}")
        return edit_id

    # ------------------------------------------------------------------
    # Albums
    # ------------------------------------------------------------------

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("Album name is required")
        return cleaned

    def _album_from_payload(self, payload: Dict[str, Any], edit_count: int) -> AlbumRecord:
        return AlbumRecord(
            id=str(payload.get(FIELD_ID, "")),
            name=str(payload.get(FIELD_NAME, "")),
            description=str(payload.get(FIELD_DESCRIPTION) or ""),
            created_at=str(payload.get(FIELD_CREATED_AT, "")),
            edit_count=edit_count,
        )

    def _count_edits(self, album_id: str) -> int:
        return sum(1 for edit in self.list_edits() if edit.album_id == album_id)

    def create_album(self, name: str, description: str = "") -> str:
        """
        Create an album.

        Returns:
            The new album id

        Raises:
            ValueError: If the name is blank
        """
        album_id = _new_record_id()
        payload: Dict[str, Any] = {
            FIELD_ID: album_id,
            FIELD_NAME: self._clean_name(name),
            FIELD_DESCRIPTION: (description or "").strip(),
            FIELD_CREATED_AT: _timestamp(),
        }
        self._write(self._album_path(album_id), payload)
        logger.debug(f"Created album {album_id} ({payload[FIELD_NAME]})")
        return album_id

    def load_album(self, album_id: str) -> AlbumRecord:
        payload = self._read(self._album_path(album_id), "Album", album_id)
        payload.setdefault(FIELD_ID, album_id)
        return self._album_from_payload(payload, self._count_edits(album_id))

    def update_album(
        self,
        album_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> AlbumRecord:
        """
        Rename an album or change its description.

        Raises:
            EditNotFoundError: If no album has that id
            ValueError: If a blank name is given
        """
        path = self._album_path(album_id)
        payload = self._read(path, "Album", album_id)
        if name is not None:
            payload[FIELD_NAME] = self._clean_name(name)
        if description is not None:
            payload[FIELD_DESCRIPTION] = description.strip()
        payload[FIELD_UPDATED_AT] = _timestamp()
        self._write(path, payload)
        return self._album_from_payload(payload, self._count_edits(album_id))

    def delete_album(self, album_id: str) -> str:
        """
        Delete an album. Edits filed under it are kept and detached.

        Raises:
            EditNotFoundError: If no album has that id
        """
        path = self._album_path(album_id)
        if not path.exists():
            raise EditNotFoundError(f"Album not found: {album_id}")

        for edit_path, payload in self._read_all(self.edits_dir, EDIT_EXTENSION):
            if payload.get(FIELD_ALBUM_ID) == album_id:
                payload[FIELD_ALBUM_ID] = None
                self._write(edit_path, payload)

        path.unlink()
        logger.debug(f"Deleted album {album_id}")
        return album_id

    def list_albums(self) -> List[AlbumRecord]:
        """List albums, newest first, with the number of edits in each."""
        counts: Dict[str, int] = {}
        for edit in self.list_edits():
            if edit.album_id:
                counts[edit.album_id] = counts.get(edit.album_id, 0) + 1

        albums = [
            self._album_from_payload(payload, counts.get(str(payload.get(FIELD_ID)), 0))
            for _, payload in self._read_all(self.albums_dir, ALBUM_EXTENSION)
        ]
        return sorted(albums, key=lambda a: a.created_at, reverse=True)
