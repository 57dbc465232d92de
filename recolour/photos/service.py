from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from urllib.parse import quote

from recolour.tickets.models import PhotoOption

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".webp")
THUMBNAIL_DIR = "thumbnails"


class UnsupportedFileTypeError(ValueError):
    """Raised when an upload does not carry an allowed image extension."""


class PhotoService:
    """Write and remove partner photo files under a per-ticket directory.

    Uploads land in ``<root>/<ticket id>/<file>`` with the thumbnail in
    ``<root>/<ticket id>/thumbnails/<file>``. Attaching the returned metadata
    to the ticket is left to the caller.
    """

    def __init__(self, uploads_root: Path | str, *, url_prefix: str = "/api/assets/uploads") -> None:
        self._uploads_root = Path(uploads_root)
        self._url_prefix = url_prefix.rstrip("/")
        self._next_id = 1
        self._lock = Lock()

    def upload(
        self,
        ticket_id: str,
        image_data: bytes,
        thumbnail_data: bytes,
        file_name: str,
    ) -> PhotoOption:
        extension = self._validate_file_name(file_name)

        photo_id = self._generate_id(ticket_id)
        safe_name = f"{photo_id}{extension}"

        ticket_dir = self._uploads_root / ticket_id
        thumb_dir = ticket_dir / THUMBNAIL_DIR
        thumb_dir.mkdir(parents=True, exist_ok=True)

        (ticket_dir / safe_name).write_bytes(image_data)
        (thumb_dir / safe_name).write_bytes(thumbnail_data)
        logger.info("Stored photo %s for ticket %s (%s)", photo_id, ticket_id, file_name)

        quoted_ticket = quote(ticket_id, safe="")
        quoted_name = quote(safe_name, safe="")
        return PhotoOption(
            id=photo_id,
            label=file_name,
            file_name=safe_name,
            image_url=f"{self._url_prefix}/{quoted_ticket}/{quoted_name}",
            thumbnail_url=f"{self._url_prefix}/{quoted_ticket}/{THUMBNAIL_DIR}/{quoted_name}",
        )

    def delete_files(self, ticket_id: str, file_name: str) -> None:
        """Remove the image and its thumbnail. Missing files are ignored."""

        ticket_dir = self._uploads_root / ticket_id
        for path in (ticket_dir / file_name, ticket_dir / THUMBNAIL_DIR / file_name):
            try:
                path.unlink()
            except FileNotFoundError:
                logger.debug("Photo file %s already removed", path)

    def _generate_id(self, ticket_id: str) -> str:
        with self._lock:
            photo_id = f"upload-{ticket_id}-{self._next_id}"
            self._next_id += 1
        return photo_id

    @staticmethod
    def _validate_file_name(file_name: str) -> str:
        extension = Path(file_name).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedFileTypeError(
                f"Unsupported file type: {extension}. Allowed: {', '.join(ALLOWED_EXTENSIONS)}"
            )
        return extension
