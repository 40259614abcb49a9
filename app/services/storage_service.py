"""Storage service for uploaded rate-sheet files."""

import asyncio
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

from app.core.exceptions import AppError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

BLOB_SCHEME = "local://"

_UNSAFE_CHARS = re.compile(r"[^\w.\-]+")


def safe_filename(filename: str) -> str:
    """Reduce a client-supplied name to a single safe path segment."""
    name = Path(filename or "").name
    return _UNSAFE_CHARS.sub("_", name) or "upload"


class StorageService:
    """Service for storing uploads under a local directory.

    Files are written as ``<tenant>/<timestamp>_<filename>`` below
    ``upload_dir`` and addressed as ``local://<tenant>/<timestamp>_<filename>``.
    """

    def __init__(self, upload_dir: str):
        self.root = Path(upload_dir)

    async def upload_file(self, content: bytes, filename: str, tenant_id: str) -> Dict[str, str]:
        """Store uploaded bytes.

        Args:
            content: File content
            filename: Original file name
            tenant_id: Owning tenant, used as the top-level folder

        Returns:
            Dict with the ``blob_url`` and the ``storage_path`` on disk

        Raises:
            AppError: If the file cannot be written
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
        relative = f"{safe_filename(tenant_id)}/{timestamp}_{safe_filename(filename)}"
        path = self.root / relative

        try:
            await asyncio.to_thread(self._write, path, content)
        except OSError as e:
            LOGGER.error(f"Error storing upload: {str(e)}", exc_info=True, extra={"path": str(path)})
            raise AppError(f"Storage upload error: {str(e)}", original_error=e) from e

        LOGGER.info("Stored upload", extra={"path": str(path), "size_bytes": len(content)})
        return {"blob_url": f"{BLOB_SCHEME}{relative}", "storage_path": str(path)}

    def resolve(self, blob_url: str) -> Path:
        """Map a ``local://`` URL back to its file path."""
        if not blob_url.startswith(BLOB_SCHEME):
            raise AppError(f"Not a local storage URL: {blob_url}")
        return self.root / blob_url[len(BLOB_SCHEME):]

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
