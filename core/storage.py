"""Local-disk storage for uploaded files.

Files are written under ``UPLOAD_DIR`` with a uuid prefix so two uploads
with the same name never collide.  The blocking helpers are wrapped by
``*_async`` variants that run on a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

UPLOAD_DIR = os.environ.get("UPLOAD_DIR", "/tmp/docassist_uploads")


class LocalFileStorage:
    """Save, delete and check files in one upload directory."""

    def __init__(self, upload_dir: Optional[str] = None):
        self.upload_dir = Path(upload_dir or UPLOAD_DIR)

    def _ensure_dir(self) -> None:
        if not self.upload_dir.exists():
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created upload directory: %s", self.upload_dir)

    def save_file(self, content: bytes, file_name: str) -> str:
        """Write *content* and return the stored file's path."""
        self._ensure_dir()
        safe_name = Path(file_name).name or "upload"
        path = self.upload_dir / f"{uuid.uuid4()}_{safe_name}"
        logger.info("Saving file: %s to %s", file_name, path)
        path.write_bytes(content)
        return str(path)

    def delete_file(self, file_path: str) -> bool:
        """Delete a stored file; False when it was already gone or undeletable."""
        path = Path(file_path)
        try:
            if path.exists():
                path.unlink()
                logger.info("Deleted file: %s", file_path)
                return True
            return False
        except OSError as e:
            logger.error("Failed to delete file %s: %s", file_path, e)
            return False

    def file_exists(self, file_path: str) -> bool:
        return Path(file_path).is_file()

    def is_writable(self) -> bool:
        """Check the upload directory with a throwaway file."""
        try:
            self._ensure_dir()
            check_file = self.upload_dir / f"health_check_{uuid.uuid4()}.tmp"
            check_file.write_text("health check test")
            check_file.unlink()
            return True
        except OSError as e:
            logger.error("Storage health check failed: %s", e)
            return False

    # ------------------------------------------------------------------
    # Async wrappers
    # ------------------------------------------------------------------

    async def save_file_async(self, content: bytes, file_name: str) -> str:
        return await asyncio.to_thread(self.save_file, content, file_name)

    async def delete_file_async(self, file_path: str) -> bool:
        return await asyncio.to_thread(self.delete_file, file_path)

    async def file_exists_async(self, file_path: str) -> bool:
        return await asyncio.to_thread(self.file_exists, file_path)


_default_storage: Optional[LocalFileStorage] = None


def get_storage() -> LocalFileStorage:
    """Process-wide storage rooted at ``UPLOAD_DIR``."""
    global _default_storage
    if _default_storage is None:
        _default_storage = LocalFileStorage()
    return _default_storage
