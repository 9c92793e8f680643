from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from billtopics.core.config import settings
from billtopics.core.file_handler.base import StorageBase

logger = logging.getLogger(__name__)


class LocalStorage(StorageBase):
    """Filesystem storage rooted at a base directory."""

    def __init__(self, root: Optional[str | Path] = None):
        self.root = Path(root or settings.DATA_DIR)

    def _path(self, key: str) -> Path:
        p = Path(key)
        return p if p.is_absolute() else self.root / p

    def read(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return path.read_bytes()
        except OSError as e:
            logger.exception(f"Read failed: path={path}: {e}")
            raise

    def write(self, key: str, data: bytes) -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.exception(f"Write failed: path={path}: {e}")
            raise
        return str(path)

    def exists(self, key: str) -> bool:
        return self._path(key).exists()
