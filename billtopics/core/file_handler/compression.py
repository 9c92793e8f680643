from __future__ import annotations
import gzip

from billtopics.core.file_handler.base import CompressionBase


class GzipCompression(CompressionBase):
    """gzip with a zeroed header timestamp, so equal snapshots give equal bytes."""

    def __init__(self, level: int = 6):
        self.level = level

    def compress(self, raw_bytes: bytes) -> bytes:
        return gzip.compress(raw_bytes, compresslevel=self.level, mtime=0)

    def decompress(self, raw_bytes: bytes) -> bytes:
        return gzip.decompress(raw_bytes)


class NoCompression(CompressionBase):
    def compress(self, raw_bytes: bytes) -> bytes:
        return raw_bytes

    def decompress(self, raw_bytes: bytes) -> bytes:
        return raw_bytes
