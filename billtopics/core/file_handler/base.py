from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Protocol
import pandas as pd


class StorageBase(ABC):
    """Abstract storage interface for corpus snapshots and outputs."""

    @abstractmethod
    def read(self, key: str) -> bytes: ...

    @abstractmethod
    def write(self, key: str, data: bytes) -> str:
        """Write raw bytes and return the resolved location."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool: ...


class CompressionBase(ABC):
    """Abstract compression interface (gzip, none)."""

    @abstractmethod
    def compress(self, raw_bytes: bytes) -> bytes: ...

    @abstractmethod
    def decompress(self, raw_bytes: bytes) -> bytes: ...


class DataFrameCodecBase(Protocol):
    """Encode/decode DataFrames (CSV, Parquet, pickle)."""

    def to_bytes(self, df: pd.DataFrame) -> bytes: ...
    def from_bytes(self, b: bytes) -> pd.DataFrame: ...
