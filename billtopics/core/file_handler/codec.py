from __future__ import annotations
from io import BytesIO
from typing import Sequence

import pandas as pd

from billtopics.core.file_handler.base import DataFrameCodecBase


class CsvCodec(DataFrameCodecBase):
    """
    CSV without the index. `string_columns` are read back as text so bill
    numbers like "0042" keep their leading zeros.
    """

    def __init__(self, string_columns: Sequence[str] = ()):
        self.string_columns = tuple(string_columns)

    def to_bytes(self, df: pd.DataFrame) -> bytes:
        return df.to_csv(index=False).encode("utf-8")

    def from_bytes(self, b: bytes) -> pd.DataFrame:
        header = pd.read_csv(BytesIO(b), nrows=0).columns
        dtype = {c: str for c in self.string_columns if c in header}
        return pd.read_csv(BytesIO(b), dtype=dtype or None)


class ParquetCodec(DataFrameCodecBase):
    def to_bytes(self, df: pd.DataFrame) -> bytes:
        buf = BytesIO()
        df.to_parquet(buf, index=False, engine="pyarrow")
        return buf.getvalue()

    def from_bytes(self, b: bytes) -> pd.DataFrame:
        return pd.read_parquet(BytesIO(b), engine="pyarrow")


class PickleCodec(DataFrameCodecBase):
    """Pickled DataFrame snapshots; only load files you produced yourself."""

    def to_bytes(self, df: pd.DataFrame) -> bytes:
        buf = BytesIO()
        df.to_pickle(buf, compression=None)
        return buf.getvalue()

    def from_bytes(self, b: bytes) -> pd.DataFrame:
        return pd.read_pickle(BytesIO(b), compression=None)
