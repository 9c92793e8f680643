from __future__ import annotations
import logging
from typing import Optional, Tuple

from billtopics.core.corpus.config import CorpusConfig
from billtopics.core.corpus.corpus import Corpus
from billtopics.core.file_handler.base import (
    CompressionBase,
    DataFrameCodecBase,
    StorageBase,
)
from billtopics.core.file_handler.codec import CsvCodec, ParquetCodec, PickleCodec
from billtopics.core.file_handler.compression import GzipCompression, NoCompression
from billtopics.core.file_handler.storage import LocalStorage
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import CorpusError

logger = logging.getLogger(__name__)

_FORMATS = ("csv", "parquet", "pickle")


def _resolve_format(
    key: str, fmt: Optional[str], id_column: str
) -> Tuple[DataFrameCodecBase, CompressionBase]:
    name = key.lower()
    gz = name.endswith(".gz")
    if gz:
        name = name[: -len(".gz")]

    if fmt is None:
        if name.endswith(".csv"):
            fmt = "csv"
        elif name.endswith(".parquet"):
            fmt = "parquet"
        elif name.endswith((".pkl", ".pickle")):
            fmt = "pickle"
    if fmt not in _FORMATS:
        raise CorpusError("UNSUPPORTED_SNAPSHOT", msg.UNSUPPORTED_SNAPSHOT.format(path=key))

    if fmt == "csv":
        codec: DataFrameCodecBase = CsvCodec(string_columns=[id_column])
    elif fmt == "parquet":
        codec = ParquetCodec()
    else:
        codec = PickleCodec()
    return codec, (GzipCompression() if gz else NoCompression())


class CorpusStore:
    """
    Reads corpus snapshots with their metadata and writes labeled copies back.

    The codec is picked from the file suffix (`.csv`, `.parquet`, `.pkl`,
    optionally followed by `.gz`) unless the config pins one.
    """

    def __init__(
        self,
        storage: StorageBase | None = None,
        config: CorpusConfig | None = None,
    ):
        self.storage = storage or LocalStorage()
        self.cfg = config or CorpusConfig()

    def load(self, key: str) -> Corpus:
        codec, compression = _resolve_format(key, self.cfg.snapshot_format, self.cfg.id_column)
        df = codec.from_bytes(compression.decompress(self.storage.read(key)))
        corpus = Corpus(df, text_column=self.cfg.text_column, id_column=self.cfg.id_column)
        logger.info(f"Loaded {len(corpus)} documents from {key}")
        return corpus

    def save(self, corpus: Corpus, key: str) -> str:
        codec, compression = _resolve_format(key, self.cfg.snapshot_format, self.cfg.id_column)
        location = self.storage.write(key, compression.compress(codec.to_bytes(corpus.frame)))
        logger.info(f"Saved {len(corpus)} documents to {location}")
        return location

    def write_labels(self, corpus: Corpus, labels, column: str, key: str) -> Corpus:
        """Attach one label per document and persist the labeled snapshot."""
        labeled = corpus.with_labels(labels, column)
        self.save(labeled, key)
        return labeled
