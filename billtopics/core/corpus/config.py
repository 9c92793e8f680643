from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class CorpusConfig:
    text_column: str = "text"
    id_column: str = "doc_id"  # synthesised from row position when absent
    snapshot_format: Optional[Literal["csv", "parquet", "pickle"]] = None  # None = infer
