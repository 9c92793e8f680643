from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DfmConfig:
    min_termfreq: int = 5  # total occurrences across the corpus
    min_docfreq: int = 2  # number of documents containing the term
    max_docprop: Optional[float] = None  # drop terms in more than this share of docs
    # collocations (gensim Phrases)
    detect_collocations: bool = True
    collocation_min_count: int = 5
    collocation_threshold: float = 10.0
    collocation_delimiter: str = "_"
