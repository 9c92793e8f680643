from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class SeededModelConfig:
    seed_weight: float = 5.0  # prior pseudo-counts added to each seed term
    base_eta: Optional[float] = None  # None = gensim's symmetric 1/num_topics
    residual_topics: int = 0  # extra unseeded topics, named other_1, other_2, ...
    residual_prefix: str = "other"


@dataclass(frozen=True)
class LexiconSeedConfig:
    n_terms: int = 10  # seeds kept per category
    # "curated": the category's terms most frequent in the matrix;
    # "head": the first n terms of the alphabetically sorted list
    selection: Literal["curated", "head"] = "curated"
