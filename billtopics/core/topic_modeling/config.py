from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True)
class TopicModelConfig:
    backend: Literal["gensim", "sklearn"] = "gensim"
    random_state: int = 42
    topn_words: int = 10  # words per topic (summary)
    # gensim only
    passes: int = 10
    iterations: int = 100
    alpha: Union[str, float] = "symmetric"
    eta: Optional[Union[str, float]] = None
    chunksize: int = 2000
    # sklearn only
    learning_method: Literal["batch", "online"] = "batch"
    max_iter: int = 50
    doc_topic_prior: Optional[float] = None
    topic_word_prior: Optional[float] = None
