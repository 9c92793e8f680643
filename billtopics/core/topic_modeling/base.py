from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Dict, Tuple

import numpy as np
import pandas as pd

from billtopics.core.features.dfm import DocumentFeatureMatrix


class FittedTopicModel(ABC):
    """
    Query surface shared by every fitted model, seeded or not.

    Subclasses set `vocabulary` (the training matrix's columns) and
    `topic_names` (one per topic, in topic-index order).
    """

    vocabulary: Tuple[str, ...]
    topic_names: Tuple[str, ...]

    @property
    def num_topics(self) -> int:
        return len(self.topic_names)

    @abstractmethod
    def topic_term_matrix(self) -> np.ndarray:
        """(num_topics, n_terms) array; each row is a distribution over terms."""
        ...

    @abstractmethod
    def doc_topic_matrix(self, dfm: DocumentFeatureMatrix) -> np.ndarray:
        """(n_docs, num_topics) array; each row is a distribution over topics."""
        ...

    @abstractmethod
    def perplexity(self, dfm: DocumentFeatureMatrix) -> float:
        """Perplexity of `dfm` with the topic-term distributions held fixed."""
        ...

    @abstractmethod
    def log_likelihood(self, dfm: DocumentFeatureMatrix) -> float: ...

    def top_terms(self, n: int = 10) -> pd.DataFrame:
        """Long table: topic, rank (1-based), term, weight."""
        beta = self.topic_term_matrix()
        rows = []
        for t, name in enumerate(self.topic_names):
            order = np.argsort(-beta[t], kind="stable")[:n]
            for rank, j in enumerate(order, start=1):
                rows.append(
                    {
                        "topic": name,
                        "rank": rank,
                        "term": self.vocabulary[j],
                        "weight": float(beta[t, j]),
                    }
                )
        return pd.DataFrame(rows, columns=["topic", "rank", "term", "weight"])

    def topic_summaries(self, n: int = 10) -> List[Dict]:
        """[{topic_id, keywords, label}, ...] with keywords joined by ', '."""
        terms = self.top_terms(n)
        out: List[Dict] = []
        for i, name in enumerate(self.topic_names):
            words = terms.loc[terms["topic"] == name, "term"].tolist()
            out.append({"topic_id": str(i), "keywords": ", ".join(words), "label": name})
        return out


class TopicModeler(ABC):
    @abstractmethod
    def fit(self, dfm: DocumentFeatureMatrix, num_topics: int) -> FittedTopicModel: ...
