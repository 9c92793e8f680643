from __future__ import annotations
from typing import Any, Optional, Tuple

import numpy as np
from gensim import models

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.base import FittedTopicModel, TopicModeler
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.utils import (
    check_topic_count,
    check_vocabulary,
    default_topic_names,
    normalize_rows,
)


class GensimTopicModel(FittedTopicModel):
    def __init__(
        self,
        lda: models.LdaModel,
        vocabulary: Tuple[str, ...],
        topic_names: Optional[Tuple[str, ...]] = None,
    ):
        self.lda = lda
        self.vocabulary = tuple(vocabulary)
        self.topic_names = topic_names or default_topic_names(lda.num_topics)

    def _bow(self, dfm: DocumentFeatureMatrix):
        check_vocabulary(self.vocabulary, dfm)
        bow, _ = dfm.to_gensim()
        return bow

    def topic_term_matrix(self) -> np.ndarray:
        return self.lda.get_topics()

    def doc_topic_matrix(self, dfm: DocumentFeatureMatrix) -> np.ndarray:
        out = np.zeros((dfm.n_docs, self.num_topics))
        for i, bow in enumerate(self._bow(dfm)):
            for topic_id, prob in self.lda.get_document_topics(
                bow, minimum_probability=0.0
            ):
                out[i, topic_id] = prob
        return normalize_rows(out)

    def perplexity(self, dfm: DocumentFeatureMatrix) -> float:
        # gensim reports perplexity as 2 ** -bound in its own logs
        per_word_bound = self.lda.log_perplexity(self._bow(dfm))
        return float(np.exp2(-per_word_bound))

    def log_likelihood(self, dfm: DocumentFeatureMatrix) -> float:
        return float(self.lda.bound(self._bow(dfm)))


class GensimLDAModeler(TopicModeler):
    def __init__(self, cfg: TopicModelConfig | None = None):
        self.cfg = cfg or TopicModelConfig()

    def fit_lda(
        self,
        dfm: DocumentFeatureMatrix,
        num_topics: int,
        eta: Any = None,
    ) -> models.LdaModel:
        bow, dictionary = dfm.to_gensim()
        return models.LdaModel(
            corpus=bow,
            id2word=dictionary,
            num_topics=num_topics,
            passes=self.cfg.passes,
            iterations=self.cfg.iterations,
            chunksize=self.cfg.chunksize,
            alpha=self.cfg.alpha,
            eta=self.cfg.eta if eta is None else eta,
            random_state=self.cfg.random_state,
            eval_every=None,
        )

    def fit(self, dfm: DocumentFeatureMatrix, num_topics: int) -> GensimTopicModel:
        check_topic_count(dfm, num_topics)
        lda = self.fit_lda(dfm, num_topics)
        return GensimTopicModel(lda, dfm.vocabulary)
