from __future__ import annotations
from typing import Tuple

import numpy as np
from sklearn.decomposition import LatentDirichletAllocation

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.base import FittedTopicModel, TopicModeler
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.utils import (
    check_topic_count,
    check_vocabulary,
    default_topic_names,
    normalize_rows,
)


class SklearnTopicModel(FittedTopicModel):
    def __init__(self, lda: LatentDirichletAllocation, vocabulary: Tuple[str, ...]):
        self.lda = lda
        self.vocabulary = tuple(vocabulary)
        self.topic_names = default_topic_names(lda.n_components)

    def topic_term_matrix(self) -> np.ndarray:
        return normalize_rows(np.asarray(self.lda.components_, dtype=float))

    def doc_topic_matrix(self, dfm: DocumentFeatureMatrix) -> np.ndarray:
        check_vocabulary(self.vocabulary, dfm)
        return normalize_rows(self.lda.transform(dfm.counts))

    def perplexity(self, dfm: DocumentFeatureMatrix) -> float:
        # transform() re-estimates doc-topic mixes; components_ stay fixed
        check_vocabulary(self.vocabulary, dfm)
        return float(self.lda.perplexity(dfm.counts))

    def log_likelihood(self, dfm: DocumentFeatureMatrix) -> float:
        check_vocabulary(self.vocabulary, dfm)
        return float(self.lda.score(dfm.counts))


class SklearnLDAModeler(TopicModeler):
    def __init__(self, cfg: TopicModelConfig | None = None):
        self.cfg = cfg or TopicModelConfig(backend="sklearn")

    def fit(self, dfm: DocumentFeatureMatrix, num_topics: int) -> SklearnTopicModel:
        check_topic_count(dfm, num_topics)
        lda = LatentDirichletAllocation(
            n_components=num_topics,
            learning_method=self.cfg.learning_method,
            max_iter=self.cfg.max_iter,
            doc_topic_prior=self.cfg.doc_topic_prior,
            topic_word_prior=self.cfg.topic_word_prior,
            random_state=self.cfg.random_state,
        )
        lda.fit(dfm.counts)
        return SklearnTopicModel(lda, dfm.vocabulary)
