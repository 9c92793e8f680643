from __future__ import annotations
import logging
from typing import Tuple

import numpy as np

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.seeding.config import SeededModelConfig
from billtopics.core.seeding.dictionary import SeedDictionary
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.gensim_lda import GensimLDAModeler, GensimTopicModel
from billtopics.core.topic_modeling.utils import check_topic_count
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import InvalidSeedDictionaryError, InvalidTopicCountError

logger = logging.getLogger(__name__)


class SeededLDAModeler:
    """
    Adapter: gensim LDA whose topic-term prior is raised on each seeded
    topic's seed columns, so that topic is anchored to its seeds.

    Topics come out in dictionary order, followed by the residual topics.
    """

    def __init__(
        self,
        seeds: SeedDictionary,
        cfg: SeededModelConfig | None = None,
        model_cfg: TopicModelConfig | None = None,
    ):
        self.seeds = seeds
        self.cfg = cfg or SeededModelConfig()
        self._gensim = GensimLDAModeler(model_cfg or TopicModelConfig())

    @property
    def topic_names(self) -> Tuple[str, ...]:
        residual = tuple(
            f"{self.cfg.residual_prefix}_{i}" for i in range(1, self.cfg.residual_topics + 1)
        )
        return tuple(self.seeds.names) + residual

    def build_eta(self, dfm: DocumentFeatureMatrix) -> np.ndarray:
        k = len(self.topic_names)
        base = self.cfg.base_eta if self.cfg.base_eta is not None else 1.0 / k
        eta = np.full((k, dfm.n_terms), base, dtype=float)
        for t, (name, cols) in enumerate(self.seeds.matches(dfm.vocabulary).items()):
            if not cols:
                logger.warning(f"Seed topic '{name}' matches no vocabulary term")
                continue
            eta[t, cols] += self.cfg.seed_weight
        return eta

    def fit(self, dfm: DocumentFeatureMatrix) -> GensimTopicModel:
        names = self.topic_names
        try:
            check_topic_count(dfm, len(names))
        except InvalidTopicCountError as e:
            if e.code == "TOPIC_COUNT_EXCEEDS_TERMS":
                raise InvalidSeedDictionaryError(
                    "SEED_TOPICS_EXCEED_TERMS",
                    msg.SEED_TOPICS_EXCEED_TERMS.format(
                        k=len(names), terms=len(dfm.usable_terms())
                    ),
                ) from e
            if e.code == "TOPIC_COUNT_EXCEEDS_DOCS":
                raise InvalidSeedDictionaryError(
                    "SEED_TOPICS_EXCEED_DOCS",
                    msg.SEED_TOPICS_EXCEED_DOCS.format(k=len(names), docs=dfm.n_docs),
                ) from e
            raise
        eta = self.build_eta(dfm)
        logger.info(
            f"Fitting seeded LDA: {len(self.seeds)} seeded + "
            f"{self.cfg.residual_topics} residual topics"
        )
        lda = self._gensim.fit_lda(dfm, len(names), eta=eta)
        return GensimTopicModel(lda, dfm.vocabulary, topic_names=names)
