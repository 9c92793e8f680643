from __future__ import annotations
import logging
from dataclasses import dataclass

import pandas as pd

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.seeding.config import SeededModelConfig
from billtopics.core.seeding.diagnostics import seed_coverage, seed_recall
from billtopics.core.seeding.dictionary import SeedDictionary
from billtopics.core.seeding.seeded_lda import SeededLDAModeler
from billtopics.core.topic_labeling.assignment import assign_topics
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.gensim_lda import GensimTopicModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeededTopicResult:
    model: GensimTopicModel
    corpus: Corpus  # input corpus + ['seeded_topic', 'seeded_topic_prob']
    top_terms: pd.DataFrame
    coverage: pd.DataFrame
    recall: pd.DataFrame


class SeededTopicService:
    """Fit a seeded model, attach its topics, report how well seeds took hold."""

    def __init__(
        self,
        cfg: SeededModelConfig | None = None,
        model_cfg: TopicModelConfig | None = None,
    ):
        self.cfg = cfg or SeededModelConfig()
        self.model_cfg = model_cfg or TopicModelConfig()

    def run(
        self,
        dfm: DocumentFeatureMatrix,
        corpus: Corpus,
        seeds: SeedDictionary,
        column: str = "seeded_topic",
    ) -> SeededTopicResult:
        coverage = seed_coverage(seeds, dfm)
        for row in coverage.itertuples():
            if row.n_matched_seeds == 0:
                logger.warning(f"No seed of topic '{row.topic}' occurs in the corpus")

        model = SeededLDAModeler(seeds, self.cfg, self.model_cfg).fit(dfm)
        labeled = assign_topics(model, dfm, corpus, column=column)
        recall = seed_recall(model, seeds, n=self.model_cfg.topn_words)
        logger.info(f"Mean seed recall in top terms: {recall['recall'].mean():.2f}")
        return SeededTopicResult(
            model=model,
            corpus=labeled,
            top_terms=model.top_terms(self.model_cfg.topn_words),
            coverage=coverage,
            recall=recall,
        )
