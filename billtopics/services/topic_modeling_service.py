from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_labeling.assignment import assign_topics
from billtopics.core.topic_labeling.base import TopicLabeler
from billtopics.core.topic_labeling.config import TopicLabelConfig
from billtopics.core.topic_labeling.labelers import DefaultHeuristicLabeler
from billtopics.core.topic_modeling.base import FittedTopicModel, TopicModeler
from billtopics.core.topic_modeling.config import TopicModelConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopicModelResult:
    model: FittedTopicModel
    corpus: Corpus  # input corpus + ['topic', 'topic_prob', 'topic_label']
    topics: list[dict]  # [{topic_id, keywords, label, matched_with}, ...]
    top_terms: pd.DataFrame
    num_topics: int


class TopicModelingService:
    """
    - Fits the configured backend at a chosen k
    - Attaches the dominant topic (and its probability) to every document
    - Labels topics from their top terms, or from an explicit map
    """

    def __init__(
        self,
        modeler: TopicModeler,
        labeler: TopicLabeler | None = None,
        cfg: TopicModelConfig | None = None,
    ):
        self.modeler = modeler
        self.labeler = labeler or DefaultHeuristicLabeler(TopicLabelConfig())
        self.cfg = cfg or getattr(modeler, "cfg", TopicModelConfig())

    def run(
        self,
        dfm: DocumentFeatureMatrix,
        corpus: Corpus,
        num_topics: int,
        *,
        explicit_labels: Optional[Dict[int, str]] = None,
        column: str = "topic",
    ) -> TopicModelResult:
        model = self.modeler.fit(dfm, num_topics)
        return self.describe(model, dfm, corpus, explicit_labels=explicit_labels, column=column)

    def describe(
        self,
        model: FittedTopicModel,
        dfm: DocumentFeatureMatrix,
        corpus: Corpus,
        *,
        explicit_labels: Optional[Dict[int, str]] = None,
        column: str = "topic",
    ) -> TopicModelResult:
        labeled = assign_topics(model, dfm, corpus, column=column)
        label_map, topics = self.labeler.label(
            model.topic_summaries(self.cfg.topn_words), explicit_map=explicit_labels
        )
        name_to_label = {model.topic_names[i]: lbl for i, lbl in label_map.items()}
        labeled = labeled.with_labels(
            labeled.metadata(column).map(name_to_label).tolist(), f"{column}_label"
        )
        for t in topics:
            logger.info(f"{model.topic_names[int(t['topic_id'])]}: {t['keywords']}")
        return TopicModelResult(
            model=model,
            corpus=labeled,
            topics=topics,
            top_terms=model.top_terms(self.cfg.topn_words),
            num_topics=model.num_topics,
        )
