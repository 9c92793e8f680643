from __future__ import annotations
import logging

import numpy as np
import pandas as pd

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.base import FittedTopicModel
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import AlignmentError

logger = logging.getLogger(__name__)


def dominant_topics(doc_topic: np.ndarray) -> np.ndarray:
    """Index of the most probable topic per row; ties go to the lowest index."""
    return np.argmax(np.asarray(doc_topic), axis=1)


def check_alignment(corpus: Corpus, dfm: DocumentFeatureMatrix) -> None:
    if len(corpus) != dfm.n_docs:
        raise AlignmentError(
            "LABEL_COUNT_MISMATCH",
            msg.LABEL_COUNT_MISMATCH.format(labels=dfm.n_docs, docs=len(corpus)),
        )
    if tuple(corpus.doc_ids) != dfm.doc_ids:
        raise AlignmentError("DOC_ORDER_MISMATCH", msg.DOC_ORDER_MISMATCH)


def assign_topics(
    model: FittedTopicModel,
    dfm: DocumentFeatureMatrix,
    corpus: Corpus,
    column: str = "topic",
) -> Corpus:
    """
    Attach each document's most likely topic (by name) and its probability.
    Row `i` of the matrix labels document `i` of the corpus.
    """
    check_alignment(corpus, dfm)
    theta = model.doc_topic_matrix(dfm)
    idx = dominant_topics(theta)
    names = [model.topic_names[i] for i in idx]
    probs = theta[np.arange(len(idx)), idx]

    labeled = corpus.with_labels(names, column).with_labels(
        probs.tolist(), f"{column}_prob"
    )
    logger.info(
        f"Assigned topics to {len(labeled)} documents "
        f"({len(set(names))} of {model.num_topics} topics used)"
    )
    return labeled


def topic_crosstab(corpus: Corpus, topic_column: str, by: str) -> pd.DataFrame:
    """Document counts per topic (rows) and covariate value (columns)."""
    return pd.crosstab(corpus.metadata(topic_column), corpus.metadata(by))
