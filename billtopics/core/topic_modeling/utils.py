from __future__ import annotations
from typing import Tuple

import numpy as np

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import AlignmentError, InvalidTopicCountError


def check_topic_count(dfm: DocumentFeatureMatrix, k: int) -> None:
    """Reject topic counts the training matrix cannot support."""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise InvalidTopicCountError(
            "INVALID_TOPIC_COUNT", msg.INVALID_TOPIC_COUNT.format(k=k)
        )
    usable = len(dfm.usable_terms())
    if k > usable:
        raise InvalidTopicCountError(
            "TOPIC_COUNT_EXCEEDS_TERMS",
            msg.TOPIC_COUNT_EXCEEDS_TERMS.format(k=k, terms=usable),
        )
    if k > dfm.n_docs:
        raise InvalidTopicCountError(
            "TOPIC_COUNT_EXCEEDS_DOCS",
            msg.TOPIC_COUNT_EXCEEDS_DOCS.format(k=k, docs=dfm.n_docs),
        )


def check_vocabulary(trained: Tuple[str, ...], dfm: DocumentFeatureMatrix) -> None:
    if tuple(trained) != dfm.vocabulary:
        raise AlignmentError(
            "VOCABULARY_MISMATCH",
            f"Matrix has {dfm.n_terms} terms; the model was trained on "
            f"{len(trained)} different terms.",
        )


def default_topic_names(k: int) -> Tuple[str, ...]:
    return tuple(f"topic_{i}" for i in range(k))


def normalize_rows(m: np.ndarray) -> np.ndarray:
    sums = m.sum(axis=1, keepdims=True)
    sums[sums == 0] = 1.0
    return m / sums
