"""
Topic-count heuristics, one scalar per candidate k.

The four curves follow the definitions popularised by the R ``ldatuning``
package:

- griffiths2004: log-likelihood of the corpus under the fitted model
  (gensim's variational bound, or sklearn's approximate score). Maximize.
- caojuan2009: mean cosine similarity between pairs of topic-term rows.
  Minimize.
- arun2010: symmetric KL divergence between the singular values of the
  topic-term matrix and the document-length weighted topic mass. Minimize.
- deveaud2014: pairwise divergence between topic-term rows, summed and
  divided by k(k-1). Maximize.
"""

from __future__ import annotations
import logging
from typing import Dict, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.base import TopicModeler
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import InvalidTopicCountError

logger = logging.getLogger(__name__)

METRIC_DIRECTIONS: Dict[str, str] = {
    "griffiths2004": "maximize",
    "caojuan2009": "minimize",
    "arun2010": "minimize",
    "deveaud2014": "maximize",
}

_TINY = np.finfo(float).tiny


def caojuan2009(beta: np.ndarray) -> float:
    unit = beta / np.linalg.norm(beta, axis=1, keepdims=True)
    sims = unit @ unit.T
    upper = np.triu_indices(beta.shape[0], k=1)
    return float(sims[upper].mean())


def arun2010(beta: np.ndarray, gamma: np.ndarray, doc_lengths: np.ndarray) -> float:
    cm1 = np.linalg.svd(beta, compute_uv=False)
    cm2 = doc_lengths @ gamma
    cm2 = cm2 / np.max(np.abs(doc_lengths))
    cm1 = cm1 + _TINY
    cm2 = cm2 + _TINY
    return float(np.sum(cm1 * np.log(cm1 / cm2)) + np.sum(cm2 * np.log(cm2 / cm1)))


def deveaud2014(beta: np.ndarray) -> float:
    m = beta + _TINY if np.any(beta == 0) else beta
    k = m.shape[0]
    total = 0.0
    for i in range(k):
        for j in range(i + 1, k):
            x, y = m[i], m[j]
            total += 0.5 * np.sum(x * np.log(x / y)) + 0.5 * np.sum(y * np.log(y / x))
    return float(total / (k * (k - 1)))


def _score_k(modeler: TopicModeler, dfm: DocumentFeatureMatrix, k: int) -> Dict:
    model = modeler.fit(dfm, k)
    beta = model.topic_term_matrix()
    gamma = model.doc_topic_matrix(dfm)
    row = {
        "k": k,
        "griffiths2004": model.log_likelihood(dfm),
        "caojuan2009": caojuan2009(beta),
        "arun2010": arun2010(beta, gamma, dfm.doc_lengths()),
        "deveaud2014": deveaud2014(beta),
    }
    logger.info(f"Heuristics for k={k}: " + ", ".join(
        f"{name}={row[name]:.4f}" for name in METRIC_DIRECTIONS
    ))
    return row


class TopicCountHeuristics:
    """Fit one full-corpus model per k and score it on the four curves."""

    def __init__(self, modeler: TopicModeler, n_jobs: int = 1):
        self.modeler = modeler
        self.n_jobs = n_jobs

    def run(self, dfm: DocumentFeatureMatrix, candidate_ks: Sequence[int]) -> pd.DataFrame:
        ks = [int(k) for k in candidate_ks]
        for k in ks:
            if k < 2:
                raise InvalidTopicCountError(
                    "HEURISTIC_TOPIC_COUNT", msg.HEURISTIC_TOPIC_COUNT.format(k=k)
                )
        rows = Parallel(n_jobs=self.n_jobs)(
            delayed(_score_k)(self.modeler, dfm, k) for k in ks
        )
        return (
            pd.DataFrame(rows, columns=["k", *METRIC_DIRECTIONS])
            .sort_values("k")
            .reset_index(drop=True)
        )


def normalize_metrics(table: pd.DataFrame) -> pd.DataFrame:
    """Min-max scale each metric to [0, 1] for plotting on one axis."""
    out = table.copy()
    for name in METRIC_DIRECTIONS:
        if name not in out.columns:
            continue
        col = out[name].astype(float)
        span = col.max() - col.min()
        out[name] = (col - col.min()) / span if span else 0.0
    return out
