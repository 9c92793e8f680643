from __future__ import annotations
import logging
from typing import List, Sequence

import numpy as np
from gensim.models import Phrases
from gensim.models.phrases import Phraser
from sklearn.feature_extraction.text import CountVectorizer

from billtopics.core.features.config import DfmConfig
from billtopics.core.features.dfm import DocumentFeatureMatrix

logger = logging.getLogger(__name__)


def _identity(doc: List[str]) -> List[str]:
    return doc


class DfmBuilder:
    """Adapter: token lists -> collocations -> counts -> trimmed matrix."""

    def __init__(self, config: DfmConfig | None = None):
        self.cfg = config or DfmConfig()

    def _join_collocations(self, docs: List[List[str]]) -> List[List[str]]:
        phrases = Phrases(
            docs,
            min_count=self.cfg.collocation_min_count,
            threshold=self.cfg.collocation_threshold,
            delimiter=self.cfg.collocation_delimiter,
        )
        phraser = Phraser(phrases)
        joined = [phraser[doc] for doc in docs]
        n_phrases = len(phraser.phrasegrams)
        logger.info(f"Detected {n_phrases} collocations")
        return joined

    def build(
        self, docs: List[List[str]], doc_ids: Sequence[str]
    ) -> DocumentFeatureMatrix:
        if len(docs) != len(doc_ids):
            raise ValueError(
                f"Got {len(docs)} token lists for {len(doc_ids)} document ids."
            )
        if self.cfg.detect_collocations:
            docs = self._join_collocations(docs)

        vect = CountVectorizer(analyzer=_identity)
        X = vect.fit_transform(docs).tocsr()
        vocab = vect.get_feature_names_out()

        tf = np.asarray(X.sum(axis=0)).ravel()
        df = np.asarray((X > 0).sum(axis=0)).ravel()
        keep = (tf >= self.cfg.min_termfreq) & (df >= self.cfg.min_docfreq)
        if self.cfg.max_docprop is not None:
            keep &= df <= self.cfg.max_docprop * X.shape[0]

        cols = np.flatnonzero(keep)
        dfm = DocumentFeatureMatrix(
            counts=X[:, cols],
            vocabulary=tuple(str(vocab[j]) for j in cols),
            doc_ids=tuple(doc_ids),
        )
        logger.info(
            f"Built document-feature matrix: {dfm.n_docs} documents x "
            f"{dfm.n_terms} terms ({len(vocab) - dfm.n_terms} trimmed)"
        )
        return dfm
