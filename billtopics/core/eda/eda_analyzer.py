from __future__ import annotations
import logging
from typing import Dict, Any

import pandas as pd

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.eda.base import EDAAnalyzer
from billtopics.core.eda.config import EDAConfig
from billtopics.core.features.dfm import DocumentFeatureMatrix

logger = logging.getLogger(__name__)


class DfmEDAAnalyzer(EDAAnalyzer):
    """Adapter: frequency and length summaries straight from the matrix."""

    def __init__(self, config: EDAConfig | None = None):
        self.cfg = config or EDAConfig()

    def analyze(self, dfm: DocumentFeatureMatrix, corpus: Corpus) -> Dict[str, Any]:
        top = dfm.top_features(self.cfg.top_features)
        top_features = [{"term": t, "count": int(c)} for t, c in top.items()]

        lengths = pd.Series(dfm.doc_lengths().astype(int))
        length_distribution = [
            {"length": int(length), "count": int(count)}
            for length, count in lengths.value_counts().sort_index().items()
        ]

        covariates: Dict[str, Any] = {}
        for column in self.cfg.covariates:
            if column not in corpus.frame.columns:
                logger.warning(f"Covariate '{column}' not in corpus; skipped")
                continue
            counts = corpus.metadata(column).value_counts(dropna=False)
            covariates[column] = [
                {"value": str(v), "count": int(c)} for v, c in counts.items()
            ]

        return {
            "n_documents": dfm.n_docs,
            "n_terms": dfm.n_terms,
            "top_features": top_features,
            "length_distribution": length_distribution,
            "covariates": covariates,
        }
