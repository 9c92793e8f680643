from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Any

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.features.dfm import DocumentFeatureMatrix


class EDAAnalyzer(ABC):
    """Port: produce exploratory summaries of a corpus and its matrix."""

    @abstractmethod
    def analyze(self, dfm: DocumentFeatureMatrix, corpus: Corpus) -> Dict[str, Any]: ...
