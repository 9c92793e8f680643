from __future__ import annotations
from typing import List, Tuple, Set

import nltk
from nltk.corpus import stopwords as nltk_stopwords
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from billtopics.core.stopword_removal.base import StopwordRemover
from billtopics.core.stopword_removal.config import (
    LEGISLATIVE_STOPWORDS,
    StopwordConfig,
)


def _nltk_stopwords(language: str) -> Set[str]:
    try:
        return set(nltk_stopwords.words(language))
    except LookupError:
        nltk.download("stopwords", quiet=True)
        return set(nltk_stopwords.words(language))


class BillStopwordRemover(StopwordRemover):
    def __init__(self, config: StopwordConfig | None = None):
        self.cfg = config or StopwordConfig()
        self._stopset = self._build_stopset()

    def _build_stopset(self) -> Set[str]:
        if self.cfg.source == "sklearn":
            base: Set[str] = set(ENGLISH_STOP_WORDS)
        else:
            base = _nltk_stopwords(self.cfg.language)

        if self.cfg.include_legislative:
            base |= LEGISLATIVE_STOPWORDS
        base |= set(self.cfg.custom_stopwords)
        base -= set(self.cfg.exclude_stopwords)

        if self.cfg.lowercase:
            base = {w.lower() for w in base}
        return base

    @property
    def stopwords(self) -> Set[str]:
        return set(self._stopset)

    def remove(self, tokens: List[str]) -> Tuple[List[str], List[str]]:
        cleaned: List[str] = []
        removed: List[str] = []
        for t in tokens:
            norm = t.lower() if self.cfg.lowercase else t
            if norm in self._stopset:
                removed.append(t)
                continue
            cleaned.append(t)
        return cleaned, removed
