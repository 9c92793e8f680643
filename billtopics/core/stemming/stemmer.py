from __future__ import annotations
from typing import List

import nltk
from nltk import pos_tag
from nltk.stem import SnowballStemmer, WordNetLemmatizer

from billtopics.core.stemming.base import Stemmer
from billtopics.core.stemming.config import StemmingConfig


def _to_wn_pos(tag: str):
    # Penn tag -> WordNet POS
    if tag.startswith("J"):
        return "a"
    if tag.startswith("V"):
        return "v"
    if tag.startswith("R"):
        return "r"
    return "n"


def _ensure_nltk(resource: str, package: str) -> None:
    try:
        nltk.data.find(resource)
    except LookupError:
        nltk.download(package, quiet=True)


class SnowballTokenStemmer(Stemmer):
    def __init__(self, config: StemmingConfig | None = None):
        self.cfg = config or StemmingConfig()
        self._stemmer = SnowballStemmer(self.cfg.language)

    def stem(self, tokens: List[str]) -> List[str]:
        return [self._stemmer.stem(t) for t in tokens]


class WordNetTokenLemmatizer(Stemmer):
    def __init__(self, config: StemmingConfig | None = None):
        self.cfg = config or StemmingConfig(method="wordnet")
        _ensure_nltk("corpora/wordnet", "wordnet")
        if self.cfg.use_pos_tagging:
            _ensure_nltk(
                "taggers/averaged_perceptron_tagger_eng",
                "averaged_perceptron_tagger_eng",
            )
        self._wn = WordNetLemmatizer()

    def stem(self, tokens: List[str]) -> List[str]:
        if not self.cfg.use_pos_tagging:
            return [self._wn.lemmatize(t) for t in tokens]
        return [self._wn.lemmatize(tok, _to_wn_pos(tag)) for tok, tag in pos_tag(tokens)]


class IdentityStemmer(Stemmer):
    def stem(self, tokens: List[str]) -> List[str]:
        return list(tokens)


def build_stemmer(config: StemmingConfig | None = None) -> Stemmer:
    cfg = config or StemmingConfig()
    if cfg.method == "wordnet":
        return WordNetTokenLemmatizer(cfg)
    if cfg.method == "none":
        return IdentityStemmer()
    return SnowballTokenStemmer(cfg)
