from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.normalization.base import TextNormalizer
from billtopics.core.normalization.config import NormalizationConfig
from billtopics.core.normalization.normalizer import BillTextNormalizer
from billtopics.core.stemming.base import Stemmer
from billtopics.core.stemming.config import StemmingConfig
from billtopics.core.stemming.stemmer import build_stemmer
from billtopics.core.stopword_removal.base import StopwordRemover
from billtopics.core.stopword_removal.config import StopwordConfig
from billtopics.core.stopword_removal.removal import BillStopwordRemover
from billtopics.core.tokenization.base import Tokenizer
from billtopics.core.tokenization.config import TokenizationConfig
from billtopics.core.tokenization.tokenizer import BillTokenizer

logger = logging.getLogger(__name__)


class Preprocessor:
    """
    Normalize -> tokenize -> drop stopwords -> stem.

    Returns one token list per document, in corpus order; documents that end
    up empty stay in place as empty lists.
    """

    def __init__(
        self,
        normalizer: TextNormalizer | None = None,
        tokenizer: Tokenizer | None = None,
        stopwords: StopwordRemover | None = None,
        stemmer: Stemmer | None = None,
    ):
        self.normalizer = normalizer or BillTextNormalizer()
        self.tokenizer = tokenizer or BillTokenizer()
        self.stopwords = stopwords or BillStopwordRemover()
        self.stemmer = stemmer or build_stemmer()

    def process(self, text: str) -> List[str]:
        normalized = self.normalizer.normalize(text)
        tokens = self.tokenizer.tokenize(normalized)
        tokens, _ = self.stopwords.remove(tokens)
        return self.stemmer.stem(tokens)

    def process_corpus(self, corpus: Corpus) -> List[List[str]]:
        docs = [self.process(t) for t in corpus.texts]
        empty = sum(1 for d in docs if not d)
        if empty:
            logger.warning(f"{empty} documents have no tokens after preprocessing")
        logger.info(
            f"Preprocessed {len(docs)} documents "
            f"({sum(len(d) for d in docs)} tokens)"
        )
        return docs


def build_preprocessor(options: Optional[Dict[str, Any]] = None) -> Preprocessor:
    """Build a preprocessor from the nested option dicts of a pipeline step."""
    options = options or {}
    stop_opts = dict(options.get("stopwords", {}))
    for key in ("custom_stopwords", "exclude_stopwords"):
        if key in stop_opts:
            stop_opts[key] = frozenset(stop_opts[key])
    norm_opts = dict(options.get("normalization", {}))
    if "boilerplate_patterns" in norm_opts:
        norm_opts["boilerplate_patterns"] = tuple(norm_opts["boilerplate_patterns"])

    return Preprocessor(
        normalizer=BillTextNormalizer(NormalizationConfig(**norm_opts)),
        tokenizer=BillTokenizer(TokenizationConfig(**options.get("tokenization", {}))),
        stopwords=BillStopwordRemover(StopwordConfig(**stop_opts)),
        stemmer=build_stemmer(StemmingConfig(**options.get("stemming", {}))),
    )
