from __future__ import annotations
import re
from typing import List

from nltk.tokenize import wordpunct_tokenize

from billtopics.core.tokenization.base import Tokenizer
from billtopics.core.tokenization.config import TokenizationConfig


class BillTokenizer(Tokenizer):
    """Adapter: NLTK wordpunct (or regex) tokenization with length/alpha filters."""

    _re_non_alpha = re.compile(r"[^a-z]", re.IGNORECASE)

    def __init__(self, config: TokenizationConfig | None = None):
        self.cfg = config or TokenizationConfig()
        self._regex = re.compile(self.cfg.regex_pattern or r"\b\w+\b")

    def _tokenize_raw(self, text: str) -> List[str]:
        s = text or ""
        if self.cfg.method == "regex":
            return self._regex.findall(s)
        return wordpunct_tokenize(s)

    def tokenize(self, text: str) -> List[str]:
        out: List[str] = []
        for t in self._tokenize_raw(text):
            if not t:
                continue
            if self.cfg.remove_numbers_only and t.isdigit():
                continue
            if self.cfg.keep_alpha_only and self._re_non_alpha.search(t):
                continue
            if len(t) < self.cfg.min_token_len:
                continue
            out.append(t)
        return out
