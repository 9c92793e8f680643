from __future__ import annotations
import re
import unicodedata
import contractions
from billtopics.core.normalization.base import TextNormalizer
from billtopics.core.normalization.config import NormalizationConfig


class BillTextNormalizer(TextNormalizer):
    _re_multi_ws = re.compile(r"\s{2,}")

    def __init__(self, config: NormalizationConfig | None = None):
        self.cfg = config or NormalizationConfig()
        self._boilerplate = [re.compile(p) for p in self.cfg.boilerplate_patterns]

    def _strip_boilerplate(self, s: str) -> str:
        for pattern in self._boilerplate:
            s = pattern.sub(" ", s)
        return s

    def normalize(self, text: str) -> str:
        if text is None:
            return ""
        s = str(text)

        if self.cfg.unicode_nfkc:
            s = unicodedata.normalize("NFKC", s)

        # before lowercasing: the patterns key on "SEC." and "U.S.C."
        if self.cfg.strip_boilerplate:
            s = self._strip_boilerplate(s)

        if self.cfg.expand_contractions:
            s = contractions.fix(s)

        if self.cfg.lowercase:
            s = s.lower()

        s = s.strip()
        if self.cfg.collapse_whitespace:
            s = self._re_multi_ws.sub(" ", s)
        return s
