from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List


class Stemmer(ABC):
    """Port: reduce tokens to stems (or lemmas) so seed prefixes can match."""

    @abstractmethod
    def stem(self, tokens: List[str]) -> List[str]: ...
