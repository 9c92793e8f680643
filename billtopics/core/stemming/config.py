from __future__ import annotations
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class StemmingConfig:
    method: Literal["snowball", "wordnet", "none"] = "snowball"
    language: str = "english"  # snowball only
    use_pos_tagging: bool = True  # wordnet only: tag tokens then lemmatize by POS
