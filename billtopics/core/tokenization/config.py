from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class TokenizationConfig:
    method: Literal["wordpunct", "regex"] = "wordpunct"
    regex_pattern: Optional[str] = None  # used if method == "regex"
    min_token_len: int = 3  # bill texts are full of "a", "b", "ii" enumerators
    keep_alpha_only: bool = True  # drop punctuation and mixed tokens
    remove_numbers_only: bool = True
