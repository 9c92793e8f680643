from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


def default_boilerplate_patterns() -> Tuple[str, ...]:
    # Structural markup common to bill texts as published by legislatures
    return (
        r"\bSEC(?:TION)?\.?\s*\d+[A-Za-z]?\.",  # "SEC. 2." / "Section 101."
        r"\(\s*(?:[a-z]{1,2}|[ivxlc]{1,6}|[0-9]{1,3}|[A-Z]{1,2})\s*\)",  # (a) (1) (iv) (A)
        r"\b\d+\s+U\.?\s?S\.?\s?C\.?\s+\d+[a-z0-9\-]*",  # 42 U.S.C. 1395
        r"\bPub(?:lic)?\.?\s+L(?:aw)?\.?\s+\d+[\-–]\d+",  # Public Law 111-148
        r"\b(?:H|S)\.\s?(?:R\.|Res\.)?\s?\d+\b",  # H.R. 3590 / S. 1
    )


@dataclass(frozen=True)
class NormalizationConfig:
    boilerplate_patterns: Tuple[str, ...] = field(
        default_factory=default_boilerplate_patterns
    )
    strip_boilerplate: bool = True
    lowercase: bool = True
    collapse_whitespace: bool = True
    unicode_nfkc: bool = True
    expand_contractions: bool = True  # uses python 'contractions' package
