from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EDAConfig:
    top_features: int = 30
    covariates: Tuple[str, ...] = ("party",)  # metadata columns to count by
