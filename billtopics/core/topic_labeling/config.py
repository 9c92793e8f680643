from __future__ import annotations
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class TopicLabelConfig:
    strategy: Literal["explicit", "default"] = "default"
    num_keywords: int = 2  # for default heuristic
    separator: str = " & "
