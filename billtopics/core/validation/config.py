from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import PipelineConfigError

ON_ERROR_MODES = ("raise", "skip")


@dataclass(frozen=True)
class FoldConfig:
    n_folds: int = 5
    # "block": contiguous slices in corpus order (fold membership follows any
    # ordering already in the corpus); "random": same sizes, seeded shuffle
    strategy: Literal["block", "random"] = "random"
    random_state: int = 42


@dataclass(frozen=True)
class SweepConfig:
    folds: FoldConfig = field(default_factory=FoldConfig)
    n_jobs: int = 1  # joblib workers; 1 runs (k, fold) items sequentially
    parallel_backend: str = "loky"
    on_error: Literal["raise", "skip"] = "raise"

    def __post_init__(self):
        if self.on_error not in ON_ERROR_MODES:
            raise PipelineConfigError(
                "UNKNOWN_ON_ERROR", msg.UNKNOWN_ON_ERROR.format(mode=self.on_error)
            )


@dataclass(frozen=True)
class TopicEstimationConfig:
    method: Literal[
        "perplexity", "griffiths2004", "caojuan2009", "arun2010", "deveaud2014"
    ] = "perplexity"
    n_jobs: int = 1
