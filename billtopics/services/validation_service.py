from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.base import TopicModeler
from billtopics.core.validation.config import SweepConfig, TopicEstimationConfig
from billtopics.core.validation.estimation import estimate_k
from billtopics.core.validation.heuristics import TopicCountHeuristics
from billtopics.core.validation.perplexity_sweep import PerplexitySweep, SweepResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    sweep: Optional[SweepResult]
    heuristics: Optional[pd.DataFrame]
    best_k: Optional[int]


class ValidationService:
    """
    Topic-count validation: heuristic curves over the full corpus and the
    cross-validated perplexity sweep, followed by an optional pick of k.
    """

    def __init__(
        self,
        modeler: TopicModeler,
        sweep_cfg: SweepConfig | None = None,
        est_cfg: TopicEstimationConfig | None = None,
    ):
        self.modeler = modeler
        self.sweep_cfg = sweep_cfg or SweepConfig()
        self.est_cfg = est_cfg or TopicEstimationConfig()

    def heuristics(self, dfm: DocumentFeatureMatrix, ks: Sequence[int]) -> pd.DataFrame:
        return TopicCountHeuristics(self.modeler, n_jobs=self.est_cfg.n_jobs).run(dfm, ks)

    def sweep(self, dfm: DocumentFeatureMatrix, ks: Sequence[int]) -> SweepResult:
        result = PerplexitySweep(self.modeler, self.sweep_cfg).run(dfm, ks)
        if not result.complete:
            logger.warning(
                "Perplexity summary is built from an incomplete table; "
                f"missing (k, fold): {[(f.k, f.fold) for f in result.failures]}"
            )
        return result

    def validate(
        self,
        dfm: DocumentFeatureMatrix,
        ks: Sequence[int],
        *,
        run_heuristics: bool = True,
        run_sweep: bool = True,
    ) -> ValidationResult:
        heuristics = self.heuristics(dfm, ks) if run_heuristics else None
        sweep = self.sweep(dfm, ks) if run_sweep else None

        best_k: Optional[int] = None
        method = self.est_cfg.method
        if method == "perplexity" and sweep is not None and not sweep.table.empty:
            best_k = estimate_k(method, perplexity_summary=sweep.summary())
        elif method != "perplexity" and heuristics is not None:
            best_k = estimate_k(method, heuristics=heuristics)
        return ValidationResult(sweep=sweep, heuristics=heuristics, best_k=best_k)
