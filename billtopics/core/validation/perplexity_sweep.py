from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.base import TopicModeler
from billtopics.core.validation.config import SweepConfig
from billtopics.core.validation.folds import assign_folds, fold_split
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import InvalidTopicCountError, SweepFailedError

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["k", "fold", "perplexity"]


@dataclass(frozen=True)
class SweepFailure:
    k: int
    fold: int
    error: str


@dataclass(frozen=True)
class SweepResult:
    """
    One perplexity per (k, fold). `complete` is False when failures were
    skipped, in which case `table` is missing exactly those rows.
    """

    table: pd.DataFrame
    folds: np.ndarray
    failures: Tuple[SweepFailure, ...] = field(default_factory=tuple)

    @property
    def complete(self) -> bool:
        return not self.failures

    def summary(self) -> pd.DataFrame:
        return summarize_perplexity(self.table)

    def per_fold(self) -> pd.DataFrame:
        return per_fold_perplexity(self.table)


def summarize_perplexity(table: pd.DataFrame) -> pd.DataFrame:
    """Mean/std/count of perplexity per k; row order of `table` does not matter."""
    # fixed summation order so reordered tables give bit-identical means
    ordered = table.sort_values(["k", "fold"], kind="mergesort")
    return (
        ordered.groupby("k", sort=True)["perplexity"]
        .agg(mean="mean", std="std", n_folds="count")
        .reset_index()
    )


def per_fold_perplexity(table: pd.DataFrame) -> pd.DataFrame:
    """k x fold grid of perplexities."""
    return table.pivot(index="k", columns="fold", values="perplexity").sort_index()


def _validate_candidates(candidate_ks: Sequence[int]) -> List[int]:
    ks = [int(k) for k in candidate_ks]
    if not ks:
        raise InvalidTopicCountError("EMPTY_TOPIC_COUNTS", msg.EMPTY_TOPIC_COUNTS)
    if len(set(ks)) != len(ks):
        raise InvalidTopicCountError(
            "DUPLICATE_TOPIC_COUNTS", msg.DUPLICATE_TOPIC_COUNTS.format(ks=ks)
        )
    return ks


def _score_fold(
    modeler: TopicModeler,
    dfm: DocumentFeatureMatrix,
    folds: np.ndarray,
    k: int,
    fold: int,
    on_error: str,
) -> Dict:
    train_rows, held_out_rows = fold_split(folds, fold)
    try:
        model = modeler.fit(dfm.subset(train_rows), k)
        score = model.perplexity(dfm.subset(held_out_rows))
    except Exception as e:
        if on_error == "raise":
            raise SweepFailedError(
                k, fold, msg.SWEEP_FIT_FAILED.format(k=k, fold=fold, error=e)
            ) from e
        return {"k": k, "fold": fold, "perplexity": None, "error": repr(e)}
    logger.info(f"k={k} fold={fold} perplexity={score:.2f}")
    return {"k": k, "fold": fold, "perplexity": score, "error": None}


class PerplexitySweep:
    """
    Cross-validated held-out perplexity for each candidate topic count.

    Every (k, fold) pair is an independent work item: fit on the documents
    outside the fold, score the documents inside it. Items run through joblib,
    so with `n_jobs > 1` they finish in any order; each row carries its own
    k and fold.
    """

    def __init__(self, modeler: TopicModeler, cfg: SweepConfig | None = None):
        self.modeler = modeler
        self.cfg = cfg or SweepConfig()

    def run(
        self,
        dfm: DocumentFeatureMatrix,
        candidate_ks: Sequence[int],
        folds: Optional[np.ndarray] = None,
    ) -> SweepResult:
        ks = _validate_candidates(candidate_ks)
        fold_cfg = self.cfg.folds
        if folds is None:
            folds = assign_folds(
                dfm.n_docs, fold_cfg.n_folds, fold_cfg.strategy, fold_cfg.random_state
            )
        fold_ids = sorted(int(f) for f in np.unique(folds))
        logger.info(
            f"Perplexity sweep: k={ks}, {len(fold_ids)} folds "
            f"({fold_cfg.strategy}), {len(ks) * len(fold_ids)} fits"
        )

        rows = Parallel(n_jobs=self.cfg.n_jobs, backend=self.cfg.parallel_backend)(
            delayed(_score_fold)(self.modeler, dfm, folds, k, fold, self.cfg.on_error)
            for k in ks
            for fold in fold_ids
        )

        failures = tuple(
            SweepFailure(k=r["k"], fold=r["fold"], error=r["error"])
            for r in rows
            if r["error"] is not None
        )
        for f in failures:
            logger.error(f"Skipped k={f.k} fold={f.fold}: {f.error}")
        if failures:
            logger.warning(
                f"Perplexity sweep incomplete: {len(failures)} of {len(rows)} fits failed"
            )

        table = pd.DataFrame(
            [r for r in rows if r["error"] is None], columns=TABLE_COLUMNS
        )
        table = table.astype({"k": int, "fold": int, "perplexity": float})
        table = table.sort_values(["k", "fold"]).reset_index(drop=True)
        return SweepResult(table=table, folds=np.asarray(folds), failures=failures)
