from __future__ import annotations
import logging

import pandas as pd

from billtopics.core.validation.heuristics import METRIC_DIRECTIONS

logger = logging.getLogger(__name__)


def best_k_from_perplexity(summary: pd.DataFrame) -> int:
    """Lowest mean held-out perplexity; ties go to the smaller k."""
    ordered = summary.sort_values(["mean", "k"], kind="mergesort")
    return int(ordered.iloc[0]["k"])


def best_k_from_heuristic(table: pd.DataFrame, metric: str) -> int:
    if metric not in METRIC_DIRECTIONS:
        raise KeyError(f"Unknown topic-count heuristic '{metric}'.")
    ascending = METRIC_DIRECTIONS[metric] == "minimize"
    ordered = table.sort_values([metric, "k"], ascending=[ascending, True], kind="mergesort")
    return int(ordered.iloc[0]["k"])


def estimate_k(
    method: str,
    *,
    perplexity_summary: pd.DataFrame | None = None,
    heuristics: pd.DataFrame | None = None,
) -> int:
    if method == "perplexity":
        if perplexity_summary is None:
            raise ValueError("Perplexity estimation needs a sweep summary.")
        k = best_k_from_perplexity(perplexity_summary)
    else:
        if heuristics is None:
            raise ValueError(f"Estimation by '{method}' needs the heuristics table.")
        k = best_k_from_heuristic(heuristics, method)
    logger.info(f"Estimated topic count by {method}: k={k}")
    return k
