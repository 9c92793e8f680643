from __future__ import annotations
from typing import Tuple

import numpy as np

from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import FoldAssignmentError


def assign_folds(
    n_docs: int,
    n_folds: int = 5,
    strategy: str = "random",
    random_state: int = 42,
) -> np.ndarray:
    """
    Fold id (1..n_folds) for each of `n_docs` documents.

    Both strategies produce the same fold sizes, which differ by at most one
    document. "block" gives fold 1 the first slice of the corpus, fold 2 the
    next, and so on; "random" permutes that layout with a seeded generator.
    The result depends only on the arguments.
    """
    if n_folds < 2:
        raise FoldAssignmentError("TOO_FEW_FOLDS", msg.TOO_FEW_FOLDS.format(folds=n_folds))
    if n_docs < n_folds:
        raise FoldAssignmentError(
            "TOO_FEW_DOCUMENTS", msg.TOO_FEW_DOCUMENTS.format(docs=n_docs, folds=n_folds)
        )

    blocks = np.array_split(np.arange(n_docs), n_folds)
    layout = np.concatenate(
        [np.full(len(b), fold, dtype=int) for fold, b in enumerate(blocks, start=1)]
    )
    if strategy == "block":
        return layout
    if strategy == "random":
        return np.random.default_rng(random_state).permutation(layout)
    raise FoldAssignmentError(
        "UNKNOWN_FOLD_STRATEGY", msg.UNKNOWN_FOLD_STRATEGY.format(strategy=strategy)
    )


def fold_split(folds: np.ndarray, fold: int) -> Tuple[np.ndarray, np.ndarray]:
    """(train_rows, held_out_rows) for one fold."""
    folds = np.asarray(folds)
    return np.flatnonzero(folds != fold), np.flatnonzero(folds == fold)
