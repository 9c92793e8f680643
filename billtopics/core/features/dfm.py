from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd
from gensim.corpora import Dictionary
from gensim.matutils import Sparse2Corpus
from scipy import sparse


@dataclass(frozen=True)
class DocumentFeatureMatrix:
    """
    Sparse document x term count matrix.

    Row `i` is the document with `doc_ids[i]`; columns follow `vocabulary`.
    Row subsets keep the full vocabulary so a model trained on one subset can
    score another.
    """

    counts: sparse.csr_matrix
    vocabulary: Tuple[str, ...]
    doc_ids: Tuple[str, ...]

    def __post_init__(self):
        counts = sparse.csr_matrix(self.counts)
        if counts.shape != (len(self.doc_ids), len(self.vocabulary)):
            raise ValueError(
                f"Matrix shape {counts.shape} does not match "
                f"{len(self.doc_ids)} documents x {len(self.vocabulary)} terms."
            )
        object.__setattr__(self, "counts", counts)
        object.__setattr__(self, "vocabulary", tuple(self.vocabulary))
        object.__setattr__(self, "doc_ids", tuple(str(d) for d in self.doc_ids))

    @property
    def n_docs(self) -> int:
        return self.counts.shape[0]

    @property
    def n_terms(self) -> int:
        return self.counts.shape[1]

    def subset(self, rows: Sequence[int]) -> "DocumentFeatureMatrix":
        rows = np.asarray(rows, dtype=int)
        return DocumentFeatureMatrix(
            counts=self.counts[rows],
            vocabulary=self.vocabulary,
            doc_ids=tuple(self.doc_ids[i] for i in rows),
        )

    def term_frequencies(self) -> pd.Series:
        return pd.Series(
            np.asarray(self.counts.sum(axis=0)).ravel(), index=list(self.vocabulary)
        )

    def doc_frequencies(self) -> pd.Series:
        return pd.Series(
            np.asarray((self.counts > 0).sum(axis=0)).ravel(),
            index=list(self.vocabulary),
        )

    def doc_lengths(self) -> np.ndarray:
        return np.asarray(self.counts.sum(axis=1)).ravel()

    def usable_terms(self) -> np.ndarray:
        """Column indices with a nonzero count in this matrix."""
        return np.flatnonzero(np.asarray(self.counts.sum(axis=0)).ravel() > 0)

    def top_features(self, n: int = 20) -> pd.Series:
        return self.term_frequencies().sort_values(ascending=False, kind="mergesort").head(n)

    def to_gensim(self) -> Tuple[List[List[Tuple[int, int]]], Dictionary]:
        """Bag-of-words corpus and a Dictionary sharing this matrix's column ids."""
        bow = [
            [(int(i), int(c)) for i, c in doc]
            for doc in Sparse2Corpus(self.counts, documents_columns=False)
        ]
        dictionary = Dictionary.from_corpus(
            bow, id2word=dict(enumerate(self.vocabulary))
        )
        return bow, dictionary
