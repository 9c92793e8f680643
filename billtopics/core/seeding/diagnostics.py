from __future__ import annotations
from typing import List

import pandas as pd

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.seeding.dictionary import SeedDictionary, match_term
from billtopics.core.topic_modeling.base import FittedTopicModel


def seed_coverage(seeds: SeedDictionary, dfm: DocumentFeatureMatrix) -> pd.DataFrame:
    """Per topic: how many of its seeds match anything in the vocabulary."""
    rows: List[dict] = []
    matched_cols = seeds.matches(dfm.vocabulary)
    for name, terms in seeds.topics.items():
        hits = sum(1 for t in terms if match_term(t, dfm.vocabulary))
        rows.append(
            {
                "topic": name,
                "n_seeds": len(terms),
                "n_matched_seeds": hits,
                "n_matched_terms": len(matched_cols[name]),
                "coverage": hits / len(terms),
            }
        )
    return pd.DataFrame(rows)


def seed_recall(
    model: FittedTopicModel, seeds: SeedDictionary, n: int = 10
) -> pd.DataFrame:
    """
    Per seeded topic: share of its top-n terms that match its own seeds.
    A topic whose name the model does not know raises KeyError.
    """
    top = model.top_terms(n)
    rows: List[dict] = []
    for name, terms in seeds.topics.items():
        if name not in model.topic_names:
            raise KeyError(f"Model has no topic named '{name}'.")
        words = top.loc[top["topic"] == name, "term"].tolist()
        matched = [w for w in words if any(match_term(t, [w]) for t in terms)]
        rows.append(
            {
                "topic": name,
                "top_terms": ", ".join(words),
                "matched": ", ".join(matched),
                "recall": len(matched) / len(words) if words else 0.0,
            }
        )
    return pd.DataFrame(rows)
