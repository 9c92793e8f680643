import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.features.builder import DfmBuilder
from billtopics.core.features.config import DfmConfig
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.gensim_lda import GensimLDAModeler
from billtopics.core.topic_modeling.sklearn_lda import SklearnLDAModeler

THEMES = {
    "health": [
        "hospital", "patient", "medicaid", "clinic", "drug", "insurance",
        "coverage", "prescription", "nurse", "physician", "medicare", "vaccine",
    ],
    "tax": [
        "income", "deduction", "credit", "taxpayer", "revenue", "payroll",
        "estate", "capital", "gains", "rate", "exemption", "bracket",
    ],
    "education": [
        "school", "student", "teacher", "tuition", "college", "scholarship",
        "classroom", "curriculum", "literacy", "campus", "loan", "grant",
    ],
    "immigration": [
        "border", "visa", "asylum", "migrant", "detention", "deportation",
        "citizenship", "refugee", "patrol", "naturalization", "alien", "entry",
    ],
}
PARTIES = ("D", "R")


def make_theme_docs(n_docs: int, doc_len: int = 40, seed: int = 0):
    """Token lists drawn mostly from one theme each, plus the theme per doc."""
    rng = np.random.default_rng(seed)
    names = list(THEMES)
    all_words = [w for words in THEMES.values() for w in words]
    docs, themes = [], []
    for i in range(n_docs):
        theme = names[i % len(names)]
        own = rng.choice(THEMES[theme], size=int(doc_len * 0.85))
        noise = rng.choice(all_words, size=doc_len - len(own))
        docs.append([str(w) for w in np.concatenate([own, noise])])
        themes.append(theme)
    return docs, themes


def build_test_dfm(docs, doc_ids=None):
    doc_ids = doc_ids or [f"bill_{i}" for i in range(len(docs))]
    cfg = DfmConfig(min_termfreq=1, min_docfreq=1, detect_collocations=False)
    return DfmBuilder(cfg).build(docs, doc_ids)


@pytest.fixture
def theme_docs():
    return make_theme_docs(40)


@pytest.fixture
def dfm(theme_docs):
    docs, _ = theme_docs
    return build_test_dfm(docs)


@pytest.fixture
def corpus(theme_docs):
    docs, themes = theme_docs
    frame = pd.DataFrame(
        {
            "doc_id": [f"bill_{i}" for i in range(len(docs))],
            "text": [" ".join(d) for d in docs],
            "party": [PARTIES[i % 2] for i in range(len(docs))],
            "theme": themes,
        }
    )
    return Corpus(frame)


@pytest.fixture
def make_dfm():
    def _make(n_docs: int, seed: int = 0):
        docs, _ = make_theme_docs(n_docs, seed=seed)
        return build_test_dfm(docs)

    return _make


@pytest.fixture
def sklearn_modeler():
    return SklearnLDAModeler(
        TopicModelConfig(backend="sklearn", max_iter=5, random_state=0)
    )


@pytest.fixture
def gensim_modeler():
    return GensimLDAModeler(TopicModelConfig(passes=5, iterations=50, random_state=0))
