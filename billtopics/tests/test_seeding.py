import logging

import numpy as np
import pytest

from billtopics.core.seeding.config import LexiconSeedConfig, SeededModelConfig
from billtopics.core.seeding.diagnostics import seed_coverage, seed_recall
from billtopics.core.seeding.dictionary import SeedDictionary, match_term
from billtopics.core.seeding.lexicon import load_lexicon, seeds_from_lexicon
from billtopics.core.seeding.seeded_lda import SeededLDAModeler
from billtopics.core.stemming.stemmer import SnowballTokenStemmer
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.utils.exceptions import InvalidSeedDictionaryError

FAST = TopicModelConfig(passes=10, iterations=50, random_state=0)

# alphabetically early filler first, the corpus's own terms later
LEXICON = {
    "health": [
        "abortion", "abuse", "access", "accident", "acupuncture",
        "hospital", "patient", "medicaid", "clinic", "drug", "insurance",
    ],
    "tax": [
        "accountant", "accrual", "adjusted", "alimony", "amortization",
        "income", "deduction", "credit", "taxpayer", "revenue",
    ],
    "education": [
        "academy", "accreditation", "adjunct", "admissions", "alumni",
        "school", "student", "teacher", "tuition", "college",
    ],
    "immigration": [
        "abroad", "admission", "adjudication", "alienage", "amnesty",
        "border", "visa", "asylum", "migrant", "detention",
    ],
}


def test_seeds_are_cleaned():
    seeds = SeedDictionary.from_mapping({" health ": ["Hospital", "hospital ", "", "Clinic*"]})
    assert seeds.topics == {"health": ("hospital", "clinic*")}
    assert seeds.names == ["health"]
    assert len(seeds) == 1


def test_glob_seeds_match_prefixes():
    vocab = ("tax", "taxpayer", "taxation", "syntax")
    assert match_term("tax*", vocab) == [0, 1, 2]
    assert match_term("tax", vocab) == [0]
    seeds = SeedDictionary.from_mapping({"tax": ["tax*"], "other": ["syntax", "missing"]})
    assert seeds.matches(vocab) == {"tax": [0, 1, 2], "other": [3]}


def test_shared_seeds_are_warned_about(caplog):
    with caplog.at_level(logging.WARNING):
        SeedDictionary.from_mapping({"a": ["budget"], "b": ["budget", "deficit"]})
    assert "budget" in caplog.text


def test_stemmed_seeds_keep_patterns():
    seeds = SeedDictionary.from_mapping({"health": ["hospitals", "clinic*"]})
    stemmed = seeds.stemmed(SnowballTokenStemmer())
    assert stemmed.topics == {"health": ("hospit", "clinic*")}


def test_load_lexicon_flattens_nested_categories(tmp_path):
    path = tmp_path / "lexicon.yaml"
    path.write_text("health:\n  - hospital\neconomy:\n  taxation: [tax, income]\n  trade: tariff\n")
    assert load_lexicon(path) == {
        "health": ["hospital"],
        "economy.taxation": ["tax", "income"],
        "economy.trade": ["tariff"],
    }


def test_eta_raises_prior_on_seed_columns(dfm):
    seeds = SeedDictionary.from_mapping({"health": ["hospital"], "tax": ["income"]})
    modeler = SeededLDAModeler(seeds, SeededModelConfig(seed_weight=3.0, residual_topics=1), FAST)

    assert modeler.topic_names == ("health", "tax", "other_1")
    eta = modeler.build_eta(dfm)
    h = dfm.vocabulary.index("hospital")
    i = dfm.vocabulary.index("income")
    base = 1.0 / 3
    assert eta.shape == (3, dfm.n_terms)
    assert eta[0, h] == pytest.approx(base + 3.0)
    assert eta[1, i] == pytest.approx(base + 3.0)
    assert eta[0, i] == pytest.approx(base)
    assert np.allclose(eta[2], base)


def test_seeded_model_names_topics_after_seeds(dfm):
    seeds = SeedDictionary.from_mapping({"health": ["hospital", "patient"]})
    model = SeededLDAModeler(seeds, SeededModelConfig(residual_topics=2), FAST).fit(dfm)
    assert model.topic_names == ("health", "other_1", "other_2")
    assert model.doc_topic_matrix(dfm).shape == (dfm.n_docs, 3)


def test_head_and_curated_seeds_are_distinguishable(dfm):
    head = seeds_from_lexicon(LEXICON, LexiconSeedConfig(n_terms=5, selection="head"))
    curated = seeds_from_lexicon(
        LEXICON, LexiconSeedConfig(n_terms=5, selection="curated"), dfm=dfm
    )
    assert head.positional and not curated.positional
    assert head.topics["health"] == ("abortion", "abuse", "access", "accident", "acupuncture")

    head_cov = seed_coverage(head, dfm)
    curated_cov = seed_coverage(curated, dfm)
    assert (head_cov["coverage"] == 0).all()
    assert (curated_cov["coverage"] == 1).all()

    head_model = SeededLDAModeler(head, model_cfg=FAST).fit(dfm)
    curated_model = SeededLDAModeler(curated, model_cfg=FAST).fit(dfm)
    head_recall = seed_recall(head_model, head, n=10)
    curated_recall = seed_recall(curated_model, curated, n=10)

    assert (head_recall["recall"] == 0).all()
    assert curated_recall["recall"].mean() > 0.3


def test_seed_recall_needs_known_topics(dfm):
    seeds = SeedDictionary.from_mapping({"health": ["hospital"]})
    model = SeededLDAModeler(seeds, SeededModelConfig(residual_topics=1), FAST).fit(dfm)
    with pytest.raises(KeyError):
        seed_recall(model, SeedDictionary.from_mapping({"defense": ["army"]}))


# -------------------------------------
# ❌ Rejected seed dictionaries
# -------------------------------------
def test_empty_seed_list_is_rejected():
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        SeedDictionary.from_mapping({"health": ["hospital"], "defense": []})
    assert exc.value.code == "EMPTY_SEED_LIST"


def test_empty_dictionary_is_rejected():
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        SeedDictionary.from_mapping({})
    assert exc.value.code == "EMPTY_SEED_DICTIONARY"


def test_blank_topic_name_is_rejected():
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        SeedDictionary.from_mapping({"  ": ["hospital"]})
    assert exc.value.code == "BLANK_SEED_TOPIC"


def test_curated_selection_needs_matrix():
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        seeds_from_lexicon(LEXICON, LexiconSeedConfig(selection="curated"))
    assert exc.value.code == "CURATED_NEEDS_DFM"


def test_curated_category_without_hits_is_rejected(dfm):
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        seeds_from_lexicon({"defense": ["army", "navy"]}, dfm=dfm)
    assert exc.value.code == "EMPTY_SEED_LIST"


def test_more_seeded_topics_than_terms_is_rejected(dfm):
    small = dfm.subset([0])
    many = {f"t{i}": [f"w{i}"] for i in range(small.n_terms + 1)}
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        SeededLDAModeler(SeedDictionary.from_mapping(many), model_cfg=FAST).fit(small)
    assert exc.value.code == "SEED_TOPICS_EXCEED_TERMS"


def test_more_seeded_topics_than_documents_is_rejected(dfm):
    two_bills = dfm.subset([0, 1])
    seeds = SeedDictionary.from_mapping(
        {"health": ["hospital"], "tax": ["income"], "education": ["school"]}
    )
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        SeededLDAModeler(seeds, model_cfg=FAST).fit(two_bills)
    assert exc.value.code == "SEED_TOPICS_EXCEED_DOCS"


def test_topic_names_equal_after_trimming_are_rejected():
    with pytest.raises(InvalidSeedDictionaryError) as exc:
        SeedDictionary.from_mapping({" health": ["hospital"], "health": ["clinic"]})
    assert exc.value.code == "DUPLICATE_SEED_TOPIC"
