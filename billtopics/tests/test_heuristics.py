import numpy as np
import pandas as pd
import pytest

from billtopics.core.validation.estimation import (
    best_k_from_heuristic,
    best_k_from_perplexity,
    estimate_k,
)
from billtopics.core.validation.heuristics import (
    METRIC_DIRECTIONS,
    TopicCountHeuristics,
    arun2010,
    caojuan2009,
    deveaud2014,
    normalize_metrics,
)
from billtopics.utils.exceptions import InvalidTopicCountError


def test_caojuan_is_zero_for_disjoint_topics_and_one_for_identical():
    disjoint = np.array([[0.5, 0.5, 0.0, 0.0], [0.0, 0.0, 0.5, 0.5]])
    same = np.array([[0.25] * 4, [0.25] * 4, [0.25] * 4])
    assert caojuan2009(disjoint) == pytest.approx(0.0)
    assert caojuan2009(same) == pytest.approx(1.0)


def test_deveaud_prefers_distinct_topics():
    distinct = np.array([[0.9, 0.05, 0.05], [0.05, 0.9, 0.05]])
    blurred = np.array([[0.4, 0.3, 0.3], [0.3, 0.4, 0.3]])
    assert deveaud2014(distinct) > deveaud2014(blurred) > 0
    assert deveaud2014(np.array([[0.5, 0.5], [0.5, 0.5]])) == pytest.approx(0.0)


def test_arun_is_finite_and_non_negative():
    beta = np.array([[0.7, 0.2, 0.1], [0.1, 0.2, 0.7]])
    gamma = np.array([[0.9, 0.1], [0.2, 0.8], [0.5, 0.5]])
    score = arun2010(beta, gamma, np.array([10.0, 20.0, 5.0]))
    assert np.isfinite(score)
    assert score >= 0


@pytest.mark.parametrize("backend", ["gensim", "sklearn"])
def test_heuristic_table(backend, dfm, gensim_modeler, sklearn_modeler):
    modeler = gensim_modeler if backend == "gensim" else sklearn_modeler
    table = TopicCountHeuristics(modeler).run(dfm, [4, 2, 3])

    assert list(table.columns) == ["k", *METRIC_DIRECTIONS]
    assert table["k"].tolist() == [2, 3, 4]
    assert np.isfinite(table[list(METRIC_DIRECTIONS)].to_numpy()).all()


def test_heuristics_need_two_topics(dfm, sklearn_modeler):
    with pytest.raises(InvalidTopicCountError) as exc:
        TopicCountHeuristics(sklearn_modeler).run(dfm, [1, 2])
    assert exc.value.code == "HEURISTIC_TOPIC_COUNT"


def test_normalize_metrics_scales_to_unit_interval():
    table = pd.DataFrame(
        {"k": [2, 3, 4], "griffiths2004": [-10.0, -5.0, -7.5], "caojuan2009": [0.3, 0.3, 0.3]}
    )
    scaled = normalize_metrics(table)
    assert scaled["griffiths2004"].tolist() == [0.0, 1.0, 0.5]
    assert scaled["caojuan2009"].tolist() == [0.0, 0.0, 0.0]


def test_best_k_from_perplexity_breaks_ties_toward_fewer_topics():
    summary = pd.DataFrame({"k": [30, 10, 20], "mean": [50.0, 40.0, 40.0]})
    assert best_k_from_perplexity(summary) == 10


def test_best_k_follows_metric_direction():
    table = pd.DataFrame(
        {
            "k": [2, 3, 4],
            "griffiths2004": [-9.0, -8.0, -8.5],
            "caojuan2009": [0.4, 0.2, 0.3],
            "arun2010": [1.0, 2.0, 3.0],
            "deveaud2014": [0.1, 0.3, 0.3],
        }
    )
    assert best_k_from_heuristic(table, "griffiths2004") == 3
    assert best_k_from_heuristic(table, "caojuan2009") == 3
    assert best_k_from_heuristic(table, "arun2010") == 2
    assert best_k_from_heuristic(table, "deveaud2014") == 3
    assert estimate_k("arun2010", heuristics=table) == 2
    with pytest.raises(KeyError):
        best_k_from_heuristic(table, "silhouette")


def test_estimate_k_needs_its_input():
    with pytest.raises(ValueError):
        estimate_k("perplexity")
    with pytest.raises(ValueError):
        estimate_k("deveaud2014")
