import numpy as np
import pytest

from billtopics.core.features.builder import DfmBuilder
from billtopics.core.features.config import DfmConfig
from billtopics.core.features.dfm import DocumentFeatureMatrix


def _no_phrases(**overrides):
    return DfmConfig(detect_collocations=False, **overrides)


def test_counts_follow_document_order():
    docs = [["tax", "tax", "credit"], ["school", "tax"], []]
    dfm = DfmBuilder(_no_phrases(min_termfreq=1, min_docfreq=1)).build(docs, ["a", "b", "c"])

    assert dfm.doc_ids == ("a", "b", "c")
    assert dfm.vocabulary == ("credit", "school", "tax")
    assert dfm.counts.toarray().tolist() == [[1, 0, 2], [0, 1, 1], [0, 0, 0]]
    assert dfm.doc_lengths().tolist() == [3, 2, 0]


def test_trimming_by_term_and_document_frequency():
    docs = [["tax", "border"], ["tax", "school"], ["tax", "school"], ["tax"]]
    dfm = DfmBuilder(_no_phrases(min_termfreq=2, min_docfreq=2)).build(docs, list("abcd"))
    assert dfm.vocabulary == ("school", "tax")

    capped = DfmBuilder(
        _no_phrases(min_termfreq=1, min_docfreq=1, max_docprop=0.6)
    ).build(docs, list("abcd"))
    assert "tax" not in capped.vocabulary
    # documents stay even when all their terms are trimmed
    assert capped.n_docs == 4


def test_collocations_are_joined():
    docs = [["health", "care", "reform", "bill"] for _ in range(10)]
    dfm = DfmBuilder(
        DfmConfig(
            min_termfreq=1,
            min_docfreq=1,
            collocation_min_count=2,
            collocation_threshold=0.1,
        )
    ).build(docs, [str(i) for i in range(10)])
    assert any("_" in term for term in dfm.vocabulary)


def test_subset_keeps_vocabulary(dfm):
    sub = dfm.subset([3, 0])
    assert sub.vocabulary == dfm.vocabulary
    assert sub.doc_ids == (dfm.doc_ids[3], dfm.doc_ids[0])
    np.testing.assert_array_equal(sub.counts.toarray(), dfm.counts[[3, 0]].toarray())


def test_frequencies_and_top_features(dfm):
    tf = dfm.term_frequencies()
    assert tf.sum() == dfm.counts.sum()
    top = dfm.top_features(5)
    assert len(top) == 5
    assert top.iloc[0] == tf.max()
    assert (dfm.doc_frequencies() <= dfm.n_docs).all()


def test_gensim_view_shares_column_ids(dfm):
    bow, dictionary = dfm.to_gensim()
    assert len(bow) == dfm.n_docs
    assert len(dictionary) == dfm.n_terms
    for j, term in enumerate(dfm.vocabulary):
        assert dictionary[j] == term
    first = dict(bow[0])
    row = dfm.counts[0].toarray().ravel()
    assert first == {j: int(c) for j, c in enumerate(row) if c}


def test_shape_mismatch_is_rejected():
    with pytest.raises(ValueError):
        DocumentFeatureMatrix(np.zeros((2, 3)), ("a", "b", "c"), ("d1",))


def test_token_lists_and_ids_must_align():
    with pytest.raises(ValueError):
        DfmBuilder(_no_phrases()).build([["tax"]], ["a", "b"])
