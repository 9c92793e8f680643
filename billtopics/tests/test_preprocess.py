import pandas as pd

from billtopics.core.corpus.corpus import Corpus
from billtopics.core.normalization.config import NormalizationConfig
from billtopics.core.normalization.normalizer import BillTextNormalizer
from billtopics.core.stemming.config import StemmingConfig
from billtopics.core.stemming.stemmer import IdentityStemmer, build_stemmer
from billtopics.core.stopword_removal.config import StopwordConfig
from billtopics.core.stopword_removal.removal import BillStopwordRemover
from billtopics.core.tokenization.config import TokenizationConfig
from billtopics.core.tokenization.tokenizer import BillTokenizer
from billtopics.services.preprocess import Preprocessor, build_preprocessor

SKLEARN_STOPWORDS = {"stopwords": {"source": "sklearn"}}


def test_normalizer_strips_bill_boilerplate():
    text = "SEC. 2. Amends 42 U.S.C. 1395 (a) to   cover   Patients under H.R. 3590."
    out = BillTextNormalizer().normalize(text)

    assert "sec." not in out
    assert "u.s.c." not in out
    assert "(a)" not in out
    assert "3590" not in out
    assert "patients" in out
    assert "  " not in out


def test_normalizer_can_keep_everything():
    cfg = NormalizationConfig(
        strip_boilerplate=False, lowercase=False, expand_contractions=False
    )
    assert BillTextNormalizer(cfg).normalize("SEC. 1. Tax") == "SEC. 1. Tax"
    assert BillTextNormalizer().normalize(None) == ""


def test_tokenizer_filters_short_numeric_and_mixed_tokens():
    tokens = BillTokenizer().tokenize("the tax on 2024 income, per covid19 rule ii")
    assert tokens == ["the", "tax", "income", "per", "rule"]

    regex = BillTokenizer(TokenizationConfig(method="regex", min_token_len=1))
    assert regex.tokenize("a b-c") == ["a", "b", "c"]


def test_stopwords_include_legislative_vocabulary():
    remover = BillStopwordRemover(StopwordConfig(source="sklearn"))
    cleaned, removed = remover.remove(["shall", "amend", "hospital", "The", "section"])
    assert cleaned == ["hospital"]
    assert removed == ["shall", "amend", "The", "section"]


def test_stopword_overrides():
    remover = BillStopwordRemover(
        StopwordConfig(
            source="sklearn",
            custom_stopwords=frozenset({"hospital"}),
            exclude_stopwords=frozenset({"congress"}),
        )
    )
    assert "hospital" in remover.stopwords
    assert "congress" not in remover.stopwords


def test_stemmers():
    assert build_stemmer(StemmingConfig(method="snowball")).stem(["taxes", "hospitals"]) == [
        "tax",
        "hospit",
    ]
    assert isinstance(build_stemmer(StemmingConfig(method="none")), IdentityStemmer)


def test_preprocessor_keeps_document_order_and_empty_docs():
    corpus = Corpus(
        pd.DataFrame(
            {"text": ["Hospitals and patients.", "SEC. 1. The Act.", "Taxes on income."]}
        )
    )
    pre = build_preprocessor(SKLEARN_STOPWORDS)
    docs = pre.process_corpus(corpus)

    assert docs == [["hospit", "patient"], [], ["tax", "incom"]]


def test_build_preprocessor_converts_yaml_lists():
    pre = build_preprocessor(
        {
            "stopwords": {"source": "sklearn", "custom_stopwords": ["patient"]},
            "stemming": {"method": "none"},
            "tokenization": {"min_token_len": 4},
        }
    )
    assert isinstance(pre, Preprocessor)
    assert pre.process("Patients visit the hospital") == ["patients", "visit", "hospital"]
    assert "patient" in pre.stopwords.stopwords
