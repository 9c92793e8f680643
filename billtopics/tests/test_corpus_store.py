import pandas as pd
import pytest

from billtopics.core.corpus.config import CorpusConfig
from billtopics.core.corpus.corpus import Corpus
from billtopics.core.corpus.store import CorpusStore
from billtopics.core.file_handler.storage import LocalStorage
from billtopics.utils.exceptions import AlignmentError, CorpusError


@pytest.fixture
def bills():
    return Corpus(
        pd.DataFrame(
            {
                "doc_id": ["HR1", "HR2", "S3"],
                "text": ["tax relief", "school meals", "border patrol"],
                "party": ["R", "D", "R"],
            }
        )
    )


@pytest.mark.parametrize(
    "key", ["bills.csv", "bills.csv.gz", "bills.parquet", "nested/bills.pkl"]
)
def test_snapshot_round_trip(tmp_path, bills, key):
    store = CorpusStore(LocalStorage(tmp_path))
    location = store.save(bills, key)
    assert location == str(tmp_path / key)

    loaded = store.load(key)
    assert loaded.doc_ids == ["HR1", "HR2", "S3"]
    assert loaded.texts == bills.texts
    assert loaded.metadata("party").tolist() == ["R", "D", "R"]


def test_write_labels_persists_labeled_copy(tmp_path, bills):
    store = CorpusStore(LocalStorage(tmp_path))
    labeled = store.write_labels(bills, ["tax", "education", "immigration"], "topic", "out.csv")

    assert "topic" not in bills.frame.columns
    assert store.load("out.csv").metadata("topic").tolist() == [
        "tax",
        "education",
        "immigration",
    ]
    assert labeled.metadata("topic").tolist() == ["tax", "education", "immigration"]


def test_custom_columns(tmp_path):
    pd.DataFrame({"bill": ["A"], "body": ["farm subsidies"]}).to_csv(
        tmp_path / "raw.csv", index=False
    )
    store = CorpusStore(
        LocalStorage(tmp_path), CorpusConfig(text_column="body", id_column="bill")
    )
    corpus = store.load("raw.csv")
    assert corpus.doc_ids == ["A"]
    assert corpus.texts == ["farm subsidies"]


def test_missing_ids_are_positional():
    corpus = Corpus(pd.DataFrame({"text": ["a", "b"]}, index=[10, 20]))
    assert corpus.doc_ids == ["0", "1"]
    assert len(corpus) == 2


def test_missing_text_is_empty_string():
    corpus = Corpus(pd.DataFrame({"text": ["a", None]}))
    assert corpus.texts == ["a", ""]


# -------------------------------------
# ❌ Malformed input
# -------------------------------------
def test_missing_text_column_is_rejected():
    with pytest.raises(CorpusError) as exc:
        Corpus(pd.DataFrame({"body": ["x"]}))
    assert exc.value.code == "TEXT_COLUMN_MISSING"


def test_unknown_suffix_is_rejected(tmp_path, bills):
    with pytest.raises(CorpusError):
        CorpusStore(LocalStorage(tmp_path)).save(bills, "bills.xlsx")


def test_label_count_must_match(bills):
    with pytest.raises(AlignmentError):
        bills.with_labels(["only one"], "topic")


def test_unknown_metadata_column(bills):
    with pytest.raises(KeyError):
        bills.metadata("chamber")


def test_csv_ids_keep_leading_zeros(tmp_path):
    corpus = Corpus(pd.DataFrame({"doc_id": ["0042", "0043"], "text": ["a", "b"]}))
    store = CorpusStore(LocalStorage(tmp_path))
    store.save(corpus, "bills.csv")
    assert store.load("bills.csv").doc_ids == ["0042", "0043"]


def test_gzip_snapshots_are_reproducible(tmp_path, bills):
    store = CorpusStore(LocalStorage(tmp_path))
    store.save(bills, "a.csv.gz")
    store.save(bills, "b.csv.gz")
    assert (tmp_path / "a.csv.gz").read_bytes() == (tmp_path / "b.csv.gz").read_bytes()
