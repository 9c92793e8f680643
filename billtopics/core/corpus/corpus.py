from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Any

import pandas as pd

from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import AlignmentError, CorpusError


@dataclass(frozen=True)
class Corpus:
    """
    Ordered bill texts plus their metadata (sponsor party, chamber, ...).

    Row order is the document order every downstream matrix is built in.
    """

    frame: pd.DataFrame
    text_column: str = "text"
    id_column: str = "doc_id"

    def __post_init__(self):
        if self.text_column not in self.frame.columns:
            raise CorpusError(
                "TEXT_COLUMN_MISSING",
                msg.TEXT_COLUMN_MISSING.format(column=self.text_column),
            )
        if self.id_column not in self.frame.columns:
            frame = self.frame.reset_index(drop=True).copy()
            frame.insert(0, self.id_column, [str(i) for i in range(len(frame))])
            object.__setattr__(self, "frame", frame)
        else:
            object.__setattr__(self, "frame", self.frame.reset_index(drop=True))

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def texts(self) -> List[str]:
        return self.frame[self.text_column].fillna("").astype(str).tolist()

    @property
    def doc_ids(self) -> List[str]:
        return self.frame[self.id_column].astype(str).tolist()

    def metadata(self, column: str) -> pd.Series:
        if column not in self.frame.columns:
            raise KeyError(f"Column '{column}' not found in corpus.")
        return self.frame[column]

    def with_labels(self, labels: Sequence[Any], column: str) -> "Corpus":
        """Return a copy with `labels[i]` attached to document `i`."""
        if len(labels) != len(self):
            raise AlignmentError(
                "LABEL_COUNT_MISMATCH",
                msg.LABEL_COUNT_MISMATCH.format(labels=len(labels), docs=len(self)),
            )
        frame = self.frame.copy()
        frame[column] = list(labels)
        return Corpus(frame, text_column=self.text_column, id_column=self.id_column)
