from typing import Optional


class TopicModelingError(Exception):
    """Base error carrying a machine-readable code and a readable message."""

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        self.message = message or "An error occurred"
        super().__init__(f"[{self.code}] {self.message}")

    def __reduce__(self):
        # joblib workers pickle exceptions back to the parent process
        return (self.__class__, (self.code, self.message))


class CorpusError(TopicModelingError):
    """Corpus snapshot could not be read or is malformed."""


class AlignmentError(TopicModelingError):
    """Corpus and document-feature matrix disagree on documents."""


class InvalidTopicCountError(TopicModelingError):
    """Topic count is unusable for the matrix it would be fitted on."""


class FoldAssignmentError(TopicModelingError):
    """Documents cannot be partitioned into the requested folds."""


class SweepFailedError(TopicModelingError):
    """A single (k, fold) fit failed and aborted the perplexity sweep."""

    def __init__(self, k: int, fold: int, message: Optional[str] = None):
        self.k = k
        self.fold = fold
        super().__init__(code="SWEEP_FIT_FAILED", message=message)

    def __reduce__(self):
        return (self.__class__, (self.k, self.fold, self.message))


class InvalidSeedDictionaryError(TopicModelingError):
    """Seed dictionary rejected before reaching the seeded fitter."""


class PipelineConfigError(TopicModelingError):
    """Pipeline YAML refers to a missing step or state, or sets an unknown option."""
