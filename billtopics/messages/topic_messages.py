# billtopics/messages/topic_messages.py

TEXT_COLUMN_MISSING = "Corpus snapshot has no '{column}' column."
UNSUPPORTED_SNAPSHOT = "Unsupported corpus snapshot format: {path}"
LABEL_COUNT_MISMATCH = "Got {labels} labels for a corpus of {docs} documents."
DOC_ORDER_MISMATCH = "Document-feature matrix rows are not aligned with the corpus."

INVALID_TOPIC_COUNT = "Topic count must be a positive integer, got {k}."
TOPIC_COUNT_EXCEEDS_TERMS = (
    "Topic count {k} exceeds the {terms} usable terms in the training matrix."
)
TOPIC_COUNT_EXCEEDS_DOCS = (
    "Topic count {k} exceeds the {docs} documents in the training matrix."
)
HEURISTIC_TOPIC_COUNT = "Topic-count heuristics need k >= 2, got {k}."
DUPLICATE_TOPIC_COUNTS = "Candidate topic counts contain duplicates: {ks}."
EMPTY_TOPIC_COUNTS = "No candidate topic counts given."
UNKNOWN_BACKEND = "Unknown topic model backend: {backend}"

TOO_FEW_FOLDS = "Need at least 2 folds, got {folds}."
TOO_FEW_DOCUMENTS = "Cannot split {docs} documents into {folds} folds."
UNKNOWN_FOLD_STRATEGY = "Unknown fold strategy: {strategy}"
SWEEP_FIT_FAILED = "Perplexity sweep failed at k={k}, fold={fold}: {error}"
UNKNOWN_ON_ERROR = "Unknown sweep failure mode '{mode}'; use 'raise' or 'skip'."

EMPTY_SEED_DICTIONARY = "Seed dictionary has no topics."
EMPTY_SEED_LIST = "Seed topic '{topic}' has no seed terms."
BLANK_SEED_TOPIC = "Seed topic names must be non-empty strings."
UNKNOWN_SEED_SELECTION = "Unknown seed selection strategy: {selection}"
CURATED_NEEDS_DFM = "Curated seed selection needs a document-feature matrix."
SEED_TOPICS_EXCEED_TERMS = (
    "Seeded model needs {k} topics but the matrix has only {terms} usable terms."
)
SEED_TOPICS_EXCEED_DOCS = (
    "Seeded model needs {k} topics but the matrix has only {docs} documents."
)
DUPLICATE_SEED_TOPIC = "Seed topic '{topic}' is listed more than once."

UNKNOWN_STEP = "Invalid step configuration: {step}"
STEP_NEEDS_STATE = "Step '{step}' needs '{key}' from an earlier step."
