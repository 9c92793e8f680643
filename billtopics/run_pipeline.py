import argparse
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict

import yaml

from billtopics.core.config import settings
from billtopics.core.corpus.config import CorpusConfig
from billtopics.core.corpus.store import CorpusStore
from billtopics.core.eda.config import EDAConfig
from billtopics.core.eda.eda_analyzer import DfmEDAAnalyzer
from billtopics.core.features.builder import DfmBuilder
from billtopics.core.features.config import DfmConfig
from billtopics.core.file_handler.storage import LocalStorage
from billtopics.core.seeding.config import LexiconSeedConfig, SeededModelConfig
from billtopics.core.seeding.dictionary import SeedDictionary, is_pattern
from billtopics.core.seeding.lexicon import load_lexicon, seeds_from_lexicon
from billtopics.core.topic_labeling.assignment import topic_crosstab
from billtopics.core.topic_labeling.config import TopicLabelConfig
from billtopics.core.topic_labeling.labelers import build_labeler
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.factory import build_topic_modeler
from billtopics.core.topic_modeling.gensim_lda import GensimTopicModel
from billtopics.core.validation.config import (
    FoldConfig,
    SweepConfig,
    TopicEstimationConfig,
)
from billtopics.messages import topic_messages as msg
from billtopics.services.preprocess import build_preprocessor
from billtopics.services.seeded_topic_service import SeededTopicService
from billtopics.services.topic_modeling_service import TopicModelingService
from billtopics.services.validation_service import ValidationService
from billtopics.utils.exceptions import PipelineConfigError
from billtopics.utils.log_config import setup_logging
from billtopics.visualization.ldavis import save_ldavis
from billtopics.visualization.plots import (
    plot_heuristics,
    plot_perplexity,
    plot_top_terms,
    plot_topic_crosstab,
)

logger = logging.getLogger(__name__)

State = Dict[str, Any]


def _require(state: State, step: str, key: str):
    if key not in state:
        raise PipelineConfigError(
            "STEP_NEEDS_STATE", msg.STEP_NEEDS_STATE.format(step=step, key=key)
        )
    return state[key]


def _model_cfg(action: Dict[str, Any]) -> TopicModelConfig:
    options = {"random_state": settings.RANDOM_STATE, **action.get("model", {})}
    return TopicModelConfig(**options)


def _candidate_ks(action: Dict[str, Any]):
    ks = action.get("candidate_ks")
    if isinstance(ks, dict):
        return list(range(ks["start"], ks["stop"] + 1, ks.get("step", 1)))
    return list(ks or [])


# ---------- steps ----------


def step_load_corpus(action, state: State, out: Path) -> None:
    cfg = CorpusConfig(
        text_column=action.get("text_column", "text"),
        id_column=action.get("id_column", "doc_id"),
    )
    store = CorpusStore(LocalStorage(action.get("data_dir", settings.DATA_DIR)), cfg)
    state["corpus"] = store.load(action["file_input"])


def step_preprocess(action, state: State, out: Path) -> None:
    corpus = _require(state, "preprocess", "corpus")
    preprocessor = build_preprocessor(action.get("options"))
    state["preprocessor"] = preprocessor
    state["tokens"] = preprocessor.process_corpus(corpus)


def step_build_dfm(action, state: State, out: Path) -> None:
    corpus = _require(state, "build_dfm", "corpus")
    tokens = _require(state, "build_dfm", "tokens")
    state["dfm"] = DfmBuilder(DfmConfig(**action.get("options", {}))).build(
        tokens, corpus.doc_ids
    )


def step_eda(action, state: State, out: Path) -> None:
    dfm = _require(state, "eda", "dfm")
    corpus = _require(state, "eda", "corpus")
    cfg = EDAConfig(
        top_features=action.get("top_features", 30),
        covariates=tuple(action.get("covariates", ["party"])),
    )
    report = DfmEDAAnalyzer(cfg).analyze(dfm, corpus)
    path = out / action.get("file_output", "eda.json")
    path.write_text(json.dumps(report, indent=2))
    logger.info(f"✅ EDA saved to {path}")


def step_heuristics(action, state: State, out: Path) -> None:
    dfm = _require(state, "heuristics", "dfm")
    service = ValidationService(
        build_topic_modeler(_model_cfg(action)),
        est_cfg=TopicEstimationConfig(
            method=action.get("method", "griffiths2004"),
            n_jobs=action.get("n_jobs", settings.N_JOBS),
        ),
    )
    result = service.validate(dfm, _candidate_ks(action), run_sweep=False)
    result.heuristics.to_csv(out / "topic_count_heuristics.csv", index=False)
    plot_heuristics(result.heuristics, out / "topic_count_heuristics.png")
    state["heuristics"] = result.heuristics
    if result.best_k is not None:
        state.setdefault("best_k", result.best_k)


def step_cv_perplexity(action, state: State, out: Path) -> None:
    dfm = _require(state, "cv_perplexity", "dfm")
    folds = FoldConfig(
        n_folds=action.get("n_folds", 5),
        strategy=action.get("fold_strategy", "random"),
        random_state=action.get("fold_seed", settings.RANDOM_STATE),
    )
    sweep_cfg = SweepConfig(
        folds=folds,
        n_jobs=action.get("n_jobs", settings.N_JOBS),
        on_error=action.get("on_error", "raise"),
    )
    service = ValidationService(
        build_topic_modeler(_model_cfg(action)),
        sweep_cfg=sweep_cfg,
        est_cfg=TopicEstimationConfig(method="perplexity"),
    )
    result = service.validate(dfm, _candidate_ks(action), run_heuristics=False)
    sweep = result.sweep
    sweep.table.to_csv(out / "cv_perplexity.csv", index=False)
    sweep.summary().to_csv(out / "cv_perplexity_summary.csv", index=False)
    if not sweep.table.empty:
        plot_perplexity(sweep.table, out / "cv_perplexity.png")
    state["sweep"] = sweep
    if result.best_k is not None:
        state["best_k"] = result.best_k


def step_fit_lda(action, state: State, out: Path) -> None:
    dfm = _require(state, "fit_lda", "dfm")
    corpus = _require(state, "fit_lda", "corpus")
    k = action.get("num_topics", "auto")
    if k == "auto":
        k = _require(state, "fit_lda", "best_k")

    cfg = _model_cfg(action)
    explicit = action.get("labels")
    labeler = build_labeler(
        TopicLabelConfig(strategy="explicit" if explicit else "default")
    )
    service = TopicModelingService(build_topic_modeler(cfg), labeler, cfg)
    result = service.run(
        dfm,
        corpus,
        int(k),
        explicit_labels={int(i): v for i, v in (explicit or {}).items()},
    )
    result.top_terms.to_csv(out / f"top_terms_k{k}.csv", index=False)
    plot_top_terms(result.top_terms, out / f"top_terms_k{k}.png")
    if action.get("ldavis", False) and isinstance(result.model, GensimTopicModel):
        save_ldavis(result.model, dfm, out / f"lda_visualization_k{k}.html")
    state["corpus"] = result.corpus
    state["model"] = result.model


def step_crosstab(action, state: State, out: Path) -> None:
    corpus = _require(state, "crosstab", "corpus")
    column = action.get("topic_column", "topic")
    by = action.get("by", "party")
    table = topic_crosstab(corpus, column, by)
    table.to_csv(out / f"{column}_by_{by}.csv")
    plot_topic_crosstab(table, out / f"{column}_by_{by}.png")


def step_seeded_lda(action, state: State, out: Path) -> None:
    dfm = _require(state, "seeded_lda", "dfm")
    corpus = _require(state, "seeded_lda", "corpus")

    stemmer = None
    if action.get("stem_seeds", False):
        stemmer = _require(state, "seeded_lda", "preprocessor").stemmer

    if "lexicon" in action:
        lexicon_path = Path(action["lexicon"])
        if not lexicon_path.is_absolute():
            lexicon_path = Path(action.get("data_dir", settings.DATA_DIR)) / lexicon_path
        lexicon = load_lexicon(lexicon_path)
        if stemmer is not None:
            # curated selection matches against the stemmed vocabulary
            lexicon = {
                name: [t if is_pattern(t) else stemmer.stem([t.lower()])[0] for t in terms]
                for name, terms in lexicon.items()
            }
        seeds = seeds_from_lexicon(
            lexicon,
            LexiconSeedConfig(
                n_terms=action.get("n_terms", 10),
                selection=action.get("selection", "curated"),
            ),
            dfm=dfm,
            categories=action.get("categories"),
        )
    else:
        seeds = SeedDictionary.from_mapping(action.get("seeds") or {})
        if stemmer is not None:
            seeds = seeds.stemmed(stemmer)

    service = SeededTopicService(
        SeededModelConfig(**action.get("options", {})), _model_cfg(action)
    )
    result = service.run(dfm, corpus, seeds)
    result.top_terms.to_csv(out / "seeded_top_terms.csv", index=False)
    result.coverage.to_csv(out / "seed_coverage.csv", index=False)
    result.recall.to_csv(out / "seed_recall.csv", index=False)
    plot_top_terms(result.top_terms, out / "seeded_top_terms.png")
    state["corpus"] = result.corpus
    state["seeded_model"] = result.model


def step_save_corpus(action, state: State, out: Path) -> None:
    corpus = _require(state, "save_corpus", "corpus")
    key = action.get("file_output", "bills_with_topics.csv")
    CorpusStore(LocalStorage(out)).save(corpus, key)


STEP_HANDLERS: Dict[str, Callable[[Dict[str, Any], State, Path], None]] = {
    "load_corpus": step_load_corpus,
    "preprocess": step_preprocess,
    "build_dfm": step_build_dfm,
    "eda": step_eda,
    "heuristics": step_heuristics,
    "cv_perplexity": step_cv_perplexity,
    "fit_lda": step_fit_lda,
    "crosstab": step_crosstab,
    "seeded_lda": step_seeded_lda,
    "save_corpus": step_save_corpus,
}


def run_pipeline(config: Dict[str, Any]) -> State:
    out = Path(config.get("output_dir") or settings.OUTPUT_DIR)
    out.mkdir(parents=True, exist_ok=True)
    state: State = {}

    for action in config["steps"]["actions"]:
        step_type = action["type"]
        if not action.get("is_execute", False):
            logger.info(f"Skipping step: {step_type}")
            continue

        handler = STEP_HANDLERS.get(step_type)
        if handler is None:
            logger.warning(msg.UNKNOWN_STEP.format(step=step_type))
            continue

        logger.info(f"Running step: {step_type}...")
        start_time = time.time()
        try:
            handler(action, state, out)
        except Exception:
            logger.error(f"Step {step_type} failed. Exiting pipeline.")
            raise
        elapsed_time = time.time() - start_time
        logger.info(f"✅ Step {step_type} completed in {elapsed_time:.2f} seconds.")

    logger.info("Pipeline execution completed.")
    return state


def load_config(path: str | Path) -> Dict[str, Any]:
    with open(path, "r") as file:
        return yaml.safe_load(file)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the bill topic-model pipeline")
    parser.add_argument(
        "--config", type=str, default=settings.PIPELINE_CONFIG, help="Pipeline YAML"
    )
    args = parser.parse_args(argv)

    setup_logging()
    run_pipeline(load_config(args.config))


if __name__ == "__main__":
    main()
