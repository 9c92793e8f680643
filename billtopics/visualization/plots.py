from __future__ import annotations
import logging
import math
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from billtopics.core.validation.heuristics import METRIC_DIRECTIONS, normalize_metrics
from billtopics.core.validation.perplexity_sweep import summarize_perplexity

logger = logging.getLogger(__name__)


def _save(fig, path: str | Path) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    logger.info(f"📊 Plot saved to {path}")
    return str(path)


def plot_perplexity(table: pd.DataFrame, path: str | Path) -> str:
    """Mean (± std) held-out perplexity per k, next to one line per fold."""
    summary = summarize_perplexity(table)
    fig, (ax_mean, ax_folds) = plt.subplots(1, 2, figsize=(12, 4.5), sharey=True)

    ax_mean.errorbar(
        summary["k"], summary["mean"], yerr=summary["std"].fillna(0), marker="o", capsize=3
    )
    ax_mean.set_title("Mean held-out perplexity")
    ax_mean.set_xlabel("Number of topics (k)")
    ax_mean.set_ylabel("Perplexity")

    sns.lineplot(
        data=table, x="k", y="perplexity", hue="fold", marker="o", palette="tab10", ax=ax_folds
    )
    ax_folds.set_title("Held-out perplexity by fold")
    ax_folds.set_xlabel("Number of topics (k)")
    return _save(fig, path)


def plot_heuristics(table: pd.DataFrame, path: str | Path) -> str:
    """Min-max scaled heuristics, split by the direction that marks a good k."""
    scaled = normalize_metrics(table)
    fig, axes = plt.subplots(2, 1, figsize=(8, 7), sharex=True)
    for ax, direction in zip(axes, ("minimize", "maximize")):
        for name, d in METRIC_DIRECTIONS.items():
            if d == direction and name in scaled.columns:
                ax.plot(scaled["k"], scaled[name], marker="o", label=name)
        ax.set_title(direction.capitalize())
        ax.set_ylabel("Scaled metric")
        ax.legend()
    axes[-1].set_xlabel("Number of topics (k)")
    return _save(fig, path)


def plot_topic_crosstab(crosstab: pd.DataFrame, path: str | Path, title: str = "") -> str:
    """Stacked bars: documents per topic, split by a covariate."""
    fig, ax = plt.subplots(figsize=(10, 5))
    crosstab.plot(kind="bar", stacked=True, ax=ax)
    ax.set_title(title or f"Documents per topic by {crosstab.columns.name}")
    ax.set_xlabel("Topic")
    ax.set_ylabel("Documents")
    ax.legend(title=crosstab.columns.name)
    return _save(fig, path)


def plot_top_terms(top_terms: pd.DataFrame, path: str | Path, n_cols: int = 3) -> str:
    """One horizontal bar panel of term weights per topic."""
    topics = list(dict.fromkeys(top_terms["topic"]))
    n_rows = max(1, math.ceil(len(topics) / n_cols))
    fig, axes = plt.subplots(
        n_rows, n_cols, figsize=(4 * n_cols, 3 * n_rows), squeeze=False
    )
    for ax, topic in zip(axes.flat, topics):
        rows = top_terms[top_terms["topic"] == topic].sort_values("rank", ascending=False)
        ax.barh(rows["term"], rows["weight"], color="steelblue")
        ax.set_title(str(topic))
    for ax in list(axes.flat)[len(topics):]:
        ax.axis("off")
    return _save(fig, path)
