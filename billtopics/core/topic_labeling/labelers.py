from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from billtopics.core.topic_labeling.base import TopicLabeler
from billtopics.core.topic_labeling.config import TopicLabelConfig

logger = logging.getLogger(__name__)


def _keywords(topic: dict) -> List[str]:
    return [w for w in (topic.get("keywords") or "").split(", ") if w]


def _keyword_label(topic: dict, cfg: TopicLabelConfig) -> str:
    words = _keywords(topic)[: cfg.num_keywords]
    return cfg.separator.join(words) if words else topic.get("label") or f"topic_{topic['topic_id']}"


def _enrich(topics: List[dict], labels: Dict[int, str], source: Dict[int, str]) -> List[dict]:
    return [
        {**t, "label": labels[int(t["topic_id"])], "matched_with": source[int(t["topic_id"])]}
        for t in topics
    ]


@dataclass
class ExplicitLabeler(TopicLabeler):
    """Hand-written names for some topics; the rest keep their model name."""

    cfg: TopicLabelConfig

    def label(
        self,
        topics: List[dict],
        *,
        explicit_map: Optional[Dict[int, str]] = None,
    ) -> Tuple[Dict[int, str], List[dict]]:
        if not explicit_map:
            raise ValueError("ExplicitLabeler requires `explicit_map`.")
        known = {int(t["topic_id"]) for t in topics}
        unused = sorted(set(explicit_map) - known)
        if unused:
            logger.warning(f"Explicit labels given for unknown topics: {unused}")

        labels: Dict[int, str] = {}
        source: Dict[int, str] = {}
        for t in topics:
            tid = int(t["topic_id"])
            if tid in explicit_map:
                labels[tid], source[tid] = explicit_map[tid], "explicit_map"
            else:
                labels[tid], source[tid] = t.get("label") or f"topic_{tid}", "model_name"
        return labels, _enrich(topics, labels, source)


@dataclass
class DefaultHeuristicLabeler(TopicLabeler):
    """Label = the topic's first `num_keywords` top terms."""

    cfg: TopicLabelConfig

    def label(
        self,
        topics: List[dict],
        *,
        explicit_map: Optional[Dict[int, str]] = None,
    ) -> Tuple[Dict[int, str], List[dict]]:
        labels = {int(t["topic_id"]): _keyword_label(t, self.cfg) for t in topics}
        # labels stay unique per topic
        seen: Dict[str, int] = {}
        for tid in sorted(labels):
            lbl = labels[tid]
            if lbl in seen:
                labels[tid] = f"{lbl} ({tid})"
            seen.setdefault(lbl, tid)
        source = {tid: "auto_generated" for tid in labels}
        return labels, _enrich(topics, labels, source)


def build_labeler(cfg: TopicLabelConfig | None = None) -> TopicLabeler:
    cfg = cfg or TopicLabelConfig()
    if cfg.strategy == "explicit":
        return ExplicitLabeler(cfg)
    return DefaultHeuristicLabeler(cfg)
