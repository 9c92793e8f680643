from __future__ import annotations

from billtopics.core.topic_modeling.base import TopicModeler
from billtopics.core.topic_modeling.config import TopicModelConfig
from billtopics.core.topic_modeling.gensim_lda import GensimLDAModeler
from billtopics.core.topic_modeling.sklearn_lda import SklearnLDAModeler
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import PipelineConfigError


def build_topic_modeler(cfg: TopicModelConfig | None = None) -> TopicModeler:
    cfg = cfg or TopicModelConfig()
    if cfg.backend == "gensim":
        return GensimLDAModeler(cfg)
    if cfg.backend == "sklearn":
        return SklearnLDAModeler(cfg)
    raise PipelineConfigError(
        "UNKNOWN_BACKEND", msg.UNKNOWN_BACKEND.format(backend=cfg.backend)
    )
