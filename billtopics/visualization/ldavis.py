from __future__ import annotations
import logging
from pathlib import Path

import pyLDAvis
import pyLDAvis.gensim_models

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.topic_modeling.gensim_lda import GensimTopicModel

logger = logging.getLogger(__name__)


def save_ldavis(model: GensimTopicModel, dfm: DocumentFeatureMatrix, path: str | Path) -> str:
    """Interactive intertopic-distance view of a gensim model as standalone HTML."""
    bow, dictionary = dfm.to_gensim()
    vis_data = pyLDAvis.gensim_models.prepare(model.lda, bow, dictionary, sort_topics=False)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pyLDAvis.save_html(vis_data, str(path))
    logger.info(f"✅ LDA visualization saved to {path}")
    return str(path)
