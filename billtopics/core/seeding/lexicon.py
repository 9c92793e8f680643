from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import yaml

from billtopics.core.features.dfm import DocumentFeatureMatrix
from billtopics.core.seeding.config import LexiconSeedConfig
from billtopics.core.seeding.dictionary import SeedDictionary, match_term
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import InvalidSeedDictionaryError

logger = logging.getLogger(__name__)


def _flatten(node, prefix: str, out: Dict[str, List[str]]) -> None:
    if isinstance(node, Mapping):
        for key, child in node.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            _flatten(child, name, out)
    elif isinstance(node, (list, tuple)):
        out[prefix] = [str(t) for t in node]
    elif node is not None:
        out[prefix] = [str(node)]


def load_lexicon(path: str | Path) -> Dict[str, List[str]]:
    """
    Read a YAML category -> terms lexicon. Nested categories are flattened to
    dotted names ("macro.economy").
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    out: Dict[str, List[str]] = {}
    _flatten(raw, "", out)
    logger.info(f"Loaded lexicon with {len(out)} categories from {path}")
    return out


def _head(terms: Sequence[str], n: int) -> List[str]:
    return sorted(terms)[:n]


def _most_frequent(terms: Sequence[str], n: int, dfm: DocumentFeatureMatrix) -> List[str]:
    tf = dfm.term_frequencies().to_numpy()
    scored = []
    for position, term in enumerate(terms):
        freq = sum(tf[j] for j in match_term(term.lower(), dfm.vocabulary))
        if freq > 0:
            scored.append((-freq, position, term))
    return [term for _, _, term in sorted(scored)[:n]]


def seeds_from_lexicon(
    lexicon: Mapping[str, Sequence[str]],
    cfg: LexiconSeedConfig | None = None,
    dfm: Optional[DocumentFeatureMatrix] = None,
    categories: Optional[Sequence[str]] = None,
) -> SeedDictionary:
    """
    Cut a seed dictionary out of a large lexicon.

    "curated" keeps, per category, the lexicon terms that actually occur most
    in the matrix. "head" keeps the first n terms in alphabetical order; the
    result is flagged `positional`.
    """
    cfg = cfg or LexiconSeedConfig()
    names = list(categories) if categories is not None else list(lexicon)

    if cfg.selection == "head":
        topics = {name: tuple(_head(lexicon[name], cfg.n_terms)) for name in names}
        return SeedDictionary(topics, positional=True)
    if cfg.selection == "curated":
        if dfm is None:
            raise InvalidSeedDictionaryError("CURATED_NEEDS_DFM", msg.CURATED_NEEDS_DFM)
        topics = {
            name: tuple(_most_frequent(lexicon[name], cfg.n_terms, dfm)) for name in names
        }
        return SeedDictionary(topics)
    raise InvalidSeedDictionaryError(
        "UNKNOWN_SEED_SELECTION",
        msg.UNKNOWN_SEED_SELECTION.format(selection=cfg.selection),
    )
