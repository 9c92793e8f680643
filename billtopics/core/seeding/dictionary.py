from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Dict, List, Mapping, Sequence, Tuple

from billtopics.core.stemming.base import Stemmer
from billtopics.messages import topic_messages as msg
from billtopics.utils.exceptions import InvalidSeedDictionaryError

logger = logging.getLogger(__name__)

_GLOB_CHARS = set("*?[")


def is_pattern(term: str) -> bool:
    return any(c in _GLOB_CHARS for c in term)


def match_term(pattern: str, vocabulary: Sequence[str]) -> List[int]:
    """Column indices of `vocabulary` matched by one seed ("tax*" is a prefix)."""
    if not is_pattern(pattern):
        return [j for j, v in enumerate(vocabulary) if v == pattern]
    return [j for j, v in enumerate(vocabulary) if fnmatchcase(v, pattern)]


@dataclass(frozen=True)
class SeedDictionary:
    """
    Topic name -> ordered seed terms.

    Seeds are lowercased; a trailing `*` matches any vocabulary term with
    that prefix. Empty dictionaries and topics without seeds are rejected
    here, before any fitter sees them. `positional` marks dictionaries cut
    from a sorted lexicon by position rather than chosen for meaning.
    """

    topics: Dict[str, Tuple[str, ...]]
    positional: bool = False

    def __post_init__(self):
        if not self.topics:
            raise InvalidSeedDictionaryError("EMPTY_SEED_DICTIONARY", msg.EMPTY_SEED_DICTIONARY)
        cleaned: Dict[str, Tuple[str, ...]] = {}
        for name, terms in self.topics.items():
            if not isinstance(name, str) or not name.strip():
                raise InvalidSeedDictionaryError("BLANK_SEED_TOPIC", msg.BLANK_SEED_TOPIC)
            if isinstance(terms, str):
                terms = [terms]
            seeds = tuple(
                dict.fromkeys(str(t).strip().lower() for t in terms if str(t).strip())
            )
            if not seeds:
                raise InvalidSeedDictionaryError(
                    "EMPTY_SEED_LIST", msg.EMPTY_SEED_LIST.format(topic=name)
                )
            if name.strip() in cleaned:
                raise InvalidSeedDictionaryError(
                    "DUPLICATE_SEED_TOPIC", msg.DUPLICATE_SEED_TOPIC.format(topic=name.strip())
                )
            cleaned[name.strip()] = seeds
        object.__setattr__(self, "topics", cleaned)

        counts = Counter(t for seeds in cleaned.values() for t in seeds)
        shared = sorted(t for t, c in counts.items() if c > 1)
        if shared:
            logger.warning(f"Seed terms listed under several topics: {shared}")
        if self.positional:
            logger.warning(
                "Seed dictionary was cut by position from a sorted lexicon; "
                "expect incoherent seeded topics"
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "SeedDictionary":
        return cls({str(k): tuple(v or ()) for k, v in mapping.items()})

    @property
    def names(self) -> List[str]:
        return list(self.topics)

    def __len__(self) -> int:
        return len(self.topics)

    def matches(self, vocabulary: Sequence[str]) -> Dict[str, List[int]]:
        """Per topic, the sorted vocabulary columns matched by any of its seeds."""
        out: Dict[str, List[int]] = {}
        for name, seeds in self.topics.items():
            cols = set()
            for s in seeds:
                cols.update(match_term(s, vocabulary))
            out[name] = sorted(cols)
        return out

    def stemmed(self, stemmer: Stemmer) -> "SeedDictionary":
        """Stem literal seeds so they match a stemmed vocabulary; patterns stay."""
        topics = {
            name: tuple(s if is_pattern(s) else stemmer.stem([s])[0] for s in seeds)
            for name, seeds in self.topics.items()
        }
        return SeedDictionary(topics, positional=self.positional)
