from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Literal


# Words every bill uses regardless of its subject
LEGISLATIVE_STOPWORDS: FrozenSet[str] = frozenset(
    {
        # bill structure
        "act", "acts", "bill", "bills", "section", "sections", "subsection",
        "subsections", "paragraph", "paragraphs", "subparagraph", "clause",
        "clauses", "title", "titles", "chapter", "part", "division", "text",
        "heading", "item", "table", "contents", "short", "cited",
        # enacting and amending language
        "enacted", "enact", "amend", "amended", "amending", "amendment",
        "amendments", "insert", "inserting", "inserted", "strike", "striking",
        "stricken", "redesignate", "redesignating", "redesignated", "adding",
        "add", "end", "following", "preceding", "new", "read", "reads",
        "follows", "thereof", "therein", "thereto", "thereunder", "herein",
        "hereby", "hereof", "whereas", "pursuant", "provided", "provision",
        "provisions", "except", "otherwise", "applicable", "respectively",
        "described", "referred", "specified", "term", "terms", "means",
        "including", "include", "includes", "shall", "may", "must",
        # legislative bodies and actors
        "congress", "congressional", "senate", "house", "representatives",
        "representative", "senator", "assembled", "session", "committee",
        "committees", "secretary", "united", "states", "state", "federal",
        "government", "law", "laws", "public", "code", "usc", "sec", "stat",
        # calendar and counting noise
        "year", "years", "fiscal", "date", "day", "days", "month", "months",
        "first", "second", "third", "one", "two", "three", "four", "five",
        "appropriated", "appropriations", "authorized", "authorization",
        "sums", "necessary", "purposes", "purpose", "effective",
    }
)


@dataclass(frozen=True)
class StopwordConfig:
    source: Literal["nltk", "sklearn"] = "nltk"  # base English list
    language: str = "english"  # nltk only
    include_legislative: bool = True
    custom_stopwords: FrozenSet[str] = field(default_factory=frozenset)
    exclude_stopwords: FrozenSet[str] = field(
        default_factory=frozenset
    )  # words to keep even if listed
    lowercase: bool = True
