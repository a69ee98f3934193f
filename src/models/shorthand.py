"""
Shorthand reference models

Immutable records describing a shorthand schema (its prefix and fixed
defaults) and the structured result of matching one of its grammars.
"""

from dataclasses import dataclass
from re import Pattern
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class SchemaSpec:
    """
    Fixed configuration of one shorthand schema

    Attributes:
        prefix: Scheme prefix including the colon (e.g., "fixrtm:")
        default_user: User substituted when the reference omits it
        default_repo: Repository substituted when the reference omits it
        description: Human-readable description (documentation only)

    Example:
        SchemaSpec("kaiz:", "Kai-Z-JP", "KaizPatchX")
        makes "kaiz:#12" mean issue 12 of Kai-Z-JP/KaizPatchX
    """
    prefix: str
    default_user: Optional[str] = None
    default_repo: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class Schema:
    """
    A schema together with its ordered grammar patterns

    Built once by the grammar builder; `grammars` are tried in order and
    the first one that matches wins.
    """
    spec: SchemaSpec
    grammars: Tuple[Pattern[str], ...]

    @property
    def prefix(self) -> str:
        return self.spec.prefix


@dataclass(frozen=True)
class ShorthandMatch:
    """
    Named-group record recovered from one grammar match

    At most one of `issue`/`commit` is set; `path` only accompanies
    `commit`; `hash` keeps its leading '#'.

    Example:
        "anatawa12/fixrtm#42" against the generic grammar:
        ShorthandMatch(user="anatawa12", repo="fixrtm", issue="42", length=18)
    """
    length: int
    user: Optional[str] = None
    repo: Optional[str] = None
    issue: Optional[str] = None
    commit: Optional[str] = None
    path: Optional[str] = None
    hash: Optional[str] = None

    @classmethod
    def match_fromGroups(cls, length: int, groups: Dict[str, Optional[str]]) -> "ShorthandMatch":
        """Build a record from a `re.Match.groupdict()`"""
        known = ("user", "repo", "issue", "commit", "path", "hash")
        return cls(length=length, **{key: groups.get(key) for key in known})
