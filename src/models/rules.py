"""
Block rule configuration models

Configuration records handed to the rule factories, plus the row layout
used by the versions table renderer.
"""

from dataclasses import dataclass
from typing import Any, Callable


# Parses the text collected by a rule into the token's `meta`
ContentParser = Callable[[str], Any]


@dataclass(frozen=True)
class BlockRuleSpec:
    """
    Specification for a fenced block directive

    Attributes:
        tag: Token type/tag emitted on a match (also the renderer rule name)
        open_marker: Marker the opening line must start with
        close_marker: Marker a closing line must consist of
        parser: Callback turning the enclosed lines into token meta

    Example:
        BlockRuleSpec("macro_versions", "```#!versions", "```", versions_parse)
    """
    tag: str
    open_marker: str
    close_marker: str
    parser: ContentParser


@dataclass(frozen=True)
class LineRuleSpec:
    """
    Specification for a single-line directive

    Attributes:
        tag: Token type/tag emitted on a match
        prefix: Text the line must start with after indentation
        parser: Callback turning the trimmed remainder into token meta
    """
    tag: str
    prefix: str
    parser: ContentParser


@dataclass(frozen=True)
class VersionRow:
    """
    One row of the rendered versions table

    Attributes:
        key: Key looked up in the parsed table (case-sensitive)
        name: Display name in the first column
        always: Render "not available" when the key is absent
    """
    key: str
    name: str
    always: bool = False
