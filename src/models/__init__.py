"""
Models package for fixrtm_macros

Contains data structures and type definitions for the rendering pipeline.
"""

from .state import ProgramState, pipeline
from .rules import BlockRuleSpec, LineRuleSpec, VersionRow, ContentParser
from .shorthand import SchemaSpec, Schema, ShorthandMatch

__all__ = [
    "ProgramState",
    "pipeline",
    "BlockRuleSpec",
    "LineRuleSpec",
    "VersionRow",
    "ContentParser",
    "SchemaSpec",
    "Schema",
    "ShorthandMatch",
]
