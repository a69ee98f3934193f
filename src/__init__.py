"""
fixrtm_macros - fixRTM wiki markdown macros

Extends markdown-it with a versions table block, an anchor directive and
github:/fixrtm:/kaiz:/anatawa12: shorthand links.
"""

__version__ = "1.0.0"

from .lib import (
    Compiler,
    RenderError,
    macros_plugin,
    SchemaRegistry,
    ShorthandResolver,
    UnresolvableShorthandError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Compiler",
    "RenderError",
    "macros_plugin",
    "SchemaRegistry",
    "ShorthandResolver",
    "UnresolvableShorthandError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
