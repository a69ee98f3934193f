"""
fixrtm_macros - fixRTM wiki markdown macros

Shorthand GitHub links and versions/anchor directives for markdown-it.
"""

__version__ = "1.0.0"

from .compiler import Compiler, RenderError
from .plugin import macros_plugin
from .shorthand import SchemaRegistry, ShorthandResolver, UnresolvableShorthandError
from .log import LOG, state_connectToLogger

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
