"""
Verbosity-gated loguru output for the renderer

The command line connects its ProgramState once; after that the shorthand
registry, the directive rules, the plugin installer and the compiler report
through LOG() and are shown only up to the state's verbosity (-v repeats).
Used as a library, with no state connected, the plugin stays silent.

Usage:
    from fixrtm_macros.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Rendering markdown sources...", level=1)
    LOG("linkify: added 4 shorthand schemas", level=2)
    LOG("macro_versions: lines 3-7 closed", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running render, None outside the command line
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """Make `state.verbosity` the threshold for every later LOG() call"""
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit `message` when the connected state's verbosity reaches `level`.

    Args:
        message: Text to log
        level: 1 for pipeline progress, 2 for registry/plugin setup and
            per-file results, 3 for individual directive tokens
        **kwargs: Forwarded to loguru
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        # report the caller's function and line, not this wrapper's
        logger.opt(depth=1).debug(message, **kwargs)
