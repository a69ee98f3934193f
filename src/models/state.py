"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, outputSuffix, noLinkify
        - env_check: sourceFiles, envOK
        - markdown_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing markdown sources
        outputdir: Directory receiving rendered HTML
        verbosity: Logging verbosity level (1-3)
        pattern: Optional glob overriding the configured input pattern
        outputSuffix: Optional suffix overriding the configured output suffix
        noLinkify: Disable bare-text shorthand autolinks
        envOK: Environment validation passed
        sourceFiles: Markdown files selected for rendering
        renderResult: Rendering results (status, rendered, count)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: Optional[str] = field(default=None)
    outputSuffix: Optional[str] = field(default=None)
    noLinkify: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    sourceFiles: List[Path] = field(default_factory=list)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (pattern, outputSuffix, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendering output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(initial_state, env_check, markdown_render, results_report)

    This is equivalent to:
        results_report(markdown_render(env_check(initial_state)))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
