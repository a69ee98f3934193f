#!/usr/bin/env python3
"""
fixrtm_macros - render fixRTM wiki markdown to HTML

Renders every markdown page of an input directory with the fixRTM wiki
macros installed:

    - ```#!versions fenced blocks become a mod/version table
    - #!anchor <name> lines become empty anchor spans
    - github:, fixrtm:, kaiz: and anatawa12: shorthand references become
      https://github.com/... links, both as [text](fixrtm:#12) and as
      bare text

Usage:
    fixrtm-macros inputdir/ outputdir/

Examples:
    # Render every *.md below the current directory
    fixrtm-macros . output/

    # Only the top-level pages, keep shorthand text unlinked
    fixrtm-macros . output/ --pattern '*.md' --noLinkify

    # Verbose output
    fixrtm-macros . output/ -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import Compiler, RenderError, __version__, LOG, state_connectToLogger
from .lib.compiler import sources_find
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
   __ _      ____ _____ __  __
  / _(_)_  _|  _ \_   _|  \/  |   _ __ ___   __ _  ___ _ __ ___  ___
 | |_| \ \/ / |_) || | | |\/| |  | '_ ` _ \ / _` |/ __| '__/ _ \/ __|
 |  _| |>  <|  _ < | | | |  | |  | | | | | | (_| | (__| | | (_) \__ \
 |_| |_/_/\_\_| \_\|_| |_|  |_|  |_| |_| |_|\__,_|\___|_|  \___/|___/

  fixRTM wiki markdown renderer
"""

# Define CLI arguments
parser = ArgumentParser(
    description="fixrtm_macros - render fixRTM wiki markdown with shorthand links and macros",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=None,
    type=str,
    help="Glob (relative to inputdir) selecting markdown sources. Defaults to settings",
)

parser.add_argument(
    "--outputSuffix",
    default=None,
    type=str,
    help="Suffix of rendered files. Defaults to settings",
)

parser.add_argument(
    "--noLinkify",
    action="store_true",
    default=False,
    help="Do not turn bare shorthand references into links",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input directory and collect markdown sources.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - sourceFiles: Markdown files selected for rendering
            - envOK: True if environment is valid

    Exits:
        1 if the input directory does not exist or holds no sources
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.sourceFiles = sources_find(state.inputdir, state.pattern)
    if not state.sourceFiles:
        print(f"Error: No markdown sources found in {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Found {len(state.sourceFiles)} markdown sources", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def markdown_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the collected markdown sources to HTML.

    Args:
        inputstate: Program state with sourceFiles set

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing status, rendered, count

    Exits:
        1 if a source cannot be read or its output written
    """

    state = inputstate.copy()

    LOG("Rendering markdown sources...", level=1)

    try:
        compiler = Compiler(linkify=False if state.noLinkify else None)
        state.renderResult = compiler.tree_render(
            state.inputdir,
            state.outputdir,
            sources=state.sourceFiles,
            output_suffix=state.outputSuffix,
        )
        LOG(f"Rendering complete: {state.renderResult['count']} pages", level=2)
    except RenderError as e:
        print(f"Render error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Pages: {state.renderResult['count']}", level=1)
    for output_file in state.renderResult['rendered']:
        LOG(f"  {output_file}", level=2)
    return state


@chris_plugin(
    parser=parser,
    title="fixrtm_macros - fixRTM wiki markdown renderer",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render fixRTM wiki markdown pages to HTML.

    Orchestrates the rendering pipeline:
        1. env_check: Validate paths and collect sources
        2. markdown_render: Render each source with the macros installed
        3. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, markdown_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
