"""
Block rule factories for markdown-it

Turn a BlockRuleSpec or LineRuleSpec into a function with markdown-it's
block rule signature:

    rule(state, startLine, endLine, silent) -> bool

A rule returns False when the line does not open its directive, letting
lower-priority rules (fence, paragraph, ...) take the line. In silent mode
it only reports whether the line opens the directive; this is how
paragraphs, lists and blockquotes probe for interruptions.

Fenced blocks:

    ```#!versions        <- opening line, text after the marker is `info`
    fixrtm=2.0.23        <- content lines, passed joined to the parser
    ```                  <- optional closing line

A missing closing fence is not an error: the block ends at the end of
its container (document, list item, blockquote).
"""

from typing import Callable

from markdown_it.rules_block import StateBlock

from ..models.rules import BlockRuleSpec, LineRuleSpec
from .log import LOG

BlockRule = Callable[[StateBlock, int, int, bool], bool]


def marker_startsAt(state: StateBlock, pos: int, marker: str) -> bool:
    """Check the first character quickly, then the full marker"""
    if not marker or state.src[pos:pos + 1] != marker[0]:
        return False
    return state.src.startswith(marker, pos)


def blockRule_make(spec: BlockRuleSpec) -> BlockRule:
    """
    Factory for fenced block rules

    Args:
        spec: Tag, open/close markers and content parser of the block

    Returns:
        A markdown-it block rule emitting one `spec.tag` token per block
    """
    open_marker = spec.open_marker
    close_marker = spec.close_marker

    def rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        start = state.bMarks[startLine] + state.tShift[startLine]
        maximum = state.eMarks[startLine]

        if not marker_startsAt(state, start, open_marker):
            return False

        markup = open_marker
        params = state.src[start + len(open_marker):maximum]

        if silent:
            return True

        nextLine = startLine
        closed = False

        while True:
            nextLine += 1
            if nextLine >= endLine:
                # end of document or of the enclosing container
                break

            start = state.bMarks[nextLine] + state.tShift[nextLine]
            maximum = state.eMarks[nextLine]

            if start < maximum and state.sCount[nextLine] < state.blkIndent:
                # non-empty line with negative indent should stop the list:
                # - ```#!versions
                #  test
                break

            if not marker_startsAt(state, start, close_marker):
                continue

            if state.sCount[nextLine] > state.sCount[startLine]:
                # closing fence should not be indented with respect of opening fence
                continue

            # make sure tail has spaces only
            if state.skipSpaces(start + len(close_marker)) < maximum:
                continue

            closed = True
            break

        contents = state.getLines(startLine + 1, nextLine, state.blkIndent, False)

        token = state.push(spec.tag, spec.tag, 0)
        token.meta = spec.parser(contents)
        token.block = True
        token.info = params
        token.map = [startLine, nextLine]
        token.markup = markup

        state.line = nextLine + (1 if closed else 0)

        LOG(f"{spec.tag}: lines {startLine}-{nextLine} "
            f"({'closed' if closed else 'auto-closed'})", level=3)
        return True

    rule.__name__ = f"{spec.tag}_rule"
    return rule


def lineRule_make(spec: LineRuleSpec) -> BlockRule:
    """
    Factory for single-line directive rules

    The line must start (after indentation) with `spec.prefix`; the rest of
    the line is the token's `info`, and its trimmed form is parsed into meta.
    """
    prefix = spec.prefix

    def rule(state: StateBlock, startLine: int, _endLine: int, silent: bool) -> bool:
        start = state.bMarks[startLine] + state.tShift[startLine]
        maximum = state.eMarks[startLine]

        if not marker_startsAt(state, start, prefix):
            return False

        params = state.src[start + len(prefix):maximum]

        if silent:
            return True

        token = state.push(spec.tag, spec.tag, 0)
        token.meta = spec.parser(params.strip())
        token.block = True
        token.info = params
        token.map = [startLine, startLine]
        token.markup = prefix

        state.line = startLine + 1

        LOG(f"{spec.tag}: line {startLine}", level=3)
        return True

    rule.__name__ = f"{spec.tag}_rule"
    return rule
