"""
Block rule engine tests

Drives the fenced-block and single-line rule factories through real
markdown-it parsing: closing fences, auto-close at document and container
ends, over-indented and trailing-text close candidates, silent probing.
"""

import pytest
from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

from fixrtm_macros.lib.rules import blockRule_make, lineRule_make
from fixrtm_macros.models.rules import BlockRuleSpec, LineRuleSpec

PROBE = BlockRuleSpec(tag="probe", open_marker="```#!probe", close_marker="```", parser=lambda text: text)
NOTE = LineRuleSpec(tag="note", prefix="#!note", parser=lambda text: text.upper())
ALT = {"alt": ["paragraph", "reference", "blockquote", "list"]}


@pytest.fixture
def md():
    md = MarkdownIt("commonmark")
    md.block.ruler.before("fence", "probe", blockRule_make(PROBE), ALT)
    md.block.ruler.before("fence", "note", lineRule_make(NOTE), ALT)
    return md


def tokens_ofType(tokens, token_type):
    return [t for t in tokens if t.type == token_type]


class TestBlockRuleClosing:
    """Explicitly closed blocks"""

    def test_closed_block(self, md):
        tokens = md.parse("```#!probe\nline 1\nline 2\n```\nafter\n")
        probe = tokens[0]

        assert probe.type == "probe"
        assert probe.tag == "probe"
        assert probe.meta == "line 1\nline 2"
        assert probe.map == [0, 3]
        assert probe.markup == "```#!probe"
        assert probe.block is True

        # closing fence consumed, paragraph starts right after it
        paragraph = tokens_ofType(tokens, "paragraph_open")[0]
        assert paragraph.map == [4, 5]

    def test_info_is_rest_of_opening_line(self, md):
        tokens = md.parse("```#!probe  extra words\n```\n")
        assert tokens[0].info == "  extra words"

    def test_empty_block(self, md):
        """Zero content lines pass an empty string to the parser"""
        tokens = md.parse("```#!probe\n```\n")
        assert tokens[0].meta == ""
        assert tokens[0].map == [0, 1]

    def test_close_with_trailing_spaces(self, md):
        tokens = md.parse("```#!probe\nx\n```   \n")
        assert tokens[0].map == [0, 2]
        assert len(tokens) == 1

    def test_longer_close_fence_is_not_whitespace_tail(self, md):
        """```` has a non-space tail after ``` and does not close"""
        tokens = md.parse("```#!probe\n````\n```\n")
        assert tokens[0].meta == "````"
        assert tokens[0].map == [0, 2]


class TestBlockRuleCloseCandidates:
    """Lines that look like closing fences but are skipped"""

    def test_over_indented_close_ignored(self, md):
        tokens = md.parse("```#!probe\na\n  ```\nb\n```\n")
        assert tokens[0].meta == "a\n  ```\nb"
        assert tokens[0].map == [0, 4]

    def test_trailing_text_invalidates_close(self, md):
        tokens = md.parse("```#!probe\n``` not a close\n```\n")
        assert tokens[0].meta == "``` not a close"
        assert tokens[0].map == [0, 2]

    def test_other_lines_skipped(self, md):
        tokens = md.parse("```#!probe\n# heading\n- item\n```\n")
        assert tokens[0].meta == "# heading\n- item"
        assert len(tokens) == 1


class TestBlockRuleAutoClose:
    """Unterminated blocks end with their container"""

    def test_auto_close_at_document_end(self, md):
        source = "```#!probe\na\nb\n"
        tokens = md.parse(source)
        assert tokens[0].meta == "a\nb"
        # line range ends at endLine, the number of lines in the document
        assert tokens[0].map == [0, 3]
        assert len(tokens) == 1

    def test_auto_close_at_blockquote_end(self, md):
        tokens = md.parse("> ```#!probe\n> a\n\nafter\n")
        probe = tokens_ofType(tokens, "probe")[0]
        assert probe.meta == "a"
        assert probe.map == [0, 2]
        assert tokens_ofType(tokens, "paragraph_open")[0].map == [3, 4]

    def test_closed_inside_blockquote(self, md):
        """Container prefixes are not part of the content"""
        tokens = md.parse("> ```#!probe\n> a\n> ```\n")
        probe = tokens_ofType(tokens, "probe")[0]
        assert probe.meta == "a"
        assert probe.map == [0, 2]

    def test_outdented_line_ends_list_item(self, md):
        tokens = md.parse("- ```#!probe\n  a\nafter\n")
        probe = tokens_ofType(tokens, "probe")[0]
        assert probe.meta == "a"
        # the outdented line is left for the enclosing rules
        assert probe.map == [0, 2]
        assert "<p>after</p>" in md.render("- ```#!probe\n  a\nafter\n")


class TestBlockRuleRejects:
    """Lines that do not open the block"""

    def test_plain_fence_left_to_fence_rule(self, md):
        tokens = md.parse("```python\nx\n```\n")
        assert tokens[0].type == "fence"

    def test_partial_marker(self, md):
        tokens = md.parse("```#!pro\n```\n")
        assert not tokens_ofType(tokens, "probe")

    def test_marker_not_at_line_start(self, md):
        tokens = md.parse("text ```#!probe\n")
        assert not tokens_ofType(tokens, "probe")


class TestSilentMode:
    """Validation mode reports a match without side effects"""

    def test_silent_probe(self, md):
        state = StateBlock("```#!probe\na\n```\n", md, {}, [])
        rule = blockRule_make(PROBE)

        assert rule(state, 0, state.lineMax, True) is True
        assert state.tokens == []
        assert state.line == 0

    def test_silent_reject(self, md):
        state = StateBlock("plain\n", md, {}, [])
        assert blockRule_make(PROBE)(state, 0, state.lineMax, True) is False

    def test_interrupts_paragraph(self, md):
        tokens = md.parse("some text\n```#!probe\na\n```\n")
        assert [t.type for t in tokens] == [
            "paragraph_open", "inline", "paragraph_close", "probe",
        ]

    def test_line_rule_silent(self, md):
        state = StateBlock("#!note hi\n", md, {}, [])
        rule = lineRule_make(NOTE)
        assert rule(state, 0, state.lineMax, True) is True
        assert state.tokens == []


class TestLineRule:
    """Single-line directives"""

    def test_line_token(self, md):
        tokens = md.parse("#!note  hello world \n")
        note = tokens[0]

        assert note.type == "note"
        assert note.meta == "HELLO WORLD"
        assert note.info == "  hello world "
        assert note.map == [0, 0]
        assert note.markup == "#!note"

    def test_indented_line(self, md):
        tokens = md.parse("  #!note x\n")
        assert tokens[0].meta == "X"

    def test_advances_one_line(self, md):
        tokens = md.parse("#!note a\n#!note b\ntext\n")
        assert [t.meta for t in tokens_ofType(tokens, "note")] == ["A", "B"]
        assert tokens_ofType(tokens, "paragraph_open")[0].map == [2, 3]

    def test_interrupts_paragraph(self, md):
        tokens = md.parse("text\n#!note a\n")
        assert tokens[-1].type == "note"

    def test_prefix_required(self, md):
        tokens = md.parse("#! note\n")
        assert not tokens_ofType(tokens, "note")
