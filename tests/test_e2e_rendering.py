"""
End-to-end rendering tests

Tests the full pipeline: markdown source → Compiler → HTML output, the
file and directory-tree operations, and the CLI pipeline stages.
"""

import pytest
from pathlib import Path
from loguru import logger

from fixrtm_macros.config import AppSettings
from fixrtm_macros.lib.compiler import Compiler, RenderError, sources_find
from fixrtm_macros.lib.log import LOG, state_connectToLogger
from fixrtm_macros.models import ProgramState, pipeline
from fixrtm_macros.__main__ import env_check, markdown_render, results_report


PAGE = """# Installing fixRTM

#!anchor versions
```#!versions
fixrtm=2.0.23
rtm=2.4.24
```

Report problems at github:fixrtm/fixRTM#1 or see [KaizPatchX](kaiz:).
"""


@pytest.fixture
def compiler():
    return Compiler(settings=AppSettings())


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    inputdir = tmp_path / "docs"
    (inputdir / "guide").mkdir(parents=True)
    (inputdir / "index.md").write_text(PAGE, encoding="utf-8")
    (inputdir / "guide" / "anchors.md").write_text("#!anchor top\n", encoding="utf-8")
    (inputdir / "notes.txt").write_text("not markdown", encoding="utf-8")
    return inputdir


class TestHtmlRender:
    """Rendering markdown strings"""

    def test_full_page(self, compiler):
        html = compiler.html_render(PAGE)

        assert "<h1>Installing fixRTM</h1>" in html
        assert '<span id="versions"></span>' in html
        assert "<tr><td>fixRTM</td><td>2.0.23</td></tr>" in html
        assert "<tr><td>RTM</td><td>2.4.24</td></tr>" in html
        assert '<a href="https://github.com/fixrtm/fixRTM/issues/1">github:fixrtm/fixRTM#1</a>' in html
        assert '<a href="https://github.com/Kai-Z-JP/KaizPatchX">KaizPatchX</a>' in html

    def test_linkify_disabled(self):
        compiler = Compiler(settings=AppSettings(), linkify=False)
        html = compiler.html_render("see fixrtm:#12\n\n[x](fixrtm:#12)")
        assert html.count("<a ") == 1
        assert "see fixrtm:#12" in html

    def test_tables_enabled(self, compiler):
        html = compiler.html_render("| a |\n|---|\n| b |\n")
        assert "<table>" in html

    def test_highlighted_code(self, compiler):
        html = compiler.html_render("```python\nx = 1\n```\n")
        assert '<pre><code class="language-python">' in html
        assert "<span" in html

    def test_untagged_code_escaped(self, compiler):
        html = compiler.html_render("```\n<x>\n```\n")
        assert html == "<pre><code>&lt;x&gt;\n</code></pre>\n"

    def test_unknown_language_plain(self, compiler):
        html = compiler.html_render("```no-such-language\nplain\n```\n")
        assert "plain" in html

    def test_highlight_disabled(self):
        compiler = Compiler(settings=AppSettings(highlight_code=False))
        html = compiler.html_render("```python\nx = 1\n```\n")
        assert html == '<pre><code class="language-python">x = 1\n</code></pre>\n'


class TestFileRender:
    """Rendering files and directory trees"""

    def test_sources_find(self, docs):
        found = sources_find(docs)
        assert found == [docs / "guide" / "anchors.md", docs / "index.md"]

    def test_sources_find_pattern(self, docs):
        assert sources_find(docs, "*.md") == [docs / "index.md"]

    def test_file_render(self, compiler, docs, tmp_path):
        output = compiler.file_render(docs / "index.md", tmp_path / "out" / "index.html")
        assert output.exists()
        assert "<h1>Installing fixRTM</h1>" in output.read_text(encoding="utf-8")

    def test_missing_source(self, compiler, tmp_path):
        with pytest.raises(RenderError, match="Failed to read"):
            compiler.file_render(tmp_path / "missing.md", tmp_path / "missing.html")

    def test_tree_render_keeps_layout(self, compiler, docs, tmp_path):
        outputdir = tmp_path / "site"
        result = compiler.tree_render(docs, outputdir)

        assert result["status"] is True
        assert result["count"] == 2
        assert (outputdir / "index.html").exists()
        assert (outputdir / "guide" / "anchors.html").read_text(encoding="utf-8") == \
            '<span id="top"></span>'

    def test_tree_render_suffix(self, compiler, docs, tmp_path):
        result = compiler.tree_render(docs, tmp_path / "site", output_suffix=".htm")
        assert all(path.endswith(".htm") for path in result["rendered"])


class TestSettings:
    """Environment configuration"""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FIXRTM_MACROS_ANCHOR_PREFIX", "#!a")
        settings = AppSettings()
        assert settings.anchor_prefix == "#!a"
        assert Compiler(settings=settings).html_render("#!a top\n") == '<span id="top"></span>'

    def test_defaults(self):
        settings = AppSettings()
        assert settings.versions_open_marker == "```#!versions"
        assert settings.versions_close_marker == "```"


class TestPipeline:
    """CLI pipeline stages"""

    def test_full_pipeline(self, docs, tmp_path):
        state = ProgramState(inputdir=docs, outputdir=tmp_path / "site", verbosity=0)
        final = pipeline(state, env_check, markdown_render, results_report)

        assert final.envOK is True
        assert final.renderResult["count"] == 2
        assert (tmp_path / "site" / "index.html").exists()

    def test_pattern_and_suffix(self, docs, tmp_path):
        state = ProgramState(
            inputdir=docs,
            outputdir=tmp_path / "site",
            verbosity=0,
            pattern="*.md",
            outputSuffix=".xhtml",
        )
        final = pipeline(state, env_check, markdown_render)
        assert final.renderResult["rendered"] == [str(tmp_path / "site" / "index.xhtml")]

    def test_no_linkify(self, docs, tmp_path):
        state = ProgramState(inputdir=docs, outputdir=tmp_path / "site", verbosity=0, noLinkify=True)
        pipeline(state, env_check, markdown_render)
        html = (tmp_path / "site" / "index.html").read_text(encoding="utf-8")
        assert "github:fixrtm/fixRTM#1 or" in html

    def test_missing_inputdir_exits(self, tmp_path):
        state = ProgramState(inputdir=tmp_path / "nope", outputdir=tmp_path / "out", verbosity=0)
        with pytest.raises(SystemExit):
            env_check(state)

    def test_no_sources_exits(self, tmp_path):
        state = ProgramState(inputdir=tmp_path, outputdir=tmp_path / "out", verbosity=0)
        with pytest.raises(SystemExit):
            env_check(state)

    def test_state_copy_independent(self, docs, tmp_path):
        state = ProgramState(inputdir=docs, outputdir=tmp_path / "site", verbosity=0)
        checked = env_check(state)
        assert state.envOK is False
        assert checked.envOK is True


class TestLogging:
    """Verbosity-gated LOG output"""

    def test_verbosity_threshold(self, docs, tmp_path):
        messages = []
        sink = logger.add(lambda message: messages.append(message.record["message"]))
        try:
            state_connectToLogger(ProgramState(inputdir=docs, outputdir=tmp_path, verbosity=2))
            LOG("shown", level=2)
            LOG("hidden", level=3)
        finally:
            logger.remove(sink)
            state_connectToLogger(None)
        assert messages == ["shown"]
