"""
Compiler for fixRTM wiki markdown to HTML

Builds a markdown-it instance with the macros plugin installed and renders
strings, single files or whole directory trees.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound

from ..config import AppSettings, appsettings
from .log import LOG
from .plugin import macros_plugin
from .shorthand import SchemaRegistry


class RenderError(Exception):
    """Raised when a markdown source cannot be read or its HTML written"""
    pass


def sources_find(inputdir: Path, pattern: Optional[str] = None,
                 settings: Optional[AppSettings] = None) -> List[Path]:
    """Markdown files under `inputdir` matching the input pattern, sorted"""
    pattern = pattern or (settings or appsettings).input_pattern
    return sorted(p for p in inputdir.glob(pattern) if p.is_file())


class Compiler:
    """
    Renders fixRTM wiki markdown to HTML

    Responsibilities:
    - Configure markdown-it (commonmark, tables, strikethrough, linkify)
    - Install shorthand links and the versions/anchor directives
    - Highlight fenced code with Pygments
    - Render files and directory trees
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        registry: Optional[SchemaRegistry] = None,
        linkify: Optional[bool] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            settings: Configuration (defaults to the global appsettings)
            registry: Shorthand schemas (defaults to the built-in registry)
            linkify: Override settings.linkify
        """
        self.settings = settings or appsettings
        self.registry = registry or SchemaRegistry.registry_createDefault()
        self.linkify = self.settings.linkify if linkify is None else linkify
        self.md = self.markdown_create()

    def markdown_create(self) -> MarkdownIt:
        """Configured markdown-it instance with the macros plugin"""
        options: Dict[str, Any] = {
            "html": self.settings.html,
            "linkify": self.linkify,
        }
        if self.settings.highlight_code:
            options["highlight"] = self.code_highlight

        md = MarkdownIt("commonmark", options).enable(["table", "strikethrough"])
        if self.linkify:
            md.enable("linkify")
        md.use(macros_plugin, settings=self.settings, registry=self.registry)
        return md

    def code_highlight(self, code: str, language: str, attrs: str) -> str:
        """
        Highlight a fenced code block

        Returns an empty string for untagged blocks so markdown-it falls back
        to its own escaped <pre><code> output.
        """
        if not language:
            return ""
        lexer: Lexer
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            LOG(f"No Pygments lexer for '{language}', using plain text", level=3)
            lexer = TextLexer()
        formatter = HtmlFormatter(style=self.settings.pygments_style, noclasses=True, nowrap=True)
        return highlight(code, lexer, formatter)

    def html_render(self, source: str, env: Optional[Dict[str, Any]] = None) -> str:
        """Render a markdown string to an HTML fragment"""
        return self.md.render(source, env)

    def file_render(self, source_file: Path, output_file: Path) -> Path:
        """
        Render one markdown file

        Raises:
            RenderError: If the source cannot be read or the output written
        """
        try:
            source = source_file.read_text(encoding="utf-8")
        except OSError as e:
            raise RenderError(f"Failed to read {source_file}: {e}") from e
        LOG(f"Read {len(source)} characters from {source_file.name}", level=2)

        html = self.html_render(source)

        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(html, encoding="utf-8")
        except OSError as e:
            raise RenderError(f"Failed to write {output_file}: {e}") from e
        LOG(f"Wrote {output_file}", level=2)
        return output_file

    def tree_render(
        self,
        inputdir: Path,
        outputdir: Path,
        sources: Optional[List[Path]] = None,
        output_suffix: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Render every markdown source below `inputdir` into `outputdir`

        Relative layout is preserved; each file's suffix is replaced by the
        output suffix.

        Returns:
            dict with status, rendered output paths and count
        """
        if sources is None:
            sources = sources_find(inputdir, settings=self.settings)
        suffix = output_suffix or self.settings.output_suffix

        rendered: List[str] = []
        for source_file in sources:
            relative = source_file.relative_to(inputdir)
            output_file = outputdir / relative.with_suffix(suffix)
            rendered.append(str(self.file_render(source_file, output_file)))

        return {
            'status': True,
            'rendered': rendered,
            'count': len(rendered),
        }
