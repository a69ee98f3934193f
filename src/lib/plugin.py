"""
markdown-it plugin installing the fixRTM wiki macros

Usage:
    >>> from markdown_it import MarkdownIt
    >>> md = MarkdownIt("commonmark", {"linkify": True}).enable("linkify")
    >>> md.use(macros_plugin)
    >>> md.render("[issue](fixrtm:#12)")
    '<p><a href="https://github.com/fixrtm/fixRTM/issues/12">issue</a></p>\\n'
"""

from typing import Optional

from markdown_it import MarkdownIt

from ..config import AppSettings, appsettings
from ..models.rules import BlockRuleSpec, LineRuleSpec
from .adapters import LinkifyAdapter, MarkdownAdapter
from .log import LOG
from .macros import anchor_parse, anchor_renderRule, versions_parse, versions_renderRule
from .rules import blockRule_make, lineRule_make
from .shorthand import SchemaRegistry

VERSIONS_TAG = "macro_versions"
ANCHOR_TAG = "macro_anchor"

# Containers whose content a directive line may interrupt
ALT_RULES = ["paragraph", "reference", "blockquote", "list"]


def macros_plugin(md: MarkdownIt,
                  settings: Optional[AppSettings] = None,
                  registry: Optional[SchemaRegistry] = None) -> None:
    """
    Install shorthand links and the versions/anchor directives on `md`

    Args:
        md: markdown-it instance to extend
        settings: Marker configuration (defaults to the global appsettings)
        registry: Shorthand schemas (defaults to the built-in registry)
    """
    settings = settings or appsettings
    registry = registry or SchemaRegistry.registry_createDefault()

    if md.linkify is not None:
        LinkifyAdapter(registry).install(md.linkify)
    else:
        LOG("linkify-it not available, bare shorthand references stay text", level=2)
    MarkdownAdapter(registry).install(md)

    versions = BlockRuleSpec(
        tag=VERSIONS_TAG,
        open_marker=settings.versions_open_marker,
        close_marker=settings.versions_close_marker,
        parser=versions_parse,
    )
    md.block.ruler.before("fence", VERSIONS_TAG, blockRule_make(versions), {"alt": ALT_RULES})
    md.add_render_rule(VERSIONS_TAG, versions_renderRule)

    anchor = LineRuleSpec(tag=ANCHOR_TAG, prefix=settings.anchor_prefix, parser=anchor_parse)
    md.block.ruler.before("fence", ANCHOR_TAG, lineRule_make(anchor), {"alt": ALT_RULES})
    md.add_render_rule(ANCHOR_TAG, anchor_renderRule)

    LOG(f"Installed macros: {VERSIONS_TAG}, {ANCHOR_TAG}", level=2)
