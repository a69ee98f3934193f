"""
Bridges between the SchemaRegistry and markdown-it

LinkifyAdapter teaches linkify-it to find bare ``github:user/repo``-style
references in text; MarkdownAdapter resolves them inside explicit links
``[text](fixrtm:#12)`` by wrapping markdown-it's link normalizers.
"""

from typing import Any, Callable, List

from markdown_it import MarkdownIt

from .log import LOG
from .shorthand import SchemaRegistry, ShorthandResolver


class LinkifySchema:
    """
    linkify-it schema definition backed by one resolver

    linkify-it calls `validate(text, pos)` with `pos` just after the schema
    prefix and expects the matched length, 0 meaning no match. It then calls
    `normalize(match)` to rewrite `match.url`; the display text is left alone.
    """

    def __init__(self, resolver: ShorthandResolver):
        self.resolver = resolver

    def validate(self, text: str, pos: int) -> int:
        tail = text[pos:]
        length = self.resolver.validate(tail)
        if not length:
            return 0
        # the linked text alone must still be a reference, or normalize fails
        if not self.resolver.test(self.resolver.prefix + tail[:length]):
            return 0
        return length

    def normalize(self, match: Any) -> None:
        # linkify-it matches schema names case-insensitively
        prefix = self.resolver.prefix
        match.url = self.resolver.normalize(prefix + match.url[len(prefix):])

    def definition(self) -> dict:
        return {"validate": self.validate, "normalize": self.normalize}


class LinkifyAdapter:
    """Registers every schema of a registry with a linkify-it instance"""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry
        self.schemas: List[LinkifySchema] = [LinkifySchema(r) for r in registry]

    def install(self, linkify: Any) -> None:
        for schema in self.schemas:
            linkify.add(schema.resolver.prefix, schema.definition())
        LOG(f"linkify: added {len(self.schemas)} shorthand schemas", level=2)


class MarkdownAdapter:
    """
    Overrides markdown-it link normalization for shorthand references

    URLs accepted by a schema are replaced with their canonical GitHub URL;
    their link text is returned verbatim so readers still see the shorthand.
    Anything else goes through markdown-it's default normalizers.
    """

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry
        self.normalizeLink_default: Callable[[str], str] = lambda url: url
        self.normalizeLinkText_default: Callable[[str], str] = lambda text: text

    def install(self, md: MarkdownIt) -> None:
        self.normalizeLink_default = md.normalizeLink
        self.normalizeLinkText_default = md.normalizeLinkText
        md.normalizeLink = self.normalizeLink  # type: ignore[method-assign]
        md.normalizeLinkText = self.normalizeLinkText  # type: ignore[method-assign]

    def normalizeLink(self, url: str) -> str:
        resolver = self.registry.resolver_find(url)
        if resolver is not None:
            return resolver.normalize(url)
        return self.normalizeLink_default(url)

    def normalizeLinkText(self, url: str) -> str:
        if self.registry.test(url):
            return url
        return self.normalizeLinkText_default(url)
