"""
Shorthand reference resolution

A ShorthandResolver wraps one schema and answers three questions:

    validate(tail)   how many characters after the prefix form a reference
    test(text)       is the whole text exactly one reference of this schema
    normalize(text)  the canonical https://github.com/... URL for it

The SchemaRegistry holds the fixed, ordered list of resolvers and is built
once; lookups try schemas in registration order.

Example:
    >>> registry = SchemaRegistry.registry_createDefault()
    >>> registry.normalize("github:anatawa12/fixrtm#42")
    'https://github.com/anatawa12/fixrtm/issues/42'
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from ..models.shorthand import Schema, SchemaSpec, ShorthandMatch
from .grammar import grammars_build
from .log import LOG


GITHUB_URL = "https://github.com/"

DEFAULT_SCHEMAS: Tuple[SchemaSpec, ...] = (
    SchemaSpec("github:", description="Any GitHub user or repository"),
    SchemaSpec("fixrtm:", "fixrtm", "fixRTM", description="fixRTM repository"),
    SchemaSpec("kaiz:", "Kai-Z-JP", "KaizPatchX", description="KaizPatchX repository"),
    SchemaSpec("anatawa12:", "anatawa12", description="Repositories of anatawa12"),
)


class UnresolvableShorthandError(ValueError):
    """Raised when normalizing text that is not a reference of the schema"""

    def __init__(self, text: str, prefix: Optional[str] = None):
        self.text = text
        self.prefix = prefix
        if prefix is None:
            message = f"unresolvable shorthand reference: {text!r}"
        else:
            message = f"unresolvable shorthand reference for '{prefix}': {text!r}"
        super().__init__(message)


def url_build(match: ShorthandMatch) -> str:
    """
    Compose the canonical GitHub URL for a fully default-filled match

    Example:
        user=fixrtm repo=fixRTM commit=abcdef path=/src/Foo.java hash=#L10
        -> https://github.com/fixrtm/fixRTM/tree/abcdef/src/Foo.java#L10
    """
    url = GITHUB_URL + (match.user or "")
    if match.repo:
        url += f"/{match.repo}"
    if match.issue:
        url += f"/issues/{match.issue}"
    elif match.commit:
        if match.path:
            url += f"/tree/{match.commit}{match.path}"
        else:
            url += f"/commit/{match.commit}"
    if match.hash:
        url += match.hash
    return url


class ShorthandResolver:
    """Recognizer and normalizer for one shorthand schema"""

    def __init__(self, schema: Schema):
        self.schema = schema

    @classmethod
    def resolver_create(cls, spec: SchemaSpec) -> "ShorthandResolver":
        """Build the grammars for a schema spec and wrap them"""
        grammars = tuple(grammars_build(spec.default_user, spec.default_repo))
        return cls(Schema(spec=spec, grammars=grammars))

    @property
    def prefix(self) -> str:
        return self.schema.prefix

    def match_find(self, tail: str) -> Optional[ShorthandMatch]:
        """Apply the grammars in order, returning the first leading match"""
        for grammar in self.schema.grammars:
            found = grammar.match(tail)
            if found:
                return ShorthandMatch.match_fromGroups(found.end(), found.groupdict())
        return None

    def validate(self, tail: str) -> Optional[int]:
        """
        Length of the reference at the start of `tail`

        The match does not need to consume all of `tail`. A zero-length
        match (e.g. the bare remainder of ``kaiz:``) returns 0, which is
        distinct from None (no grammar matched).
        """
        found = self.match_find(tail)
        if found is None:
            return None
        return found.length

    def test(self, text: str) -> bool:
        """True when `text` is the prefix followed by exactly one reference"""
        if not text.startswith(self.prefix):
            return False
        tail = text[len(self.prefix):]
        return self.validate(tail) == len(tail)

    def normalize(self, text: str) -> str:
        """
        Canonical URL for a reference of this schema

        Raises:
            UnresolvableShorthandError: If `text` does not satisfy `test`
        """
        if not self.test(text):
            raise UnresolvableShorthandError(text, self.prefix)
        found = self.match_find(text[len(self.prefix):])
        spec = self.schema.spec
        filled = ShorthandMatch(
            length=found.length,
            user=found.user or spec.default_user,
            repo=found.repo or spec.default_repo,
            issue=found.issue,
            commit=found.commit,
            path=found.path,
            hash=found.hash,
        )
        return url_build(filled)

    def __repr__(self) -> str:
        return f"ShorthandResolver({self.prefix!r})"


class SchemaRegistry:
    """
    Immutable, ordered collection of shorthand resolvers

    No prefix may equal or start another; resolvers are tried in
    registration order and the first whose `test` succeeds is used.
    """

    def __init__(self, specs: Iterable[SchemaSpec]):
        resolvers = []
        seen: List[str] = []
        for spec in specs:
            if spec.prefix in seen:
                raise ValueError(f"Duplicate shorthand prefix: {spec.prefix}")
            for other in seen:
                # one prefix starting another makes the winner depend on order
                if spec.prefix.startswith(other) or other.startswith(spec.prefix):
                    raise ValueError(
                        f"Ambiguous shorthand prefixes: {other} and {spec.prefix}"
                    )
            seen.append(spec.prefix)
            resolvers.append(ShorthandResolver.resolver_create(spec))
        self._resolvers: Tuple[ShorthandResolver, ...] = tuple(resolvers)
        LOG(f"Registered {len(self._resolvers)} shorthand schemas: "
            f"{', '.join(self.prefixes)}", level=2)

    @classmethod
    def registry_createDefault(cls) -> "SchemaRegistry":
        """Registry of the built-in github/fixrtm/kaiz/anatawa12 schemas"""
        return cls(DEFAULT_SCHEMAS)

    @property
    def resolvers(self) -> Tuple[ShorthandResolver, ...]:
        return self._resolvers

    @property
    def prefixes(self) -> Tuple[str, ...]:
        return tuple(resolver.prefix for resolver in self._resolvers)

    def __iter__(self) -> Iterator[ShorthandResolver]:
        return iter(self._resolvers)

    def __len__(self) -> int:
        return len(self._resolvers)

    def resolver_find(self, text: str) -> Optional[ShorthandResolver]:
        """First resolver whose `test` accepts `text`"""
        for resolver in self._resolvers:
            if resolver.test(text):
                return resolver
        return None

    def test(self, text: str) -> bool:
        return self.resolver_find(text) is not None

    def normalize(self, text: str) -> str:
        """
        Canonical URL using the first matching schema

        Raises:
            UnresolvableShorthandError: If no schema accepts `text`
        """
        resolver = self.resolver_find(text)
        if resolver is None:
            raise UnresolvableShorthandError(text)
        return resolver.normalize(text)
