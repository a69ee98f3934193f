"""
Grammar fragments and per-schema grammar builder

Shorthand references such as ``github:user/repo#42`` are recognized by
whole-match regular expressions assembled from the named fragments below.
Fragments are plain pattern strings so each one can be compiled and tested
on its own; the assembled grammars are compiled once per schema.

Grammar shapes (text after the schema prefix):

    no defaults      user ( /repo ( #issue | @commit path? )? )? hash?
    default user     repo ( #issue | @commit path? )? hash?
                     hash?
    user and repo    ( #issue | @commit path? ) hash?
                     repo ( #issue | @commit path? )? hash?
                     hash?

More specific grammars come first; the first grammar that matches wins.
"""

import re
from re import Pattern
from typing import List, Optional

ALNUM = "a-zA-Z0-9"

REPO_CHAR = rf"[{ALNUM}_\-]"
URL_SAFE = rf"[{ALNUM}\-_+%&]"

# A dot counts only when a run of dots ends in a character of its class,
# so a reference never ends with a dot: "see github:a/b." links "a/b"
# while "my..repo" stays whole.
REPO_UNIT = rf"(?:{REPO_CHAR}|\.(?=\.*{REPO_CHAR}))"
URL_CHAR = rf"(?:{URL_SAFE}|\.(?=\.*{URL_SAFE}))"

USERNAME = rf"(?P<user>[{ALNUM}](?:[{ALNUM}]|-(?=[{ALNUM}])){{0,38}})"
REPONAME = rf"(?P<repo>{REPO_UNIT}{{1,100}})"
ISSUE = r"#(?P<issue>[0-9]+)"
COMMIT = rf"@(?P<commit>{REPO_UNIT}+)"
# a path keeps its inner slashes: @commit/src/Main.java
PATH = rf"(?P<path>/(?:{URL_CHAR}|/)*)"
HASH = rf"(?P<hash>#{URL_CHAR}+)"

# #issue, @commit or @commit/path
ELEMENT = rf"(?:{ISSUE}|{COMMIT}{PATH}?)"
REPOSITORY = rf"{REPONAME}{ELEMENT}?"
USER_REPOSITORY = rf"{USERNAME}(?:/{REPOSITORY})?"

GRAMMAR_FRAGMENTS = {
    "username": USERNAME,
    "reponame": REPONAME,
    "issue": ISSUE,
    "commit": COMMIT,
    "path": PATH,
    "hash": HASH,
}


def pattern_compile(body: str) -> Pattern[str]:
    """Anchor a grammar body at offset 0 and append the optional hash"""
    return re.compile(rf"^{body}{HASH}?")


# Shared by every schema; compiled once at import
HASH_ONLY = re.compile(rf"^{HASH}?")
ELEMENT_GRAMMAR = pattern_compile(ELEMENT)
REPOSITORY_GRAMMAR = pattern_compile(REPOSITORY)
USER_REPOSITORY_GRAMMAR = pattern_compile(USER_REPOSITORY)


def grammars_build(default_user: Optional[str] = None,
                   default_repo: Optional[str] = None) -> List[Pattern[str]]:
    """
    Produce the ordered candidate grammars for a schema's fixed defaults

    Args:
        default_user: User fixed by the schema, if any
        default_repo: Repository fixed by the schema, if any

    Returns:
        Compiled patterns in the order they must be tried

    Raises:
        ValueError: If a default repository is given without a default user
    """
    if not default_user:
        if default_repo:
            raise ValueError("A default repository requires a default user")
        return [USER_REPOSITORY_GRAMMAR]
    if not default_repo:
        return [REPOSITORY_GRAMMAR, HASH_ONLY]
    return [ELEMENT_GRAMMAR, REPOSITORY_GRAMMAR, HASH_ONLY]
