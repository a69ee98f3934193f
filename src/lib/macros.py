"""
Versions table and anchor directives

Content parsers (text -> token meta) and HTML renderers for the two
fixRTM wiki directives:

    ```#!versions
    fixrtm=2.0.23
    rtm=2.4.24
    ```

    #!anchor download
"""

import re
from typing import Any, Dict, List, Optional, Sequence

from markdown_it.token import Token

from ..models.rules import VersionRow

VersionsTable = Dict[str, Optional[str]]

# Row value that removes the row from the rendered table
DROP = "drop"
NOT_AVAILABLE = "not available"

# RTM releases that fixRTM does not need to be listed for
RTM_WITHOUT_FIXRTM = re.compile(r"1\.12\.2|^2\.")


def versions_parse(contents: str) -> VersionsTable:
    """
    Parse ``key=value`` lines into a versions table

    Blank lines are dropped, each line is split on its first '=', and later
    keys overwrite earlier ones. A line without '=' maps its text to None.

    Example:
        >>> versions_parse("fixrtm=1.2.3\\nrtm=2.0.0\\n\\n")
        {'fixrtm': '1.2.3', 'rtm': '2.0.0'}
    """
    table: VersionsTable = {}
    for line in contents.split("\n"):
        if line.strip() == "":
            continue
        key, sep, version = line.partition("=")
        table[key] = version if sep else None
    return table


def versionRows_get(table: VersionsTable) -> List[VersionRow]:
    """Row layout for a table; the fixRTM row depends on the RTM version"""
    rtm = table.get("rtm")
    fixrtm_always = not rtm or not RTM_WITHOUT_FIXRTM.search(rtm)
    return [
        VersionRow("fixrtm", "fixRTM", fixrtm_always),
        VersionRow("fixrtm.pre", "fixRTM(pre release)"),
        VersionRow("kaiz", "KaizPatchX", True),
        VersionRow("kaiz.pre", "KaizPatchX(pre release)"),
        VersionRow("rtm", "RTM"),
    ]


def text_escape(text: str) -> str:
    """Escape &, < and > only"""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def versionRow_render(row: VersionRow, table: VersionsTable) -> str:
    version = table.get(row.key)
    if version is None:
        if not row.always:
            return ""
        version = NOT_AVAILABLE
    if version == DROP:
        return ""
    return f"<tr><td>{row.name}</td><td>{text_escape(version)}</td></tr>"


def versionsTable_render(table: VersionsTable) -> str:
    """Render a parsed versions table as an HTML table"""
    rows = "".join(versionRow_render(row, table) for row in versionRows_get(table))
    return (
        "<table>\n"
        "<thead><tr><th>mod</th><th>version</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>\n"
    )


def anchor_parse(contents: str) -> str:
    return contents


def anchor_render(anchor: str) -> str:
    """Empty span carrying the anchor as its id (only '"' is escaped)"""
    anchor_id = anchor.replace('"', "&quot;")
    return f'<span id="{anchor_id}"></span>'


# markdown-it renderer rules: (renderer, tokens, idx, options, env) -> str

def versions_renderRule(self: Any, tokens: Sequence[Token], idx: int,
                        options: Any, env: Any) -> str:
    return versionsTable_render(tokens[idx].meta)


def anchor_renderRule(self: Any, tokens: Sequence[Token], idx: int,
                      options: Any, env: Any) -> str:
    return anchor_render(tokens[idx].meta)
