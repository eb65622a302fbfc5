"""
Turn scraped HTML fragments into plain text.
"""
from __future__ import annotations

import html

_NBSP = "\u00a0"


def decode_and_strip(s: str) -> str:
    """
    Decode HTML character references, turn non-breaking spaces into plain
    spaces, then drop everything between '<' and '>'.

    The tag scanner has no recovery: an unmatched '<' swallows the rest of
    the string. Existing output depends on this, so it is kept as is.
    """
    text = html.unescape(s).replace(_NBSP, " ")
    out = []
    inside_tag = False
    for ch in text:
        if ch == "<":
            inside_tag = True
        elif ch == ">":
            inside_tag = False
        elif not inside_tag:
            out.append(ch)
    return "".join(out)
