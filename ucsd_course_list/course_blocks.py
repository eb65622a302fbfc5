"""
Pull course blocks out of a department page.

The catalog lays every course out as two adjacent paragraphs:

    <p class="course-name">CSE 101. Design and Analysis of Algorithms (4)</p>
    <p class="course-descriptions">Design and analysis of efficient ...</p>
"""
from __future__ import annotations

import re
from typing import Iterator, Tuple

from .records import NO_PREREQUISITES, CourseBlock

_BLOCK_RE = re.compile(
    r'<p class="course-name">(.+)</p>\n<p class="course-descriptions">(.+)</p>'
)
_PREREQ_RE = re.compile(r'<strong class="italic">.*Prerequisites:.*</strong>(.*)')


def extract_blocks(department_html: str) -> Iterator[CourseBlock]:
    """
    Yield (header_html, description_html) pairs in document order.

    Pairs never overlap. A page without any pair yields nothing.
    """
    for m in _BLOCK_RE.finditer(department_html):
        yield CourseBlock(m.group(1), m.group(2))


def split_prerequisites(description_html: str) -> Tuple[str, str]:
    """
    Split the "Prerequisites:" tail off a description.

    Returns (description_html, prerequisites_html); prerequisites are
    NO_PREREQUISITES when the description has no prerequisite marker.
    """
    m = _PREREQ_RE.search(description_html)
    if not m:
        return description_html, NO_PREREQUISITES
    prereqs = m.group(1).strip()
    description = (description_html[: m.start()] + description_html[m.end():]).strip()
    return description, prereqs
