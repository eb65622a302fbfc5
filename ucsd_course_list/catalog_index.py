"""
Find the department pages linked from the catalog front page.
"""
from __future__ import annotations

import re
from typing import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup  # type: ignore[import]

from .records import Department

CATALOG_INDEX_URL = "https://catalog.ucsd.edu/front/courses.html"

_DEPT_LINK_RE = re.compile(r"courses/([a-zA-Z\d]+)\.html")


def list_departments(
    index_html: str,
    base_url: str = CATALOG_INDEX_URL,
) -> Iterator[Department]:
    """
    Yield one Department per distinct per-department link, in document order.

    Links look like "../courses/CSE.html". The code is upper-cased; the URL
    keeps the link's own spelling. Nothing is yielded if no link matches.
    """
    soup = BeautifulSoup(index_html, "html.parser")
    seen: set[str] = set()
    for a in soup.find_all("a", href=True):
        m = _DEPT_LINK_RE.search(a["href"])
        if not m:
            continue
        code = m.group(1).upper()
        if code in seen:
            continue
        seen.add(code)
        yield Department(code, urljoin(base_url, a["href"]))
