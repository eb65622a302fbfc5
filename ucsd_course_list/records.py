"""
Value types passed between the crawl stages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple

from .errors import FetchError, UnrecognizedHeader

NO_PREREQUISITES = "N/A"


class Department(NamedTuple):
    code: str
    url: str


class CourseBlock(NamedTuple):
    """Raw (header, description) HTML fragments, exactly as scraped."""

    header_html: str
    description_html: str


class HeaderFields(NamedTuple):
    code: str
    name: str
    units: str


@dataclass(frozen=True)
class CourseRecord:
    department: str
    number: str
    name: str
    units: str
    description: str
    prerequisites: str | None = None

    def as_row(self, with_prerequisites: bool = False) -> List[str]:
        row = [self.department, self.number, self.name, self.units, self.description]
        if with_prerequisites:
            row.append(self.prerequisites or NO_PREREQUISITES)
        return row


class CrawlIssue(NamedTuple):
    """A recoverable failure and where it happened (department, raw header)."""

    context: str
    error: Exception


@dataclass
class CrawlSummary:
    departments_seen: int = 0
    courses_written: int = 0
    errors: List[CrawlIssue] = field(default_factory=list)
    cancelled: bool = False

    def unresolved_headers(self) -> List[CrawlIssue]:
        return [i for i in self.errors if isinstance(i.error, UnrecognizedHeader)]

    def failed_departments(self) -> List[CrawlIssue]:
        return [i for i in self.errors if isinstance(i.error, FetchError)]
