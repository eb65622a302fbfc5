"""
Crawl the catalog: index page -> department pages -> course rows.

Department pages are fetched on a small thread pool. Only the thread that
calls Crawler.run() writes output, so rows never interleave and the header
line is always first.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Protocol, Union

from .catalog_index import CATALOG_INDEX_URL, list_departments
from .course_blocks import extract_blocks, split_prerequisites
from .entities import decode_and_strip
from .errors import FetchError, UnrecognizedHeader
from .headers import course_number, parse_header
from .records import CourseBlock, CourseRecord, CrawlIssue, CrawlSummary, Department
from .writer import RecordWriter

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


class Fetcher(Protocol):
    def get(self, url: str) -> str: ...


Outcome = Union[CourseRecord, UnrecognizedHeader]


@dataclass
class DepartmentResult:
    """Everything one department produced: one outcome per course block."""

    department: Department
    outcomes: List[Outcome] = field(default_factory=list)
    fetch_error: FetchError | None = None
    skipped: bool = False


def build_record(
    department: str,
    block: CourseBlock,
    with_prerequisites: bool = False,
) -> CourseRecord:
    """Decode a course block and parse its header; raises UnrecognizedHeader."""
    fields = parse_header(decode_and_strip(block.header_html))
    description_html = block.description_html
    prerequisites = None
    if with_prerequisites:
        description_html, prereq_html = split_prerequisites(description_html)
        prerequisites = decode_and_strip(prereq_html).strip()
    return CourseRecord(
        department=department,
        number=course_number(fields.code, department),
        name=fields.name,
        units=fields.units,
        description=decode_and_strip(description_html).strip(),
        prerequisites=prerequisites,
    )


def parse_department(
    department: Department,
    page_html: str,
    with_prerequisites: bool = False,
) -> List[Outcome]:
    outcomes: List[Outcome] = []
    for block in extract_blocks(page_html):
        try:
            outcomes.append(build_record(department.code, block, with_prerequisites))
        except UnrecognizedHeader as exc:
            outcomes.append(exc)
    return outcomes


class Crawler:
    def __init__(
        self,
        fetcher: Fetcher,
        writer: RecordWriter,
        *,
        index_url: str = CATALOG_INDEX_URL,
        workers: int = DEFAULT_WORKERS,
        ordered: bool = False,
        with_prerequisites: bool = False,
        cancel_event: threading.Event | None = None,
    ):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.fetcher = fetcher
        self.writer = writer
        self.index_url = index_url
        self.workers = workers
        self.ordered = ordered
        self.with_prerequisites = with_prerequisites
        self._cancelled = cancel_event if cancel_event is not None else threading.Event()

    def cancel(self) -> None:
        """Stop starting department fetches; in-flight ones still finish."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def run(self) -> CrawlSummary:
        """
        Crawl every department and write its courses.

        Raises FetchError if the index page cannot be fetched, and
        OutputIO if the output cannot be written. Everything else is
        collected in the returned summary.
        """
        index_html = self.fetcher.get(self.index_url)
        departments = list(list_departments(index_html, self.index_url))
        summary = CrawlSummary(departments_seen=len(departments))
        self.writer.write_header()
        if not departments:
            logger.info("No department links found on %s", self.index_url)
            return summary
        logger.info("Found %d departments", len(departments))

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="dept") as executor:
            futures = [executor.submit(self._crawl_department, d) for d in departments]
            try:
                for future in (futures if self.ordered else as_completed(futures)):
                    self._consume(future.result(), summary)
            except BaseException:
                self.cancel()
                for f in futures:
                    f.cancel()
                raise

        summary.cancelled = self.cancelled
        return summary

    def _crawl_department(self, department: Department) -> DepartmentResult:
        if self.cancelled:
            return DepartmentResult(department, skipped=True)
        logger.info("Processing Department Code: %s", department.code)
        try:
            page = self.fetcher.get(department.url)
        except FetchError as exc:
            return DepartmentResult(department, fetch_error=exc)
        outcomes = parse_department(department, page, self.with_prerequisites)
        return DepartmentResult(department, outcomes=outcomes)

    def _consume(self, result: DepartmentResult, summary: CrawlSummary) -> None:
        code = result.department.code
        if result.skipped:
            logger.debug("%s: skipped after cancellation", code)
            return
        if result.fetch_error is not None:
            logger.warning("%s: %s", code, result.fetch_error)
            summary.errors.append(CrawlIssue(code, result.fetch_error))
            return

        written = 0
        for outcome in result.outcomes:
            if isinstance(outcome, UnrecognizedHeader):
                logger.warning("%s: %s", code, outcome)
                summary.errors.append(CrawlIssue(f"{code}: {outcome.text}", outcome))
                continue
            self.writer.write_row(outcome)
            written += 1
        summary.courses_written += written
        logger.info("%s: wrote %d course(s)", code, written)
