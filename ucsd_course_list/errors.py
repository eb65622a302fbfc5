"""
Exceptions raised while crawling the catalog.

FetchError is fatal for the index page and recoverable per department.
UnrecognizedHeader is recoverable per course. OutputError subclasses are
always fatal.
"""
from __future__ import annotations


class CrawlError(Exception):
    """Base class for every error raised by this package."""


class FetchError(CrawlError):
    """Network failure, timeout or non-2xx response for a single URL."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ParseError(CrawlError):
    pass


class UnrecognizedHeader(ParseError):
    """No header rule matched the course header text."""

    def __init__(self, text: str):
        super().__init__(f"Unrecognized course header: {text!r}")
        self.text = text


class OutputError(CrawlError):
    pass


class OutputExists(OutputError):
    def __init__(self, path):
        super().__init__(f"File '{path}' already exists.")
        self.path = path


class OutputIO(OutputError):
    def __init__(self, path, cause: OSError):
        super().__init__(f"Could not write to '{path}': {cause}")
        self.path = path
        self.cause = cause
