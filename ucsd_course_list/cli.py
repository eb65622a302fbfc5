"""
Command-line interface: crawl the UCSD course catalog into a TSV file.
"""
from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

from . import __version__
from .catalog_index import CATALOG_INDEX_URL
from .crawl import DEFAULT_WORKERS, Crawler
from .errors import FetchError, OutputError
from .fetch import DEFAULT_RETRIES, DEFAULT_TIMEOUT, HttpFetcher
from .records import CrawlSummary
from .writer import COLUMNS, PREREQUISITE_COLUMN, RecordWriter

DEFAULT_OUTPUT = "courses.tsv"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl the UCSD course catalog into a tab-separated file (one course per line).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output TSV path. Must not exist yet. Default: {DEFAULT_OUTPUT}",
    )
    parser.add_argument(
        "--index-url",
        default=CATALOG_INDEX_URL,
        help="Catalog page that links to every department page.",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Department pages fetched in parallel. Default: {DEFAULT_WORKERS}",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds. Default: {DEFAULT_TIMEOUT:g}",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=DEFAULT_RETRIES,
        help=f"Retries for 429/5xx responses. Default: {DEFAULT_RETRIES}",
    )
    parser.add_argument(
        "--ordered",
        action="store_true",
        help="Write departments in index order instead of completion order.",
    )
    parser.add_argument(
        "--prerequisites",
        action="store_true",
        help="Split prerequisites out of descriptions into an extra column.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug-level logging.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _print_summary(summary: CrawlSummary, out_path: Path) -> None:
    print(f"Added {summary.courses_written} courses to {out_path}.")
    unresolved = summary.unresolved_headers()
    if unresolved:
        print(f"\n{len(unresolved)} course header(s) could not be parsed:")
        for issue in unresolved:
            print(f"  {issue.context}")
    failed = summary.failed_departments()
    if failed:
        print(f"\n{len(failed)} department(s) could not be fetched:")
        for issue in failed:
            print(f"  {issue.context}: {issue.error}")
    if summary.cancelled:
        print("\nCrawl was cancelled; output is partial.")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    if args.workers < 1:
        print("Error: --workers must be at least 1.", file=sys.stderr)
        return 1

    # Installed before the output file exists: an early Ctrl-C still gets a header line.
    stop = threading.Event()

    def _on_signal(signum, frame):
        print("\nStopping: finishing in-flight departments...", file=sys.stderr)
        stop.set()

    previous = {sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        return _crawl(args, stop)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def _crawl(args: argparse.Namespace, stop: threading.Event) -> int:
    out_path = Path(args.output)
    columns = COLUMNS + (PREREQUISITE_COLUMN,) if args.prerequisites else COLUMNS
    try:
        writer = RecordWriter.open(out_path, columns)
    except OutputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with HttpFetcher(timeout=args.timeout, max_retries=args.retries) as fetcher:
        crawler = Crawler(
            fetcher,
            writer,
            index_url=args.index_url,
            workers=args.workers,
            ordered=args.ordered,
            with_prerequisites=args.prerequisites,
            cancel_event=stop,
        )

        try:
            with writer:
                summary = crawler.run()
        except FetchError as e:
            print(f"Error fetching catalog index: {e}", file=sys.stderr)
            if writer.rows_written == 0 and not writer.header_written:
                # Nothing was crawled; don't leave a file that blocks the next run.
                out_path.unlink(missing_ok=True)
            return 1
        except OutputError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    _print_summary(summary, out_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
