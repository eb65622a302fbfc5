"""
Tab-separated output for course records.

Fields are joined with tabs as they are; tabs or newlines inside a field
are not escaped. The catalog text does not contain them.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import IO, Sequence

from .errors import OutputExists, OutputIO
from .records import CourseRecord

COLUMNS = ("department", "course_number", "course_name", "units", "description")
PREREQUISITE_COLUMN = "prerequisites"


class RecordWriter:
    """
    Append-only writer that always puts the header line first.

    Use RecordWriter.open(); it refuses to touch an existing file. Writes
    are serialized with a lock so rows never interleave.
    """

    def __init__(self, fh: IO[str], path: str | Path, columns: Sequence[str] = COLUMNS):
        self._fh = fh
        self._lock = threading.Lock()
        self.path = Path(path)
        self.columns = tuple(columns)
        self.header_written = False
        self.rows_written = 0

    @classmethod
    def open(cls, path: str | Path, columns: Sequence[str] = COLUMNS) -> "RecordWriter":
        """Create path for writing; raise OutputExists if it is already there."""
        try:
            fh = open(path, "x", encoding="utf-8", newline="")
        except FileExistsError:
            raise OutputExists(path) from None
        except OSError as exc:
            raise OutputIO(path, exc) from exc
        return cls(fh, path, columns)

    @property
    def with_prerequisites(self) -> bool:
        return PREREQUISITE_COLUMN in self.columns

    def _write_line(self, fields: Sequence[str]) -> None:
        try:
            self._fh.write("\t".join(fields) + "\n")
        except OSError as exc:
            raise OutputIO(self.path, exc) from exc

    def write_header(self) -> None:
        with self._lock:
            if self.header_written:
                return
            self._write_line(self.columns)
            self.header_written = True

    def write_row(self, record: CourseRecord) -> None:
        self.write_header()
        with self._lock:
            self._write_line(record.as_row(self.with_prerequisites))
            self.rows_written += 1

    def close(self) -> None:
        with self._lock:
            if self._fh.closed:
                return
            try:
                self._fh.flush()
            except OSError as exc:
                raise OutputIO(self.path, exc) from exc
            finally:
                self._fh.close()

    def __enter__(self) -> "RecordWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
