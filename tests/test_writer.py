"""Tests for writer.py – TSV output."""
import pytest

from ucsd_course_list.errors import OutputExists, OutputIO
from ucsd_course_list.records import NO_PREREQUISITES, CourseRecord
from ucsd_course_list.writer import COLUMNS, PREREQUISITE_COLUMN, RecordWriter

HEADER = "department\tcourse_number\tcourse_name\tunits\tdescription\n"


def _record(**overrides) -> CourseRecord:
    fields = dict(
        department="CSE",
        number="101",
        name="Design and Analysis of Algorithms",
        units="4",
        description="Design and analysis of efficient algorithms.",
    )
    fields.update(overrides)
    return CourseRecord(**fields)


class TestRecordWriter:
    def test_header_then_rows(self, tmp_path):
        out = tmp_path / "courses.tsv"
        with RecordWriter.open(out) as writer:
            writer.write_header()
            writer.write_row(_record())
            writer.write_row(_record(number="199", name="Independent Study", units=""))
        assert out.read_text(encoding="utf-8") == (
            HEADER
            + "CSE\t101\tDesign and Analysis of Algorithms\t4\tDesign and analysis of efficient algorithms.\n"
            + "CSE\t199\tIndependent Study\t\tDesign and analysis of efficient algorithms.\n"
        )
        assert writer.rows_written == 2

    def test_header_written_once(self, tmp_path):
        out = tmp_path / "courses.tsv"
        with RecordWriter.open(out) as writer:
            writer.write_header()
            writer.write_header()
        assert out.read_text(encoding="utf-8") == HEADER

    def test_row_forces_header_first(self, tmp_path):
        out = tmp_path / "courses.tsv"
        with RecordWriter.open(out) as writer:
            writer.write_row(_record())
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0] == HEADER.rstrip("\n")
        assert len(lines) == 2

    def test_refuses_existing_file(self, tmp_path):
        out = tmp_path / "courses.tsv"
        out.write_text("previous run\n", encoding="utf-8")
        with pytest.raises(OutputExists):
            RecordWriter.open(out)
        assert out.read_text(encoding="utf-8") == "previous run\n"

    def test_second_run_refused(self, tmp_path):
        out = tmp_path / "courses.tsv"
        with RecordWriter.open(out) as writer:
            writer.write_row(_record())
        before = out.read_bytes()
        with pytest.raises(OutputExists):
            RecordWriter.open(out)
        assert out.read_bytes() == before

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OutputIO):
            RecordWriter.open(tmp_path / "missing" / "courses.tsv")

    def test_flushed_on_error(self, tmp_path):
        out = tmp_path / "courses.tsv"
        with pytest.raises(RuntimeError):
            with RecordWriter.open(out) as writer:
                writer.write_row(_record())
                raise RuntimeError("boom")
        assert out.read_text(encoding="utf-8").count("\n") == 2

    def test_prerequisite_column(self, tmp_path):
        out = tmp_path / "courses.tsv"
        with RecordWriter.open(out, COLUMNS + (PREREQUISITE_COLUMN,)) as writer:
            writer.write_row(_record(prerequisites="CSE 21"))
            writer.write_row(_record(number="3"))
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0].endswith("\tprerequisites")
        assert lines[1].endswith("\tCSE 21")
        assert lines[2].endswith("\t" + NO_PREREQUISITES)

    def test_close_twice(self, tmp_path):
        writer = RecordWriter.open(tmp_path / "courses.tsv")
        writer.close()
        writer.close()
