"""Tests for entities.py – entity decoding and tag stripping."""
import re

from ucsd_course_list.entities import decode_and_strip


class TestDecodeAndStrip:
    def test_named_and_numeric_entities(self):
        assert decode_and_strip("R&amp;D &#8211; caf&eacute; &#x41;") == "R&D – café A"

    def test_nbsp_becomes_space(self):
        assert decode_and_strip("CSE&nbsp;101") == "CSE 101"
        assert decode_and_strip("CSE\u00a0101") == "CSE 101"

    def test_strips_tags(self):
        html = '<strong class="italic">Prerequisites:</strong> <a href="x">CSE 21</a>.'
        assert decode_and_strip(html) == "Prerequisites: CSE 21."

    def test_plain_text_untouched(self):
        assert decode_and_strip("Design and Analysis of Algorithms") == "Design and Analysis of Algorithms"

    def test_empty(self):
        assert decode_and_strip("") == ""

    def test_no_markup_or_entities_left(self):
        html = "<p><em>Intro</em> to &lt;b&gt;HTML&lt;/b&gt; &amp; <span>CSS</span>&nbsp;(4)</p>"
        out = decode_and_strip(html)
        assert "<" not in out and ">" not in out
        assert not re.search(r"&[#a-zA-Z0-9]+;", out)
        assert out == "Intro to HTML & CSS (4)"

    def test_unmatched_open_bracket_drops_rest(self):
        # Known quirk: the scanner never leaves the tag state.
        assert decode_and_strip("Grades a < b then more text") == "Grades a "

    def test_stray_close_bracket_dropped(self):
        assert decode_and_strip("a > b") == "a  b"
