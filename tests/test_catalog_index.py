"""Tests for catalog_index.py – department discovery."""
from ucsd_course_list.catalog_index import list_departments
from ucsd_course_list.records import Department

INDEX_HTML = """<html><body>
<ul>
  <li><a href="../courses/CSE.html">Computer Science and Engineering</a></li>
  <li><a href="../courses/math.html">Mathematics</a></li>
  <li><a href="../front/about.html">About the catalog</a></li>
  <li><a href="../courses/CSE.html">Computer Science (again)</a></li>
  <li><a href="https://catalog.ucsd.edu/courses/BILD.html">Biology</a></li>
  <li><a>no href</a></li>
</ul>
</body></html>"""


class TestListDepartments:
    def test_document_order_upper_case(self):
        departments = list(list_departments(INDEX_HTML))
        assert [d.code for d in departments] == ["CSE", "MATH", "BILD"]

    def test_urls_resolved_against_index(self):
        departments = list(list_departments(INDEX_HTML))
        assert departments[0] == Department("CSE", "https://catalog.ucsd.edu/courses/CSE.html")
        # The URL keeps the link's own spelling of the code.
        assert departments[1].url == "https://catalog.ucsd.edu/courses/math.html"
        assert departments[2].url == "https://catalog.ucsd.edu/courses/BILD.html"

    def test_custom_base_url(self):
        (dept,) = list(list_departments('<a href="courses/ECE.html">ECE</a>', "http://localhost:8000/"))
        assert dept.url == "http://localhost:8000/courses/ECE.html"

    def test_no_links(self):
        assert list(list_departments("<html><body>Nothing here</body></html>")) == []

    def test_lazy(self):
        gen = list_departments(INDEX_HTML)
        assert next(gen).code == "CSE"
