# tests/checker/test_reference_extraction.py
from types import SimpleNamespace

from link_checker.model import HtmlSettings
from link_checker.services.reference_extractor_service import ReferenceExtractorService
from link_checker.services.reference_index_service import flip_references

PAGE = """
<html>
  <head>
    <link rel="stylesheet" href="css/site.css">
    <script src="js/app.js"></script>
    <script>inline()</script>
  </head>
  <body>
    <a href="about/">About</a>
    <a href="">Empty</a>
    <a name="anchor-only">No href</a>
    <img src="img/logo.png" data-src="img/logo@2x.png">
    <a href="about/">About again</a>
  </body>
</html>
"""


def make_extractor(**kwargs) -> ReferenceExtractorService:
    return ReferenceExtractorService(HtmlSettings(**kwargs))


def test_extract_references_in_document_order():
    """Values come out in document order, duplicates kept, empty attributes skipped."""
    links = make_extractor().extract_references(PAGE)
    assert links == [
        "css/site.css",
        "js/app.js",
        "about/",
        "img/logo.png",
        "img/logo@2x.png",
        "about/",
    ]


def test_single_attribute_equals_list_of_one():
    single = make_extractor(tags={"a": "href"})
    listed = make_extractor(tags={"a": ["href"]})
    assert single.tags == listed.tags == {"a": ["href"]}
    assert single.extract_references(PAGE) == ["about/", "about/"]


def test_malformed_html_is_best_effort():
    html = '<div><a href="one.html">one<p><a href="two.html"</div><img src="three.png"'
    links = make_extractor().extract_references(html)
    assert "one.html" in links


def test_extract_all_filters_by_pattern_and_normalizes_paths():
    files = {
        "index.html": b'<a href="blog/">Blog</a>',
        "blog\\index.html": SimpleNamespace(contents=b'<a href="../index.html">Home</a>'),
        "css/site.css": b"a { color: red }",
        "feed.xml": b'<a href="ignored.html"></a>',
    }
    result = make_extractor().extract_all(files)
    assert result == {
        "index.html": ["blog/"],
        "blog/index.html": ["../index.html"],
    }


def test_extract_all_custom_pattern():
    files = {
        "docs/a.html": b'<a href="b.html"></a>',
        "blog/c.html": b'<a href="d.html"></a>',
    }
    result = make_extractor(pattern="docs/**").extract_all(files)
    assert list(result) == ["docs/a.html"]


def test_document_without_references():
    assert make_extractor().extract_all({"index.html": b"<p>Hello</p>"}) == {"index.html": []}


def test_flip_references_dedupes_citing_documents():
    filenames_to_links = {
        "a.html": ["x.html", "y.html", "x.html"],
        "b.html": ["y.html"],
        "c.html": [],
    }
    assert flip_references(filenames_to_links) == {
        "x.html": ["a.html"],
        "y.html": ["a.html", "b.html"],
    }


def test_flip_references_first_seen_order():
    flipped = flip_references({"b.html": ["z", "a"], "a.html": ["a", "z"]})
    assert list(flipped) == ["z", "a"]
    assert flipped["a"] == ["b.html", "a.html"]
