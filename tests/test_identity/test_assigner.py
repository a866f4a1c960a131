"""Tests for element identity assignment."""

from cascadewind.identity import (
    ELEMENT_ID_ATTR,
    assign_identities,
    find_element,
    identity_selector,
)

PAGE = """<!DOCTYPE html>
<html>
<head><title>t</title><link rel="stylesheet" href="style.css"></head>
<body>
  <div class="box"><p>one</p><p>two <span>x</span></p></div>
  <ul><li>a</li></ul>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Numbering
# ---------------------------------------------------------------------------


class TestNumbering:
    def test_depth_first_from_body(self):
        doc = assign_identities(PAGE)
        assert list(doc.tags.values()) == ["body", "div", "p", "p", "span", "ul", "li"]
        assert doc.count == 7

    def test_head_is_not_numbered(self):
        soup = assign_identities(PAGE).soup()
        assert soup.head.get(ELEMENT_ID_ATTR) is None
        assert soup.title.get(ELEMENT_ID_ATTR) is None

    def test_fragment_without_body(self):
        doc = assign_identities("<div><span></span></div><p></p>")
        assert doc.tags == {1: "div", 2: "span", 3: "p"}

    def test_empty_document(self):
        doc = assign_identities("just text")
        assert doc.count == 0
        assert list(doc.identities) == []

    def test_existing_ids_overwritten(self):
        doc = assign_identities(f'<body><div {ELEMENT_ID_ATTR}="99"></div></body>')
        assert find_element(doc.soup(), 2) is not None
        assert find_element(doc.soup(), 99) is None


# ---------------------------------------------------------------------------
# Stability
# ---------------------------------------------------------------------------


class TestStability:
    def test_rerun_is_identical(self):
        first = assign_identities(PAGE)
        second = assign_identities(PAGE)
        assert first.html == second.html
        assert first.tags == second.tags

    def test_reassigning_decorated_document_is_a_fixed_point(self):
        first = assign_identities(PAGE)
        again = assign_identities(first.html)
        assert again.html == first.html
        assert again.tags == first.tags


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------


class TestLookup:
    def test_identity_selector(self):
        assert identity_selector(12) == '[data-element-id="12"]'

    def test_find_element(self):
        soup = assign_identities(PAGE).soup()
        assert find_element(soup, 5).name == "span"
        assert find_element(soup, 42) is None
