"""Identity assigner: numbers every element depth-first in document order.

The numbering is a pure function of document structure, so the decorated
document is the correlation key for the baseline and styled passes of
every breakpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

ELEMENT_ID_ATTR = "data-element-id"

_PARSER = "html.parser"


@dataclass(frozen=True)
class IdentifiedDocument:
    """A document whose elements carry ``data-element-id`` attributes."""

    html: str
    count: int
    tags: dict[int, str] = field(default_factory=dict)

    @property
    def identities(self) -> range:
        return range(1, self.count + 1)

    def soup(self) -> BeautifulSoup:
        """Parse a fresh, mutable tree of the decorated document."""
        return BeautifulSoup(self.html, _PARSER)


def identity_selector(element_id: int) -> str:
    """CSS selector that matches the element with *element_id*."""
    return f'[{ELEMENT_ID_ATTR}="{element_id}"]'


def _roots(soup: BeautifulSoup) -> list[Tag]:
    if soup.body is not None:
        return [soup.body]
    return [child for child in soup.children if isinstance(child, Tag)]


def assign_identities(html: str) -> IdentifiedDocument:
    """Assign identities starting at ``<body>``, parents before children.

    Without a ``<body>`` the top-level elements are numbered in order.
    Existing ``data-element-id`` attributes are overwritten.
    """
    soup = BeautifulSoup(html, _PARSER)
    tags: dict[int, str] = {}
    next_id = 1
    stack = list(reversed(_roots(soup)))
    while stack:
        element = stack.pop()
        element[ELEMENT_ID_ATTR] = str(next_id)
        tags[next_id] = element.name
        next_id += 1
        children = [child for child in element.children if isinstance(child, Tag)]
        stack.extend(reversed(children))
    return IdentifiedDocument(html=str(soup), count=next_id - 1, tags=tags)


def find_element(soup: BeautifulSoup, element_id: int) -> Tag | None:
    return soup.find(attrs={ELEMENT_ID_ATTR: str(element_id)})
