"""Final document: merged utility classes in place of the authored stylesheet."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from bs4 import BeautifulSoup

from cascadewind.config import TAILWIND_CDN
from cascadewind.identity.assigner import ELEMENT_ID_ATTR, find_element

logger = logging.getLogger(__name__)

_PARSER = "html.parser"


def render_document(
    identified_html: str,
    classes: Mapping[int, Sequence[str]],
    cdn_url: str = TAILWIND_CDN,
    strip_identities: bool = False,
) -> str:
    """Decorate *identified_html* with *classes* and swap stylesheets for Tailwind.

    An element's existing ``class`` attribute is replaced. Every
    ``<link rel="stylesheet">`` is removed and the Tailwind browser script
    is appended to ``<head>``.
    """
    soup = BeautifulSoup(identified_html, _PARSER)

    for element_id, tokens in classes.items():
        if not tokens:
            continue
        element = find_element(soup, element_id)
        if element is None:
            logger.warning("Element %d not found in the document, classes not applied", element_id)
            continue
        element["class"] = " ".join(tokens)

    for link in soup.find_all("link"):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if "stylesheet" in (token.lower() for token in rel):
            link.decompose()

    script = soup.new_tag("script", src=cdn_url)
    if soup.head is not None:
        soup.head.append(script)
    else:
        logger.warning("Document has no <head>, Tailwind script inserted at the top")
        soup.insert(0, script)

    if strip_identities:
        for element in soup.find_all(attrs={ELEMENT_ID_ATTR: True}):
            del element[ELEMENT_ID_ATTR]

    return str(soup)
