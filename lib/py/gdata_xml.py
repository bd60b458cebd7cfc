"""Namespaced lookups over GData Atom documents (ElementTree based)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional, Union

ATOM = "http://www.w3.org/2005/Atom"
GD = "http://schemas.google.com/g/2005"
GCONTACT = "http://schemas.google.com/contact/2008"


def parse_document(data: Union[bytes, str]) -> ET.Element:
    """Parse an XML document and return its root element; bytes honor the XML declaration encoding."""
    return ET.fromstring(data)


def _tag(ns: str, name: str) -> str:
    return f"{{{ns}}}{name}"


def child(elem: Optional[ET.Element], ns: str, name: str) -> Optional[ET.Element]:
    """Return the first direct child with the given namespace and local name, or None."""
    if elem is None:
        return None
    return elem.find(_tag(ns, name))


def children(elem: Optional[ET.Element], ns: str, name: str) -> List[ET.Element]:
    """Return every direct child with the given namespace and local name, in document order."""
    if elem is None:
        return []
    return elem.findall(_tag(ns, name))


def child_text(elem: Optional[ET.Element], ns: str, name: str, default: str = "") -> str:
    """Return the text of the first matching child, or default when absent or empty."""
    node = child(elem, ns, name)
    if node is None or not node.text:
        return default
    return node.text


def attr(elem: Optional[ET.Element], name: str, default: str = "") -> str:
    """Return an attribute value, or default when the element or attribute is absent."""
    if elem is None:
        return default
    return elem.get(name, default)


def link_href(elem: Optional[ET.Element], rel: str) -> str:
    """Return the href of the first atom:link with the given rel, or an empty string."""
    for link in children(elem, ATOM, "link"):
        if link.get("rel") == rel:
            return link.get("href", "")
    return ""


__all__: Iterable[str] = (
    "ATOM",
    "GD",
    "GCONTACT",
    "parse_document",
    "child",
    "children",
    "child_text",
    "attr",
    "link_href",
)
