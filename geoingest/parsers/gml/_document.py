"""GML document loading and element navigation.

Responsibilities:
- Well-formed XML check with a hardened lxml parser
- FeatureCollection root check (WFS or OGR wrapper)
- Locating feature members, the feature element and its geometry property

GML elements are matched by local name within the known GML namespaces so
that both GML 2 and GML 3.2 documents resolve the same way.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geoingest.core.exceptions import GmlParseError
from geoingest.parsers.gml._constants import (
    FEATURE_COLLECTION,
    FEATURE_MEMBER,
    GEOMETRY_PROPERTY,
    GML_NAMESPACES,
)

if TYPE_CHECKING:
    from lxml.etree import _Element


def load_document(content: bytes | str) -> _Element:
    """Parse GML text into an element tree root.

    Raises:
        GmlParseError: If the content is empty or not well-formed XML.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if isinstance(content, str):
        content = content.encode("utf-8")
    if not content.strip():
        msg = "GML file is empty"
        raise GmlParseError(msg)

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        return etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise GmlParseError(msg) from exc


def local_name(element: _Element) -> str:
    from lxml import etree  # type: ignore[attr-defined]

    return etree.QName(element).localname


def namespace(element: _Element) -> str | None:
    from lxml import etree  # type: ignore[attr-defined]

    return etree.QName(element).namespace


def element_children(element: _Element) -> list[_Element]:
    """Child elements, skipping comments and processing instructions."""
    return [child for child in element if isinstance(child.tag, str)]


def gml_children(element: _Element, name: str) -> list[_Element]:
    """Child elements in a GML namespace with local name ``name``."""
    return [
        child
        for child in element_children(element)
        if local_name(child) == name and namespace(child) in GML_NAMESPACES
    ]


def gml_child(element: _Element, name: str) -> _Element | None:
    found = gml_children(element, name)
    return found[0] if found else None


def find_feature_members(root: _Element) -> list[_Element]:
    """Return the ``gml:featureMember`` elements of a feature collection.

    Raises:
        GmlParseError: If the root is not a FeatureCollection or it holds
            no feature members.
    """
    if local_name(root) != FEATURE_COLLECTION:
        msg = f"Not a GML feature collection (root element is <{root.tag}>)"
        raise GmlParseError(msg)

    members = gml_children(root, FEATURE_MEMBER)
    if not members:
        msg = "No features found in GML file"
        raise GmlParseError(msg)
    return members


def feature_element(member: _Element) -> _Element | None:
    """The feature inside a member: its first child element."""
    children = element_children(member)
    return children[0] if children else None


def geometry_property(feature: _Element) -> _Element | None:
    """The feature's ``geometryProperty`` child, in any namespace."""
    for child in element_children(feature):
        if local_name(child) == GEOMETRY_PROPERTY:
            return child
    return None
