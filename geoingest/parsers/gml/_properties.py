"""Attribute extraction from GML feature elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geoingest.parsers.gml._constants import GEOMETRY_PROPERTY, OGR_NAMESPACE
from geoingest.parsers.gml._document import element_children, local_name, namespace

if TYPE_CHECKING:
    from lxml.etree import _Element


def property_key(element: _Element) -> str:
    """Attribute key for a property element.

    OGR and un-namespaced properties use the bare local name; anything
    else keeps its prefix (``ms:name``) so distinct schemas do not collide.
    """
    name = local_name(element)
    if namespace(element) in (None, OGR_NAMESPACE) or not element.prefix:
        return name
    return f"{element.prefix}:{name}"


def extract_properties(feature: _Element | None) -> dict[str, str]:
    """Extract text-valued properties of a feature element.

    The geometry property and elements without text (nested structures,
    empty values) are skipped. The first occurrence of a repeated key wins.
    """
    properties: dict[str, str] = {}
    if feature is None:
        return properties

    for child in element_children(feature):
        if local_name(child) == GEOMETRY_PROPERTY:
            continue
        text = (child.text or "").strip()
        if not text:
            continue
        properties.setdefault(property_key(child), text)
    return properties
