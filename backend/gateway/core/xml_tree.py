"""XML Tree — converts a raw XML result into a JSON-shaped tree.

Invariants:
    - The root element becomes the single top-level key
    - Keys are element local names (namespace URIs dropped)
    - An element with no attributes and no children collapses to its stripped text
    - Attributes live under "$", text mixed with attributes/children under "_"
    - Repeated sibling elements are collected into a list, in document order
    - Malformed XML raises xml.etree.ElementTree.ParseError; callers map it
"""

from typing import Any
from xml.etree import ElementTree

ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"

JsonTree = dict[str, Any]


def local_name(tag: str) -> str:
    """Get local name from a qualified tag ("{uri}name" → "name")."""
    return tag.split("}")[-1] if "}" in tag else tag


def xml_to_tree(xml_text: str) -> JsonTree:
    """Parse an XML document into a JSON-shaped tree."""
    root = ElementTree.fromstring(xml_text)
    return {local_name(root.tag): element_to_value(root)}


def element_to_value(elem: ElementTree.Element) -> Any:
    """Convert one element (recursively) into a string or dict."""
    attributes = {local_name(k): v for k, v in elem.attrib.items()}
    children = list(elem)
    text = (elem.text or "").strip()

    if not attributes and not children:
        return text

    node: JsonTree = {}
    if attributes:
        node[ATTRIBUTES_KEY] = attributes
    if text:
        node[TEXT_KEY] = text
    for child in children:
        _append_child(node, local_name(child.tag), element_to_value(child))
    return node


def _append_child(node: JsonTree, key: str, value: Any) -> None:
    if key not in node:
        node[key] = value
    elif isinstance(node[key], list):
        node[key].append(value)
    else:
        node[key] = [node[key], value]
