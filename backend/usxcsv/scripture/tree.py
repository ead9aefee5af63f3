"""Build a plain element/text tree from USX bytes.

lxml does the actual parsing. The result is converted into small
``Element`` / ``Text`` nodes so the walker can pattern-match on node kind
without dealing with lxml's ``.text`` / ``.tail`` split.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lxml import etree

from usxcsv.errors import MalformedMarkupError

logger = logging.getLogger(__name__)


@dataclass
class Text:
    """A run of character data, entity references already resolved."""

    value: str


@dataclass
class Element:
    """An XML element with its attributes and children in document order."""

    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Element | Text] = field(default_factory=list)

    def get(self, key: str) -> str:
        """Return an attribute value, or "" when absent."""
        return self.attrs.get(key, "")

    def find_child(self, name: str) -> Element | None:
        """Return the first direct child element called ``name``."""
        for child in self.children:
            if isinstance(child, Element) and child.name == name:
                return child
        return None

    def inner_text(self) -> str:
        """Concatenate the text of every descendant, unnormalized."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.value)
            else:
                parts.append(child.inner_text())
        return "".join(parts)


Node = Element | Text


def _make_parser() -> etree.XMLParser:
    # No DTD loading or network access. Character references and the
    # predefined entities (&amp; etc.) are still decoded.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        remove_comments=True,
        remove_pis=True,
        huge_tree=True,
    )


def _convert(elem: etree._Element) -> Element:
    node = Element(
        name=etree.QName(elem).localname,
        attrs={etree.QName(k).localname: v for k, v in elem.attrib.items()},
    )
    if elem.text:
        node.children.append(Text(elem.text))
    for child in elem:
        # Comments/PIs are stripped by the parser, but entity nodes and the
        # like can still show up; keep only their tail text.
        if isinstance(child.tag, str):
            node.children.append(_convert(child))
        if child.tail:
            node.children.append(Text(child.tail))
    return node


def build_tree(data: bytes) -> Element:
    """Parse raw document bytes into an ``Element`` tree.

    Args:
        data: Raw XML bytes. The XML declaration (or a BOM) decides the
            encoding; UTF-8 is assumed otherwise.

    Returns:
        The root element.

    Raises:
        MalformedMarkupError: If the bytes are not well-formed XML or cannot
            be decoded.
    """
    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        raise MalformedMarkupError(f"Malformed XML: {exc}") from exc
    except ValueError as exc:
        # Raised by lxml for unusable encodings or unicode input with a
        # declared encoding.
        raise MalformedMarkupError(f"Unreadable XML: {exc}") from exc

    if root is None:
        raise MalformedMarkupError("Document has no root element")

    tree = _convert(root)
    logger.debug(f"Built tree with root <{tree.name}>")
    return tree
