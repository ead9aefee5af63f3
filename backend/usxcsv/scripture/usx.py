"""Walk a USX element tree and emit verse rows.

USX marks verses with milestone pairs, ``<verse sid="GEN 1:1"/>`` ...
``<verse eid="GEN 1:1"/>``, which may sit in different paragraphs. The
walker therefore keeps a running ``VerseAccumulator`` across the whole
depth-first traversal instead of mapping elements to verses.
"""

from __future__ import annotations

import logging

from usxcsv.errors import InvalidRootElementError, MissingBookCodeError
from usxcsv.scripture.markup import is_heading_style, style_tag
from usxcsv.scripture.rows import (
    VerseAccumulator,
    VerseRow,
    normalize_whitespace,
    sort_rows,
)
from usxcsv.scripture.tree import Element, Node, Text, build_tree

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "usx"


def _find_note_text(node: Element) -> Element | None:
    """Depth-first search for the first ``<char style="ft">`` below a note."""
    for child in node.children:
        if not isinstance(child, Element):
            continue
        if child.name == "char" and child.get("style") == "ft":
            return child
        found = _find_note_text(child)
        if found is not None:
            return found
    return None


class UsxWalker:
    """Convert a USX tree into verse rows.

    Usage::

        walker = UsxWalker(build_tree(data))
        rows = walker.walk()
    """

    def __init__(self, root: Element):
        if root.name != ROOT_ELEMENT:
            raise InvalidRootElementError(
                f"Expected <{ROOT_ELEMENT}> root element, found <{root.name}>"
            )
        book = root.find_child("book")
        if book is None or not book.get("code"):
            raise MissingBookCodeError("No <book> element with a code attribute")

        self.root = root
        self.state = VerseAccumulator(book=book.get("code"))

    def walk(self) -> list[VerseRow]:
        """Traverse the whole document and return rows in emission order.

        A verse that is opened but never closed with an ``eid`` marker is
        not emitted.
        """
        for child in self.root.children:
            self._visit(child)
        logger.debug(f"{self.state.book}: {len(self.state.rows)} rows from USX")
        return list(self.state.rows)

    # =========================================================================
    # Node dispatch
    # =========================================================================

    def _visit(self, node: Node) -> None:
        if isinstance(node, Text):
            self._visit_text(node)
            return

        # note and char handle their own children; everything else recurses
        if node.name == "chapter":
            # End milestones (<chapter eid="..."/>) carry no number
            if node.get("number"):
                self.state.chapter = node.get("number")
        elif node.name == "verse":
            self._visit_verse(node)
        elif node.name == "note":
            self._visit_note(node)
            return
        elif node.name == "para":
            self._visit_para(node)
        elif node.name == "char":
            self._visit_char(node)
            return

        for child in node.children:
            self._visit(child)

    def _visit_text(self, node: Text) -> None:
        if not self.state.in_verse:
            return
        text = normalize_whitespace(node.value)
        if text:
            self.state.append_text(text)

    def _visit_verse(self, node: Element) -> None:
        if node.get("sid"):
            self.state.start_verse(node.get("number"))
        elif node.get("eid"):
            self.state.emit()
            self.state.reset_verse()

    def _visit_note(self, node: Element) -> None:
        """Route a note's ``ft`` text to the footnote or cross-reference list."""
        ft = _find_note_text(node)
        if ft is None:
            return
        text = normalize_whitespace(ft.inner_text())
        if node.get("style").startswith("x"):
            self.state.add_crossref(text)
        else:
            self.state.add_footnote(text)

    def _visit_para(self, node: Element) -> None:
        if is_heading_style(node.get("style")):
            self.state.set_subtitle(normalize_whitespace(node.inner_text()))

    def _visit_char(self, node: Element) -> None:
        style = node.get("style")
        if style == "sup":
            return

        tag = style_tag(style)
        if tag and self.state.in_verse:
            self.state.open_tag(tag)
        for child in node.children:
            self._visit(child)
        if tag and self.state.in_verse:
            self.state.close_tag(tag)


def parse_usx(data: bytes) -> list[VerseRow]:
    """Parse USX bytes into ordered verse rows.

    Raises:
        MalformedMarkupError: If the XML is not well-formed.
        InvalidRootElementError: If the root is not ``<usx>``.
        MissingBookCodeError: If there is no ``<book code="...">``.
    """
    walker = UsxWalker(build_tree(data))
    return sort_rows(walker.walk())
