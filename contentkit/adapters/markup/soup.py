"""
BeautifulSoup markup adapter.

Implements MarkupPort on top of BeautifulSoup4 with the stdlib html.parser
backend.

Key behaviors:
- Attribute values are kept as plain strings (class is not split into a list)
- Comments become CommentNode; doctypes, CDATA and processing instructions are dropped
- Subtrees nested deeper than max_depth are flattened to their text
- Rejected markup degrades to an empty fragment
- Serialization escapes text and attribute values; void elements get no end tag
- Serialized output parses back to the same tree: adjacent text is written as one
  run, and a whitespace-only run outside pre/textarea is collapsed the way the
  parser collapses it
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Comment, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

from contentkit.domain.nodes import CommentNode, ElementNode, Node, TextNode

logger = logging.getLogger(__name__)

# Elements BeautifulSoup closes immediately
VOID_ELEMENTS = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "menuitem",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
        "basefont",
        "bgsound",
        "command",
        "frame",
        "image",
        "isindex",
        "nextid",
        "spacer",
    ]
)

# Whitespace inside these is kept as written
PRESERVE_WHITESPACE_TAGS = frozenset(["pre", "textarea"])

# html.parser reads the content of these as raw text, without entity decoding
RAW_TEXT_ELEMENTS = frozenset(["script", "style"])

ASCII_SPACES = "\x20\x0a\x09\x0c\x0d"

DEFAULT_MAX_DEPTH = 200


@dataclass(frozen=True)
class SoupMarkupAdapter:
    """MarkupPort backed by BeautifulSoup4."""

    max_depth: int = DEFAULT_MAX_DEPTH
    features: str = "html.parser"

    def parse(self, markup: str) -> ElementNode:
        root = ElementNode.fragment()
        if not markup:
            return root

        try:
            soup = BeautifulSoup(markup, self.features, multi_valued_attributes=None)
        except ParserRejectedMarkup as e:
            logger.warning("Markup rejected by parser, using empty fragment: %s", e)
            return root

        stack: list[tuple[Tag, ElementNode, int]] = [(soup, root, 0)]
        while stack:
            source, target, depth = stack.pop()
            for child in source.contents:
                if isinstance(child, Comment):
                    target.children.append(CommentNode(value=str(child)))
                elif isinstance(child, PreformattedString):
                    continue
                elif isinstance(child, NavigableString):
                    target.children.append(TextNode(value=str(child)))
                elif isinstance(child, Tag):
                    if depth >= self.max_depth:
                        logger.debug("Flattening <%s> nested beyond depth %d", child.name, depth)
                        target.children.append(TextNode(value=child.get_text()))
                        continue
                    element = ElementNode(
                        tag=child.name.lower(),
                        attributes={
                            str(name).lower(): "" if value is None else str(value)
                            for name, value in child.attrs.items()
                        },
                    )
                    target.children.append(element)
                    stack.append((child, element, depth + 1))
        return root

    def serialize(self, node: Node) -> str:
        return _serialize(node, preserve=False)


# --- Serialization ---


def _text_run(value: str, *, preserve: bool, raw: bool) -> str:
    if not preserve and value and not value.strip(ASCII_SPACES):
        value = "\n" if "\n" in value else " "
    if raw:
        # Only a closing tag can end raw text early
        return value.replace("</", "<\\/")
    return html.escape(value, quote=False)


def _serialize_children(element: ElementNode, *, preserve: bool) -> str:
    raw = element.tag in RAW_TEXT_ELEMENTS
    parts: list[str] = []
    run: list[str] = []
    for child in element.children:
        if isinstance(child, TextNode):
            run.append(child.value)
            continue
        if run:
            parts.append(_text_run("".join(run), preserve=preserve, raw=raw))
            run = []
        parts.append(_serialize(child, preserve=preserve))
    if run:
        parts.append(_text_run("".join(run), preserve=preserve, raw=raw))
    return "".join(parts)


def _serialize(node: Node, *, preserve: bool) -> str:
    if isinstance(node, TextNode):
        return _text_run(node.value, preserve=preserve, raw=False)
    if isinstance(node, CommentNode):
        return "<!--" + node.value.replace("-->", "--&gt;") + "-->"

    if node.is_fragment:
        return _serialize_children(node, preserve=preserve)

    attrs = "".join(
        f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attributes.items()
    )
    if node.tag in VOID_ELEMENTS:
        return f"<{node.tag}{attrs}>"
    inner = _serialize_children(node, preserve=preserve or node.tag in PRESERVE_WHITESPACE_TAGS)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def create_markup_adapter(max_depth: int = DEFAULT_MAX_DEPTH) -> SoupMarkupAdapter:
    """Create the default markup adapter."""
    return SoupMarkupAdapter(max_depth=max_depth)
