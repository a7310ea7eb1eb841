"""
Node Tree - in-memory representation of parsed markup.

Key behaviors:
- Text, comment and element nodes in an ordered tree
- A parsed document is an element tagged FRAGMENT_TAG whose children are the content
- Text extraction is iterative so deep trees never exhaust the stack
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

FRAGMENT_TAG = "#fragment"


@dataclass
class TextNode:
    """Character data."""

    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "value": self.value}


@dataclass
class CommentNode:
    """Markup comment. Kept by the parser, dropped by the sanitizer."""

    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "comment", "value": self.value}


@dataclass
class ElementNode:
    """
    An element with a lowercase tag, ordered attributes and ordered children.

    Children are owned exclusively by their parent.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @classmethod
    def fragment(cls, children: list[Node] | None = None) -> ElementNode:
        """Create a document fragment root."""
        return cls(tag=FRAGMENT_TAG, children=list(children or []))

    @property
    def is_fragment(self) -> bool:
        return self.tag == FRAGMENT_TAG

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get an attribute value."""
        return self.attributes.get(name, default)

    def element_children(self) -> list[ElementNode]:
        """Direct children that are elements."""
        return [child for child in self.children if isinstance(child, ElementNode)]

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant in document order (pre-order)."""
        stack: list[Node] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, ElementNode):
                stack.extend(reversed(node.children))

    def find(self, tag: str) -> ElementNode | None:
        """First descendant element with the given tag."""
        for node in self.iter_descendants():
            if isinstance(node, ElementNode) and node.tag == tag:
                return node
        return None

    def find_all(self, tag: str) -> list[ElementNode]:
        """All descendant elements with the given tag, in document order."""
        return [
            node
            for node in self.iter_descendants()
            if isinstance(node, ElementNode) and node.tag == tag
        ]

    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(
            node.value for node in self.iter_descendants() if isinstance(node, TextNode)
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"type": "element", "tag": self.tag}
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


Node = TextNode | CommentNode | ElementNode


def node_from_dict(data: dict[str, Any]) -> Node:
    """Create a node from its dictionary form."""
    node_type = data.get("type", "")
    if node_type == "text":
        return TextNode(value=data.get("value", ""))
    if node_type == "comment":
        return CommentNode(value=data.get("value", ""))
    return ElementNode(
        tag=data.get("tag", "").lower(),
        attributes=dict(data.get("attributes", {})),
        children=[node_from_dict(child) for child in data.get("children", [])],
    )
