from typing import Protocol

from contentkit.domain.nodes import ElementNode, Node


class MarkupPort(Protocol):
    """Converts between markup text and the node tree."""

    def parse(self, markup: str) -> ElementNode:
        """Parse markup into a fragment root. Must not raise on malformed input."""
        ...

    def serialize(self, node: Node) -> str:
        """Serialize a node to markup. A fragment root serializes its children only."""
        ...
