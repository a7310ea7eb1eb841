"""
Tests for the node tree.
"""

from __future__ import annotations

from contentkit.domain.nodes import (
    FRAGMENT_TAG,
    CommentNode,
    ElementNode,
    TextNode,
    node_from_dict,
)


def _sample() -> ElementNode:
    return ElementNode.fragment(
        [
            ElementNode(
                tag="p",
                children=[
                    TextNode("Hello "),
                    ElementNode(tag="strong", children=[TextNode("world")]),
                ],
            ),
            CommentNode(" note "),
            ElementNode(tag="p", children=[TextNode("Bye")]),
        ]
    )


class TestElementNode:
    """Tests for ElementNode queries."""

    def test_fragment_root(self) -> None:
        """Fragment factory uses the reserved tag."""
        root = ElementNode.fragment()
        assert root.tag == FRAGMENT_TAG
        assert root.is_fragment
        assert root.children == []

    def test_iter_descendants_is_pre_order(self) -> None:
        """Descendants are yielded in document order."""
        kinds = []
        for node in _sample().iter_descendants():
            if isinstance(node, ElementNode):
                kinds.append(node.tag)
            elif isinstance(node, TextNode):
                kinds.append(node.value)
            else:
                kinds.append("#comment")
        assert kinds == ["p", "Hello ", "strong", "world", "#comment", "p", "Bye"]

    def test_text_content_skips_comments(self) -> None:
        assert _sample().text_content() == "Hello worldBye"

    def test_find_and_find_all(self) -> None:
        root = _sample()
        strong = root.find("strong")
        assert strong is not None
        assert strong.text_content() == "world"
        assert len(root.find_all("p")) == 2
        assert root.find("table") is None

    def test_element_children(self) -> None:
        first = _sample().element_children()[0]
        assert [child.tag for child in first.element_children()] == ["strong"]

    def test_deep_tree_text_content(self) -> None:
        """Text extraction does not recurse."""
        node = ElementNode(tag="div", children=[TextNode("leaf")])
        for _ in range(5000):
            node = ElementNode(tag="div", children=[node])
        assert node.text_content() == "leaf"

    def test_get_attribute(self) -> None:
        link = ElementNode(tag="a", attributes={"href": "/x"})
        assert link.get("href") == "/x"
        assert link.get("title") is None
        assert link.get("title", "") == ""


class TestSerialization:
    """Tests for dictionary conversion."""

    def test_to_dict_and_back(self) -> None:
        root = _sample()
        restored = node_from_dict(root.to_dict())
        assert restored == root

    def test_to_dict_omits_empty_fields(self) -> None:
        assert ElementNode(tag="br").to_dict() == {"type": "element", "tag": "br"}
