"""
HTML to Markdown serializer.

Walks the node tree and renders each element through a tag-keyed dispatch
table. Unknown elements render their children only.

Key behaviors:
- Headings, emphasis, strikethrough, links, images, block quotes, code, lists, tables
- u, sup and sub have no Markdown form and pass through as tags
- Nested list items are re-indented to align under their parent item's text
- Runs of three or more newlines collapse to two; the result is trimmed
"""

from __future__ import annotations

import re
from collections.abc import Callable

from contentkit.adapters.markup import SoupMarkupAdapter
from contentkit.domain.nodes import CommentNode, ElementNode, Node, TextNode
from contentkit.ports.markup import MarkupPort

LANGUAGE_CLASS_PREFIX = "language-"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")

Renderer = Callable[[ElementNode, ElementNode | None], str]


# --- Helpers ---


def _single_line(text: str) -> str:
    return " ".join(text.split())


def _code_language(element: ElementNode) -> str:
    for token in (element.get("class") or "").split():
        if token.startswith(LANGUAGE_CLASS_PREFIX):
            return token[len(LANGUAGE_CLASS_PREFIX) :]
    return ""


def _fence(text: str, language: str = "") -> str:
    body = text.removesuffix("\n")
    return f"```{language}\n{body}\n```\n\n"


def _wrap(marker: str) -> Renderer:
    def render(element: ElementNode, parent: ElementNode | None) -> str:
        return f"{marker}{render_children(element)}{marker}"

    return render


def _passthrough(element: ElementNode, parent: ElementNode | None) -> str:
    return f"<{element.tag}>{render_children(element)}</{element.tag}>"


def _children_only(element: ElementNode, parent: ElementNode | None) -> str:
    return render_children(element)


# --- Block Renderers ---


def _heading(level: int) -> Renderer:
    def render(element: ElementNode, parent: ElementNode | None) -> str:
        return f"{'#' * level} {_single_line(element.text_content())}\n\n"

    return render


def render_paragraph(element: ElementNode, parent: ElementNode | None) -> str:
    return f"{render_children(element)}\n\n"


def render_div(element: ElementNode, parent: ElementNode | None) -> str:
    return f"{render_children(element)}\n"


def render_blockquote(element: ElementNode, parent: ElementNode | None) -> str:
    content = render_children(element).strip()
    quoted = [f"> {line}" if line else ">" for line in content.split("\n")]
    return "\n".join(quoted) + "\n\n"


def render_pre(element: ElementNode, parent: ElementNode | None) -> str:
    if element.find("code") is not None:
        # The code element renders the fence itself
        return render_children(element)
    return _fence(element.text_content())


def render_code(element: ElementNode, parent: ElementNode | None) -> str:
    if parent is not None and parent.tag == "pre":
        return _fence(element.text_content(), _code_language(element))
    return f"`{element.text_content()}`"


def render_list_item(item: ElementNode, marker: str) -> str:
    """Render one item; continuation lines align under the item text."""
    lines = render_children(item).strip().split("\n")
    indent = " " * len(marker)
    continuation = [indent + line for line in lines[1:] if line.strip()]
    return marker + "\n".join([lines[0], *continuation]) + "\n"


def render_list(element: ElementNode, parent: ElementNode | None) -> str:
    ordered = element.tag == "ol"
    items = []
    for position, child in enumerate(element.element_children(), start=1):
        if child.tag == "li":
            marker = f"{position}. " if ordered else "- "
            items.append(render_list_item(child, marker))
        else:
            items.append(render_node(child, element))
    # Leading newline separates a nested list from the item text before it
    return "\n" + "".join(items) + "\n"


def render_orphan_list_item(element: ElementNode, parent: ElementNode | None) -> str:
    return render_list_item(element, "- ")


def render_hr(element: ElementNode, parent: ElementNode | None) -> str:
    return "---\n\n"


def render_br(element: ElementNode, parent: ElementNode | None) -> str:
    return "\n"


# --- Inline Renderers ---


def render_link(element: ElementNode, parent: ElementNode | None) -> str:
    href = element.get("href") or ""
    return f"[{render_children(element)}]({href})"


def render_image(element: ElementNode, parent: ElementNode | None) -> str:
    src = element.get("src") or ""
    alt = element.get("alt") or ""
    return f"![{alt}]({src})"


# --- Tables ---


def _rows_of(section: ElementNode) -> list[ElementNode]:
    return [row for row in section.element_children() if row.tag == "tr"]


def _cells(row: ElementNode, tag: str) -> list[str]:
    return [
        _single_line(cell.text_content())
        for cell in row.element_children()
        if cell.tag == tag
    ]


def _table_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |\n"


def render_table(element: ElementNode, parent: ElementNode | None) -> str:
    header_row: ElementNode | None = None
    body_rows: list[ElementNode] = []
    loose_rows: list[ElementNode] = []

    for section in element.element_children():
        if section.tag == "thead" and header_row is None:
            rows = _rows_of(section)
            if rows:
                header_row = rows[0]
        elif section.tag == "tbody":
            body_rows.extend(_rows_of(section))
        elif section.tag == "tr":
            loose_rows.append(section)

    # Rows written without thead/tbody: a leading all-th row is the header
    if loose_rows:
        first = loose_rows[0]
        if header_row is None and _cells(first, "th") and not _cells(first, "td"):
            header_row = first
            loose_rows = loose_rows[1:]
        body_rows.extend(loose_rows)

    result = ""
    if header_row is not None:
        headers = _cells(header_row, "th")
        result += _table_row(headers)
        result += _table_row(["---"] * len(headers))

    for row in body_rows:
        result += _table_row(_cells(row, "td"))

    return result + "\n\n"


# --- Dispatch ---

TAG_RENDERERS: dict[str, Renderer] = {
    "h1": _heading(1),
    "h2": _heading(2),
    "h3": _heading(3),
    "h4": _heading(4),
    "h5": _heading(5),
    "h6": _heading(6),
    "p": render_paragraph,
    "div": render_div,
    "strong": _wrap("**"),
    "b": _wrap("**"),
    "em": _wrap("*"),
    "i": _wrap("*"),
    "s": _wrap("~~"),
    "strike": _wrap("~~"),
    "del": _wrap("~~"),
    "u": _passthrough,
    "sup": _passthrough,
    "sub": _passthrough,
    "a": render_link,
    "img": render_image,
    "blockquote": render_blockquote,
    "pre": render_pre,
    "code": render_code,
    "ul": render_list,
    "ol": render_list,
    "li": render_orphan_list_item,
    "hr": render_hr,
    "br": render_br,
    "table": render_table,
    "span": _children_only,
}


def render_node(node: Node, parent: ElementNode | None = None) -> str:
    """Render a single node."""
    if isinstance(node, TextNode):
        return node.value
    if isinstance(node, CommentNode):
        return ""

    renderer = TAG_RENDERERS.get(node.tag, _children_only)
    return renderer(node, parent)


def render_children(element: ElementNode) -> str:
    """Render all children of an element."""
    parts = []
    for child in element.children:
        parts.append(render_node(child, element))
    return "".join(parts)


# --- Main Conversion Functions ---


def tree_to_markdown(tree: ElementNode) -> str:
    """Render a parsed tree to Markdown, with newline cleanup."""
    markdown = render_children(tree) if tree.is_fragment else render_node(tree)
    markdown = _EXCESS_NEWLINES.sub("\n\n", markdown)
    return markdown.strip()


_DEFAULT_MARKUP = SoupMarkupAdapter()


def html_to_markdown(markup: str, *, markup_port: MarkupPort | None = None) -> str:
    """
    Convert markup to Markdown.

    Args:
        markup: HTML fragment
        markup_port: Parser to use; defaults to the BeautifulSoup adapter

    Returns:
        Markdown text
    """
    if not markup:
        return ""
    port = markup_port or _DEFAULT_MARKUP
    return tree_to_markdown(port.parse(markup))
