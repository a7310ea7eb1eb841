"""
Allow-list HTML sanitizer.

Key behaviors:
- Disallowed elements are unwrapped: the tag goes, the content stays
- script, style and the other raw-text elements are unwrapped under every policy
- Adjacent text nodes are merged, so the output tree is the one its markup parses to
- Attributes outside the per-tag allow-list are removed
- style attributes keep only allow-listed CSS properties with inert values
- javascript: URLs and non-image data: URLs are removed from href/src
- Links are hardened with rel="noopener noreferrer"; external links open in a new tab
- Never raises; applying it twice gives the same result as applying it once
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from contentkit.adapters.markup import SoupMarkupAdapter
from contentkit.domain.nodes import CommentNode, ElementNode, Node, TextNode
from contentkit.ports.markup import MarkupPort

from .models import SanitizationNotice

logger = logging.getLogger(__name__)

# --- Defaults ---

DEFAULT_ALLOWED_TAGS: frozenset[str] = frozenset(
    [
        "p",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "ul",
        "ol",
        "li",
        "blockquote",
        "pre",
        "code",
        "a",
        "strong",
        "em",
        "u",
        "s",
        "img",
        "table",
        "thead",
        "tbody",
        "tr",
        "td",
        "th",
        "hr",
        "br",
        "sup",
        "sub",
        "span",
        "div",
    ]
)

_STYLE_ONLY = frozenset(["style"])

DEFAULT_ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset(["href", "target", "rel", "title"]),
    "img": frozenset(["src", "alt", "title", "width", "height"]),
    "table": frozenset(["border", "cellpadding", "cellspacing", "width"]),
    "th": frozenset(["colspan", "rowspan", "scope", "width"]),
    "td": frozenset(["colspan", "rowspan", "width"]),
    "span": _STYLE_ONLY,
    "div": _STYLE_ONLY,
    "p": _STYLE_ONLY,
    "h1": _STYLE_ONLY,
    "h2": _STYLE_ONLY,
    "h3": _STYLE_ONLY,
    "h4": _STYLE_ONLY,
    "h5": _STYLE_ONLY,
    "h6": _STYLE_ONLY,
}

DEFAULT_ALLOWED_CSS_PROPERTIES: frozenset[str] = frozenset(
    [
        "color",
        "background-color",
        "font-family",
        "font-size",
        "font-weight",
        "font-style",
        "text-decoration",
        "text-align",
        "margin",
        "margin-left",
        "margin-right",
        "margin-top",
        "margin-bottom",
        "padding",
        "padding-left",
        "padding-right",
        "padding-top",
        "padding-bottom",
        "border",
        "border-left",
        "border-right",
        "border-top",
        "border-bottom",
        "width",
        "height",
        "max-width",
        "max-height",
        "min-width",
        "min-height",
        "display",
        "line-height",
        "vertical-align",
        "text-indent",
    ]
)

# Substrings that disqualify a CSS value. A backslash is included because CSS
# escapes can spell out any of the others.
UNSAFE_CSS_TOKENS: tuple[str, ...] = ("expression", "javascript:", "eval(", "url(", "\\")

LINK_REL = "noopener noreferrer"

# Unwrapped under every policy: parsers disagree on whether their content is
# markup or raw text
RAW_TEXT_TAGS = frozenset(
    ["script", "style", "xmp", "iframe", "noembed", "noframes", "noscript", "plaintext"]
)

URL_ATTRIBUTES = frozenset(["href", "src"])


# --- Policy ---


@dataclass(frozen=True)
class SanitizationPolicy:
    """Allow-list configuration for one sanitize call."""

    allowed_tags: frozenset[str] = DEFAULT_ALLOWED_TAGS
    allowed_attributes: dict[str, frozenset[str]] = field(
        default_factory=lambda: dict(DEFAULT_ALLOWED_ATTRIBUTES)
    )
    allowed_css_properties: frozenset[str] = DEFAULT_ALLOWED_CSS_PROPERTIES

    # Origin of the editing page, e.g. "https://example.com"
    origin: str | None = None

    @classmethod
    def from_tags(
        cls,
        tags: Iterable[str] = (),
        *,
        allowed_attributes: dict[str, frozenset[str]] | None = None,
        allowed_css_properties: frozenset[str] | None = None,
        origin: str | None = None,
    ) -> SanitizationPolicy:
        """Build a policy from a caller tag list. No tags selects the default set."""
        normalized = frozenset(t.strip().lower() for t in tags if t and t.strip())
        return cls(
            allowed_tags=normalized or DEFAULT_ALLOWED_TAGS,
            allowed_attributes=(
                dict(allowed_attributes)
                if allowed_attributes is not None
                else dict(DEFAULT_ALLOWED_ATTRIBUTES)
            ),
            allowed_css_properties=(
                allowed_css_properties
                if allowed_css_properties is not None
                else DEFAULT_ALLOWED_CSS_PROPERTIES
            ),
            origin=origin,
        )

    def allows(self, tag: str) -> bool:
        return tag in self.allowed_tags and tag not in RAW_TEXT_TAGS

    def attributes_for(self, tag: str) -> frozenset[str]:
        return self.allowed_attributes.get(tag, frozenset())


DEFAULT_POLICY = SanitizationPolicy()


# --- URL Checks ---

_URL_STRIPPED_CHARS = re.compile(r"[\t\n\r]")
_URL_LEADING_JUNK = "".join(chr(c) for c in range(0x21))


def is_unsafe_url(value: str) -> bool:
    """
    Check whether a URL would execute script or load non-image data.

    Tabs and newlines anywhere and leading control characters are ignored,
    as browsers do when reading the scheme.
    """
    normalized = _URL_STRIPPED_CHARS.sub("", value).lstrip(_URL_LEADING_JUNK).lower()
    if normalized.startswith("javascript:"):
        return True
    return normalized.startswith("data:") and not normalized.startswith("data:image/")


def _origin_of(url: str) -> tuple[str, str]:
    parts = urlsplit(url)
    return parts.scheme.lower(), parts.netloc.lower()


def is_external_url(href: str, origin: str | None = None) -> bool:
    """True for absolute URLs (with a host) pointing away from origin."""
    try:
        scheme, netloc = _origin_of(href.strip())
    except ValueError:
        return True
    if not netloc:
        return False
    if not origin:
        return True
    try:
        own_scheme, own_netloc = _origin_of(origin)
    except ValueError:
        return True
    if scheme and scheme != own_scheme:
        return True
    return netloc != own_netloc


# --- Style Filtering ---


def parse_style(style: str) -> list[tuple[str, str]]:
    """Parse a style attribute into (property, value) declarations."""
    declarations = []
    for chunk in style.split(";"):
        name, sep, value = chunk.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip()
        if name and value:
            declarations.append((name, value))
    return declarations


def is_safe_css_value(value: str) -> bool:
    lowered = value.lower()
    return not any(token in lowered for token in UNSAFE_CSS_TOKENS)


def filter_declarations(
    declarations: list[tuple[str, str]], allowed_properties: frozenset[str]
) -> list[tuple[str, str]]:
    return [
        (name, value)
        for name, value in declarations
        if name in allowed_properties and is_safe_css_value(value)
    ]


def format_style(declarations: list[tuple[str, str]]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations)


def clean_style(style: str, allowed_properties: frozenset[str]) -> str:
    """Keep allowed, inert declarations. Empty string when none survive."""
    return format_style(filter_declarations(parse_style(style), allowed_properties))


# --- Tree Sanitizer ---


def _notice(
    notices: list[SanitizationNotice] | None, code: str, message: str, path: str
) -> None:
    if notices is not None:
        notices.append(SanitizationNotice(code=code, message=message, path=path))


def _clean_attributes(
    element: ElementNode,
    policy: SanitizationPolicy,
    notices: list[SanitizationNotice] | None,
    path: str,
) -> dict[str, str]:
    allowed = policy.attributes_for(element.tag)
    cleaned: dict[str, str] = {}

    for name, value in element.attributes.items():
        name = name.lower()
        if name not in allowed:
            _notice(
                notices,
                "stripped_attribute",
                f"Attribute '{name}' stripped from '{element.tag}'",
                path,
            )
            continue

        if name == "style":
            declarations = parse_style(value)
            kept = filter_declarations(declarations, policy.allowed_css_properties)
            if kept != declarations or not kept:
                _notice(notices, "stripped_style", f"Style on '{element.tag}' was filtered", path)
            if not kept:
                continue
            value = format_style(kept)
        elif name in URL_ATTRIBUTES and is_unsafe_url(value):
            _notice(
                notices,
                "unsafe_url",
                f"Unsafe URL in {name}: {value[:50]}",
                path,
            )
            continue

        cleaned[name] = value

    if element.tag == "a" and "href" in cleaned:
        cleaned["rel"] = LINK_REL
        if is_external_url(cleaned["href"], policy.origin):
            cleaned["target"] = "_blank"

    return cleaned


def _sanitize_children(
    children: list[Node],
    policy: SanitizationPolicy,
    notices: list[SanitizationNotice] | None,
    path: str,
) -> list[Node]:
    pending = list(children)
    result: list[Node] = []
    i = 0

    while i < len(pending):
        node = pending[i]

        if isinstance(node, TextNode):
            # Adjacent text is kept as one node, as a parser would read it back
            if result and isinstance(result[-1], TextNode):
                result[-1] = TextNode(value=result[-1].value + node.value)
            elif node.value:
                result.append(TextNode(value=node.value))
            i += 1
            continue

        if isinstance(node, CommentNode):
            _notice(notices, "stripped_comment", "Comment removed", path)
            i += 1
            continue

        if not policy.allows(node.tag):
            # Unwrap in place and revisit the same position
            _notice(notices, "stripped_tag", f"Tag '{node.tag}' was stripped", path)
            pending[i : i + 1] = node.children
            continue

        child_path = f"{path}/{node.tag}[{len(result)}]"
        result.append(
            ElementNode(
                tag=node.tag,
                attributes=_clean_attributes(node, policy, notices, child_path),
                children=_sanitize_children(node.children, policy, notices, child_path),
            )
        )
        i += 1

    return result


def sanitize(
    tree: Node,
    policy: SanitizationPolicy = DEFAULT_POLICY,
    notices: list[SanitizationNotice] | None = None,
) -> ElementNode:
    """
    Sanitize a node tree against a policy.

    The input is not modified. The result is always a fragment root; when the
    input is a fragment its children are sanitized, otherwise the node itself
    is treated as the fragment's only child.

    Pass a list as notices to collect what was removed.
    """
    if isinstance(tree, ElementNode) and tree.is_fragment:
        children = tree.children
    else:
        children = [tree]
    return ElementNode.fragment(_sanitize_children(children, policy, notices, ""))


# --- String Boundary ---

_DEFAULT_MARKUP = SoupMarkupAdapter()


def sanitize_html(
    markup: str,
    allowed_tags: Iterable[str] = (),
    *,
    policy: SanitizationPolicy | None = None,
    markup_port: MarkupPort | None = None,
    notices: list[SanitizationNotice] | None = None,
) -> str:
    """
    Sanitize markup text.

    allowed_tags builds the policy when no explicit policy is given; an empty
    list selects the default tag set.
    """
    if not markup:
        return ""

    port = markup_port or _DEFAULT_MARKUP
    effective = policy or SanitizationPolicy.from_tags(allowed_tags)

    collected: list[SanitizationNotice] = [] if notices is None else notices
    start = len(collected)
    clean = sanitize(port.parse(markup), effective, collected)

    removed = len(collected) - start
    if removed:
        logger.debug("Sanitizer removed %d item(s) from %d chars of markup", removed, len(markup))

    return port.serialize(clean)
