"""
Tests for the allow-list sanitizer.
"""

from __future__ import annotations

import pytest

from contentkit.adapters.markup import SoupMarkupAdapter
from contentkit.adapters.rules import RulesAdapter
from contentkit.components.sanitize import (
    DEFAULT_ALLOWED_TAGS,
    LINK_REL,
    SanitizationNotice,
    SanitizationPolicy,
    SanitizeHtmlInput,
    clean_style,
    is_external_url,
    is_unsafe_url,
    parse_style,
    run,
    run_sanitize,
    sanitize,
    sanitize_html,
)
from contentkit.domain.nodes import CommentNode, ElementNode, TextNode
from contentkit.rules.models import ContentRules, SanitizerRules


class TestUnwrap:
    """Disallowed elements lose their tag but keep their content."""

    def test_script_is_unwrapped_and_handler_stripped(self) -> None:
        html = '<p onclick="x()">hi <script>bad()</script></p>'
        assert sanitize_html(html, ["p"]) == "<p>hi bad()</p>"

    def test_nested_disallowed_elements(self) -> None:
        html = "<section><article><p>x</p></article></section>"
        assert sanitize_html(html) == "<p>x</p>"

    def test_spliced_children_are_sanitized(self) -> None:
        """Children of an unwrapped element are visited, not skipped."""
        html = '<font><b>bold</b><p onmouseover="x()">para</p></font>'
        assert sanitize_html(html, ["p"]) == "bold<p>para</p>"

    def test_empty_tag_list_uses_default(self) -> None:
        html = "<h3>t</h3><sup>1</sup><iframe></iframe>"
        assert sanitize_html(html, []) == "<h3>t</h3><sup>1</sup>"

    def test_tag_list_is_case_insensitive(self) -> None:
        assert sanitize_html("<p>x</p>", ["P"]) == "<p>x</p>"

    def test_comments_are_dropped(self) -> None:
        assert sanitize_html("<p>a<!-- secret -->b</p>") == "<p>ab</p>"

    def test_empty_input(self) -> None:
        assert sanitize_html("") == ""

    def test_raw_text_elements_are_unwrapped_when_allowed(self) -> None:
        assert sanitize_html("<style>a<b</style>", ["style"]) == "a&lt;b"
        assert sanitize_html("<p><script>x</script></p>", ["p", "script"]) == "<p>x</p>"

    def test_raw_text_content_is_not_escaped_twice(self) -> None:
        once = sanitize_html("<style>a<b</style>", ["style"])
        assert sanitize_html(once, ["style"]) == once

    def test_whitespace_from_unwrapped_element_is_stable(self) -> None:
        once = sanitize_html("<p><font>\n</font> </p>")
        assert once == "<p>\n</p>"
        assert sanitize_html(once) == once


class TestAttributes:
    """Per-tag attribute allow-list."""

    def test_unlisted_attribute_removed(self) -> None:
        html = '<img src="a.png" alt="A" onerror="x()">'
        assert sanitize_html(html) == '<img src="a.png" alt="A">'

    def test_tag_without_allowed_attributes(self) -> None:
        assert sanitize_html('<li class="x" id="y">a</li>') == "<li>a</li>"

    def test_non_image_data_uri_removed(self) -> None:
        assert sanitize_html('<img src="data:text/html,bad">', ["img"]) == "<img>"

    def test_image_data_uri_kept(self) -> None:
        html = '<img src="data:image/png;base64,AAAA">'
        assert sanitize_html(html, ["img"]) == html

    def test_javascript_href_removed(self) -> None:
        assert sanitize_html('<a href="JavaScript:alert(1)">x</a>') == "<a>x</a>"


class TestStyle:
    """CSS filtering of retained style attributes."""

    def test_unlisted_property_removed(self) -> None:
        html = '<span style="color: red; position: absolute">x</span>'
        assert sanitize_html(html) == '<span style="color: red">x</span>'

    def test_unsafe_value_removed(self) -> None:
        html = '<p style="color: expression(alert(1)); text-align: center">x</p>'
        assert sanitize_html(html) == '<p style="text-align: center">x</p>'

    def test_style_removed_when_nothing_survives(self) -> None:
        html = '<div style="background-color: url(x.png)">x</div>'
        assert sanitize_html(html) == "<div>x</div>"

    def test_style_not_allowed_on_tag(self) -> None:
        assert sanitize_html('<em style="color: red">x</em>') == "<em>x</em>"

    def test_parse_style(self) -> None:
        assert parse_style("Color: red;; bogus; margin : 0 ;") == [
            ("color", "red"),
            ("margin", "0"),
        ]

    def test_clean_style_rejects_escapes(self) -> None:
        allowed = frozenset(["color"])
        assert clean_style("color: \\65 xpression(1)", allowed) == ""

    def test_reformatted_style_is_not_reported(self) -> None:
        notices: list[SanitizationNotice] = []
        html = '<span style="color:red">x</span>'
        assert sanitize_html(html, notices=notices) == '<span style="color: red">x</span>'
        assert notices == []

    def test_filtered_style_is_reported(self) -> None:
        notices: list[SanitizationNotice] = []
        sanitize_html('<span style="color:red;position:fixed">x</span>', notices=notices)
        assert [n.code for n in notices] == ["stripped_style"]


class TestLinks:
    """Link hardening."""

    def test_relative_link_gets_rel_only(self) -> None:
        assert sanitize_html('<a href="/page">x</a>') == (
            f'<a href="/page" rel="{LINK_REL}">x</a>'
        )

    def test_external_link_opens_in_new_tab(self) -> None:
        assert sanitize_html('<a href="https://example.com" rel="opener">x</a>') == (
            f'<a href="https://example.com" rel="{LINK_REL}" target="_blank">x</a>'
        )

    def test_same_origin_link_stays_in_tab(self) -> None:
        policy = SanitizationPolicy.from_tags(origin="https://example.com")
        out = sanitize_html('<a href="https://example.com/a">x</a>', policy=policy)
        assert out == f'<a href="https://example.com/a" rel="{LINK_REL}">x</a>'

    def test_link_without_href_is_not_hardened(self) -> None:
        assert sanitize_html('<a name="top">x</a>') == "<a>x</a>"

    def test_hardening_applies_with_narrow_attribute_map(self) -> None:
        policy = SanitizationPolicy.from_tags(["a"], allowed_attributes={"a": frozenset(["href"])})
        out = sanitize_html('<a href="/x" target="_top">x</a>', policy=policy)
        assert out == f'<a href="/x" rel="{LINK_REL}">x</a>'


class TestUrlChecks:
    """URL scheme checks."""

    def test_script_schemes(self) -> None:
        assert is_unsafe_url("javascript:alert(1)")
        assert is_unsafe_url("  JAVASCRIPT:alert(1)")
        assert is_unsafe_url("java\tscript:alert(1)")
        assert is_unsafe_url("\x01javascript:alert(1)")
        assert is_unsafe_url("data:text/html,<b>x</b>")

    def test_safe_urls(self) -> None:
        assert not is_unsafe_url("https://example.com")
        assert not is_unsafe_url("/relative/path")
        assert not is_unsafe_url("data:image/png;base64,AAAA")
        assert not is_unsafe_url("")

    def test_external_detection(self) -> None:
        assert is_external_url("https://other.org/x", "https://example.com")
        assert is_external_url("http://example.com/x", "https://example.com")
        assert not is_external_url("https://EXAMPLE.com/x", "https://example.com")
        assert not is_external_url("/local", None)
        assert not is_external_url("#anchor", "https://example.com")
        assert is_external_url("//cdn.example.net/x", "https://example.com")
        assert is_external_url("https://example.com", None)


class TestTreeSanitize:
    """Tree-level sanitize."""

    def test_input_tree_is_not_modified(self) -> None:
        tree = ElementNode.fragment(
            [ElementNode(tag="p", attributes={"onclick": "x()"}, children=[TextNode("a")])]
        )
        before = tree.to_dict()
        sanitize(tree)
        assert tree.to_dict() == before

    def test_non_fragment_input_is_wrapped(self) -> None:
        result = sanitize(ElementNode(tag="p", children=[TextNode("a")]))
        assert result.is_fragment
        assert [child.tag for child in result.element_children()] == ["p"]

    def test_adjacent_text_is_merged(self) -> None:
        font = ElementNode(tag="font", children=[TextNode("\n")])
        tree = ElementNode.fragment([ElementNode(tag="p", children=[font, TextNode(" ")])])
        paragraph = sanitize(tree).element_children()[0]
        assert paragraph.children == [TextNode("\n ")]

    def test_empty_text_is_dropped(self) -> None:
        result = sanitize(ElementNode.fragment([TextNode(""), ElementNode(tag="p")]))
        assert [type(child) for child in result.children] == [ElementNode]

    def test_comment_root(self) -> None:
        result = sanitize(CommentNode("x"))
        assert result.is_fragment
        assert result.children == []

    def test_notices_collected(self) -> None:
        notices: list[SanitizationNotice] = []
        sanitize_html('<p onclick="x()"><script>s</script></p>', ["p"], notices=notices)
        codes = [n.code for n in notices]
        assert codes == ["stripped_attribute", "stripped_tag"]

    def test_output_tags_are_allow_listed(self) -> None:
        html = "<div><form><input><p>x</p></form><object>y</object></div>"
        tree = sanitize(SoupMarkupAdapter().parse(html))
        tags = {node.tag for node in tree.iter_descendants() if isinstance(node, ElementNode)}
        assert tags <= DEFAULT_ALLOWED_TAGS


class TestComponent:
    """Tests for the sanitize component entry points."""

    def test_run_sanitize_defaults(self) -> None:
        out = run_sanitize(SanitizeHtmlInput(html="<p>x<script>y</script></p>"))
        assert out.success
        assert out.html == "<p>xy</p>"
        assert [n.code for n in out.notices] == ["stripped_tag"]

    def test_rules_supply_tags_and_origin(self) -> None:
        rules = RulesAdapter(
            ContentRules(
                rules_version="test",
                sanitizer=SanitizerRules(allowed_tags=["p", "a"], origin="https://example.com"),
            )
        )
        inp = SanitizeHtmlInput(html='<h1>t</h1><p><a href="https://example.com/x">x</a></p>')
        out = run_sanitize(inp, rules=rules)
        assert out.html == f't<p><a href="https://example.com/x" rel="{LINK_REL}">x</a></p>'

    def test_caller_tags_override_rules(self) -> None:
        rules = RulesAdapter(
            ContentRules(rules_version="test", sanitizer=SanitizerRules(allowed_tags=["p"]))
        )
        out = run_sanitize(SanitizeHtmlInput(html="<h1>t</h1>", allowed_tags=("h1",)), rules=rules)
        assert out.html == "<h1>t</h1>"

    def test_empty_rules_use_defaults(self, rules_port: RulesAdapter) -> None:
        inp = SanitizeHtmlInput(html='<span style="color: red">x</span>')
        out = run_sanitize(inp, rules=rules_port)
        assert out.html == '<span style="color: red">x</span>'

    def test_run_rejects_unknown_input(self) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run("not an input")  # type: ignore[arg-type]
