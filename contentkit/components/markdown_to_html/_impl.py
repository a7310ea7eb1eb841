"""
Markdown to HTML converter.

An ordered sequence of whole-text pattern substitutions. No tree is built and
no rule is reapplied after a later rule runs; text no rule matches passes
through as literal content.

Order:
1. Line structure (paragraph breaks and line breaks are materialized last)
2. ATX headings
3. Bold, italic, strikethrough
4. Fenced code blocks, then inline code
5. Block quotes, one per quoted line
6. Horizontal rules
7. Bullet items wrapped in <ul>, then numbered items wrapped in <ol>
8. Images, then links
9. Pipe tables with alignment
10. Wrap in <p> when the result does not start with a tag

Code is cut out before step 2 and put back as <pre>/<code> at the end, so
no other rule rewrites code contents.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field

# --- Patterns ---

_FENCED_CODE = re.compile(r"```([^\n`]*)\n(.*?)```", re.DOTALL)
_INLINE_CODE = re.compile(r"`([^`\n]+)`")

_HEADING = re.compile(r"^(#{1,6}) (.*?)(?:[ \t]+#+)?[ \t]*$", re.MULTILINE)

_BOLD_STARS = re.compile(r"\*\*(?!\s)(.+?)\*\*")
_BOLD_UNDERSCORES = re.compile(r"(?<!\w)__(?!\s)(.+?)__(?!\w)")
_ITALIC_STAR = re.compile(r"\*(?!\s)(.+?)\*")
_ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_(?!\s)(.+?)_(?!\w)")
_STRIKETHROUGH = re.compile(r"~~(.+?)~~")

_BLOCKQUOTE = re.compile(r"^> (.*)$", re.MULTILINE)
_HORIZONTAL_RULE = re.compile(r"^---[ \t]*$", re.MULTILINE)

_BULLET_ITEM = re.compile(r"^[-*+] (.*)$", re.MULTILINE)
_NUMBERED_ITEM = re.compile(r"^\d+\. (.*)$", re.MULTILINE)
_ITEM_RUN = re.compile(r"^<li>.*</li>$(?:\n<li>.*</li>$)*", re.MULTILINE)

_IMAGE = re.compile(r"!\[([^\]\n]*)\]\(([^)\s]*)\)")
_LINK = re.compile(r"\[([^\]\n]*)\]\(([^)\s]*)\)")

_TABLE = re.compile(
    r"^\|(?P<header>.+)\|[ \t]*\n"
    r"\|(?P<align>[-:| \t]+)\|[ \t]*"
    r"(?P<body>(?:\n\|.*\|[ \t]*)*)$",
    re.MULTILINE,
)
_ALIGN_CELL = re.compile(r"^:?-+:?$")

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")

_BLOCK_LINE = re.compile(
    r"^(?:<(?:h[1-6]|p|div|ul|ol|li|blockquote|pre|hr|table)\b|\x00B\d+\x00)"
)

_PLACEHOLDER = re.compile(r"\x00([BC])(\d+)\x00")


# --- Code Shielding ---


@dataclass
class _CodeStash:
    """Rendered code keyed by placeholder index."""

    blocks: list[str] = field(default_factory=list)
    spans: list[str] = field(default_factory=list)

    def stash_block(self, match: re.Match[str]) -> str:
        language = match.group(1).strip()
        code = html.escape(match.group(2), quote=False)
        if language:
            rendered = f'<pre><code class="language-{html.escape(language)}">{code}</code></pre>'
        else:
            rendered = f"<pre><code>{code}</code></pre>"
        self.blocks.append(rendered)
        return f"\x00B{len(self.blocks) - 1}\x00"

    def stash_span(self, match: re.Match[str]) -> str:
        self.spans.append(f"<code>{html.escape(match.group(1), quote=False)}</code>")
        return f"\x00C{len(self.spans) - 1}\x00"

    def restore(self, text: str) -> str:
        def replace(match: re.Match[str]) -> str:
            index = int(match.group(2))
            return self.blocks[index] if match.group(1) == "B" else self.spans[index]

        return _PLACEHOLDER.sub(replace, text)


# --- Rules ---


def convert_headings(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        level = len(match.group(1))
        return f"<h{level}>{match.group(2)}</h{level}>"

    return _HEADING.sub(replace, text)


def convert_emphasis(text: str) -> str:
    text = _BOLD_STARS.sub(r"<strong>\1</strong>", text)
    text = _BOLD_UNDERSCORES.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_STAR.sub(r"<em>\1</em>", text)
    text = _ITALIC_UNDERSCORE.sub(r"<em>\1</em>", text)
    return _STRIKETHROUGH.sub(r"<s>\1</s>", text)


def convert_blockquotes(text: str) -> str:
    return _BLOCKQUOTE.sub(r"<blockquote>\1</blockquote>", text)


def convert_horizontal_rules(text: str) -> str:
    return _HORIZONTAL_RULE.sub("<hr>", text)


def _wrap_item_runs(text: str, list_tag: str) -> str:
    def replace(match: re.Match[str]) -> str:
        items = match.group(0).replace("\n", "")
        return f"<{list_tag}>{items}</{list_tag}>"

    return _ITEM_RUN.sub(replace, text)


def convert_lists(text: str) -> str:
    """
    Bullet runs are wrapped first. Their lines then start with <ul>, so the
    numbered pass only wraps runs that are still bare.
    """
    text = _BULLET_ITEM.sub(r"<li>\1</li>", text)
    text = _wrap_item_runs(text, "ul")
    text = _NUMBERED_ITEM.sub(r"<li>\1</li>", text)
    return _wrap_item_runs(text, "ol")


def convert_images_and_links(text: str) -> str:
    def image(match: re.Match[str]) -> str:
        alt = html.escape(match.group(1))
        src = html.escape(match.group(2))
        return f'<img src="{src}" alt="{alt}">'

    def link(match: re.Match[str]) -> str:
        href = html.escape(match.group(2))
        return f'<a href="{href}">{match.group(1)}</a>'

    text = _IMAGE.sub(image, text)
    return _LINK.sub(link, text)


def _split_row(row: str) -> list[str]:
    row = row.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def _align_style(marker: str) -> str:
    if marker.startswith(":") and marker.endswith(":"):
        return ' style="text-align: center"'
    if marker.endswith(":"):
        return ' style="text-align: right"'
    if marker.startswith(":"):
        return ' style="text-align: left"'
    return ""


def convert_tables(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        alignments = [a.strip() for a in match.group("align").split("|")]
        if not all(_ALIGN_CELL.match(a) for a in alignments):
            return match.group(0)
        styles = [_align_style(a) for a in alignments]

        def style(i: int) -> str:
            return styles[i] if i < len(styles) else ""

        headers = [cell.strip() for cell in match.group("header").split("|")]
        parts = ["<table><thead><tr>"]
        parts.extend(f"<th{style(i)}>{h}</th>" for i, h in enumerate(headers))
        parts.append("</tr></thead><tbody>")

        for row in match.group("body").strip("\n").split("\n"):
            if not row.strip():
                continue
            parts.append("<tr>")
            parts.extend(f"<td{style(i)}>{c}</td>" for i, c in enumerate(_split_row(row)))
            parts.append("</tr>")

        parts.append("</tbody></table>")
        return "".join(parts)

    return _TABLE.sub(replace, text)


# --- Assembly ---


def assemble_paragraphs(text: str) -> str:
    """
    Materialize line structure.

    Blank lines separate paragraphs; within a paragraph, lines that are not
    block markup are joined with <br> and wrapped in <p>.
    """
    parts: list[str] = []

    for chunk in _PARAGRAPH_BREAK.split(text):
        run: list[str] = []
        for line in chunk.split("\n"):
            if not line.strip():
                continue
            if _BLOCK_LINE.match(line):
                if run:
                    parts.append("<p>" + "<br>".join(run) + "</p>")
                    run = []
                parts.append(line)
            else:
                run.append(line)
        if run:
            parts.append("<p>" + "<br>".join(run) + "</p>")

    return "".join(parts)


# --- Main Conversion Function ---


def markdown_to_html(markdown: str) -> str:
    """
    Convert Markdown to HTML.

    Best-effort and total: never raises, never sanitizes.
    """
    if not markdown:
        return ""

    text = markdown.replace("\r\n", "\n").replace("\r", "\n").replace("\x00", "\ufffd")

    stash = _CodeStash()
    text = _FENCED_CODE.sub(stash.stash_block, text)
    text = _INLINE_CODE.sub(stash.stash_span, text)

    text = convert_headings(text)
    text = convert_emphasis(text)
    text = convert_blockquotes(text)
    text = convert_horizontal_rules(text)
    text = convert_lists(text)
    text = convert_images_and_links(text)
    text = convert_tables(text)

    result = stash.restore(assemble_paragraphs(text))

    if not result.startswith("<"):
        result = f"<p>{result}</p>"
    return result
