"""Markdown to HTML conversion.

Wraps Python-Markdown behind a plain ``render_markdown(text) -> html``
function so the page builder can take any converter as a dependency.
"""

import html
import logging
import re
from collections.abc import Callable

import markdown

logger = logging.getLogger(__name__)

MarkdownRenderer = Callable[[str], str]

DEFAULT_EXTENSIONS = ["extra", "sane_lists"]

_TAG_RE = re.compile(r"<[^>]+>")


def render_markdown(text: str) -> str:
    """Render markdown text to HTML.

    Raw HTML in the source is passed through unchanged.

    Args:
        text: Markdown source text

    Returns:
        Rendered HTML
    """
    logger.debug(f"Converting {len(text)} characters of markdown")
    return markdown.markdown(text, extensions=DEFAULT_EXTENSIONS, output_format="html")


def first_tag_text(html_text: str, tag: str) -> str:
    """Return the text of the first ``tag`` element in rendered HTML.

    Nested markup inside the element is stripped and entities are decoded.

    Args:
        html_text: Rendered HTML
        tag: Element name (e.g., "h1", "p")

    Returns:
        Element text, or empty string if no such element exists
    """
    match = re.search(rf"<{tag}(?:\s[^>]*)?>(.*?)</{tag}>", html_text, re.DOTALL)
    if match is None:
        return ""
    return html.unescape(_TAG_RE.sub("", match.group(1))).strip()
