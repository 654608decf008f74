"""Page records and the markdown page builder.

A markdown document becomes one page, or several when it is exploded at
its top-level headings. Front-matter keys other than the reserved ones are
carried onto every produced page.
"""

import copy
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any

import yaml

from zzap.core.markdown import MarkdownRenderer, first_tag_text, render_markdown
from zzap.core.types import join_web_path, split_web_path

DEFAULT_LAYOUT = "default"
UNTITLED_SLUG = "section"

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)
_APOSTROPHE_RE = re.compile(r"['\u2019]")
_RUN_RE = re.compile(r"[^\W_]+")


class FrontMatterError(ValueError):
    """Raised when a front-matter block is not a valid YAML mapping."""


@dataclass(frozen=True)
class Page:
    """Page ready for rendering.

    ``content`` is the HTML payload handed to the layout. ``extra`` holds
    custom fields, such as pass-through front-matter keys.
    """

    path: str
    title: str = ""
    description: str = ""
    layout: str = DEFAULT_LAYOUT
    content: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization and templates."""
        return {
            **self.extra,
            "path": self.path,
            "title": self.title,
            "description": self.description,
            "layout": self.layout,
            "content": self.content,
        }


@dataclass(frozen=True)
class SitemapEntry:
    """Navigable summary of a page."""

    path: str
    title: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "title": self.title}


@dataclass
class _Document:
    """Unit of markdown that becomes exactly one page."""

    path: str
    markdown: str


def kebab_case(text: str) -> str:
    """Convert text to a kebab-case slug.

    Apostrophes are dropped, then the text splits on non-alphanumerics,
    camelCase boundaries and letter/digit boundaries. Letters of any script
    are kept, e.g. "Getting Started!" -> "getting-started",
    "HTMLParser" -> "html-parser", "Über uns" -> "über-uns".
    """
    text = _APOSTROPHE_RE.sub("", unicodedata.normalize("NFC", text))
    return "-".join(
        word.lower() for run in _RUN_RE.findall(text) for word in _split_words(run)
    )


def _split_words(run: str) -> list[str]:
    """Split a run of letters and digits at case and digit boundaries."""
    words: list[str] = []
    start = 0
    for i in range(1, len(run)):
        prev, char = run[i - 1], run[i]
        following = run[i + 1 : i + 2]
        if (
            prev.isdigit() != char.isdigit()
            or (prev.islower() and char.isupper())
            or (prev.isupper() and char.isupper() and following.islower())
        ):
            words.append(run[start:i])
            start = i
    words.append(run[start:])
    return words


def parse_front_matter(markdown_text: str) -> tuple[dict[str, Any], str]:
    """Split a leading front-matter block from markdown text.

    Args:
        markdown_text: Raw markdown, optionally starting with a ``---`` block

    Returns:
        Tuple of (front-matter mapping, remaining markdown body)

    Raises:
        FrontMatterError: If the block is not valid YAML or not a mapping
    """
    match = FRONT_MATTER_RE.match(markdown_text)
    if match is None:
        return {}, markdown_text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid front-matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError("Front-matter must be a mapping")

    return data, markdown_text[match.end() :]


def from_markdown(
    markdown_text: str,
    path: str,
    *,
    explode: bool = False,
    render: MarkdownRenderer = render_markdown,
) -> list[Page]:
    """Build pages from a markdown document.

    Args:
        markdown_text: Raw markdown, optionally with front-matter
        path: Web path of the document. When exploding, pages are placed
              next to it (its last segment is replaced by each heading slug).
        explode: Split the document into one page per top-level heading
        render: Markdown to HTML converter

    Returns:
        Pages in document order

    Raises:
        FrontMatterError: If the front-matter block is malformed
    """
    front_matter, body = parse_front_matter(markdown_text)
    title = front_matter.pop("title", None)
    description = front_matter.pop("description", None)
    layout = front_matter.pop("layout", None)

    if explode:
        documents = _explode(body, path)
    else:
        documents = [_Document(path=path, markdown=body)]

    pages: list[Page] = []
    for document in documents:
        html = render(document.markdown)
        pages.append(
            Page(
                path=document.path,
                title=str(title) if title else first_tag_text(html, "h1"),
                description=str(description) if description else first_tag_text(html, "p"),
                layout=str(layout) if layout else DEFAULT_LAYOUT,
                content=html,
                extra=copy.deepcopy(front_matter),
            )
        )
    return pages


def _explode(body: str, path: str) -> list[_Document]:
    """Split markdown body into documents at each ``# `` heading.

    Content before the first heading is dropped. Headings without letters
    or digits are named "section". Every document gets a distinct path.
    """
    parent = split_web_path(path)[:-1]
    slug_counts: dict[str, int] = {}
    used: set[str] = set()

    documents: list[_Document] = []
    current: _Document | None = None
    for line in body.split("\n"):
        if line.startswith("# "):
            base = kebab_case(line[2:]) or UNTITLED_SLUG
            count = slug_counts.get(base, 0)
            slug = f"{base}-{count}" if count else base
            while slug in used:
                count += 1
                slug = f"{base}-{count}"
            slug_counts[base] = count + 1
            used.add(slug)

            current = _Document(path=join_web_path(*parent, slug), markdown=line + "\n")
            documents.append(current)
        elif current is not None:
            current.markdown += line + "\n"

    return documents
