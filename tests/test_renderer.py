"""Tests for page rendering."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound
from zzap.core.page import Page, SitemapEntry
from zzap.core.renderer import PageRenderer, output_path


class TestPageRenderer:
    """Tests for PageRenderer."""

    def test__default_layout__full_document(self) -> None:
        """The bundled layout wraps content in a document."""
        renderer = PageRenderer(site={"title": "Test Site", "lang": "en"})
        page = Page(path="/x", title="X", description="About X", content="<p>Body</p>")

        html = renderer.render(page)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>X | Test Site</title>" in html
        assert '<meta name="description" content="About X">' in html
        assert '<div id="zzap-root"><p>Body</p></div>' in html

    def test__untitled_page__site_title_only(self) -> None:
        """Pages without title show just the site title."""
        renderer = PageRenderer(site={"title": "Test Site"})

        html = renderer.render(Page(path="/"))

        assert "<title>Test Site</title>" in html

    def test__metadata__autoescaped(self) -> None:
        """Page fields are escaped, content is not."""
        renderer = PageRenderer(site={"title": "S"})
        page = Page(path="/x", title="<script>alert(1)</script>", content="<em>ok</em>")

        html = renderer.render(page)

        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "<em>ok</em>" in html

    def test__heads_and_scripts__inserted_raw(self) -> None:
        """Fragments are placed verbatim in head and body."""
        renderer = PageRenderer(site={"title": "S"})

        html = renderer.render(
            Page(path="/"),
            heads=["<meta name='a'>", "<meta name='b'>"],
            scripts=["<script src='/app.js'></script>"],
        )

        assert "<meta name='a'>\n<meta name='b'>" in html
        assert "<script src='/app.js'></script>" in html
        assert html.index("<meta name='a'>") < html.index("</head>")
        assert html.index("<script src='/app.js'>") > html.index("<body>")

    def test__site_layout__overrides_and_sees_extra(self, tmp_path: Path) -> None:
        """Site layouts get page fields, extra front-matter and the sitemap."""
        (tmp_path / "post.html").write_text(
            "{{ page.title }} by {{ page.author }}"
            "{% for entry in sitemap %} [{{ entry.path }}]{% endfor %}"
        )
        renderer = PageRenderer(tmp_path, site={"title": "S"})
        page = Page(path="/p", title="Post", layout="post", extra={"author": "Ann"})

        html = renderer.render(page, sitemap=[SitemapEntry(path="/", title="Home")])

        assert html == "Post by Ann [/]"

    def test__site_layout__shadows_bundled_default(self, tmp_path: Path) -> None:
        """A site default.html replaces the bundled one."""
        (tmp_path / "default.html").write_text("custom: {{ content }}")
        renderer = PageRenderer(tmp_path)

        assert renderer.render(Page(path="/", content="<b>x</b>")) == "custom: <b>x</b>"

    def test__missing_layout__raises(self, tmp_path: Path) -> None:
        """An unknown layout is an error."""
        renderer = PageRenderer(tmp_path)

        with pytest.raises(TemplateNotFound):
            renderer.render(Page(path="/", layout="nope"))


class TestOutputPath:
    """Tests for output_path()."""

    def test__root__index_html(self, tmp_path: Path) -> None:
        """The root page is written to index.html."""
        assert output_path(tmp_path, "/") == tmp_path / "index.html"

    def test__nested__directory_index(self, tmp_path: Path) -> None:
        """Nested pages get their own directory."""
        assert output_path(tmp_path, "/guide/setup") == tmp_path / "guide" / "setup" / "index.html"
