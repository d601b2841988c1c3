"""Tests for skylark.templating.view — kida-backed rendering."""

from pathlib import Path

from skylark.templating.view import View


class TestView:
    def test_render_with_data(self, tmp_path: Path) -> None:
        (tmp_path / "hello.html").write_text("Hello {{ name }}!")
        assert View(tmp_path).render("hello", {"name": "world"}) == "Hello world!"

    def test_view_vars_are_overlaid(self, tmp_path: Path) -> None:
        (tmp_path / "page.html").write_text("{{ site }}: {{ title }}")
        view = View(tmp_path)
        view.set({"site": "Skylark", "title": "default"})
        assert view.fetch("page", {"title": "Home"}) == "Skylark: Home"

    def test_autoescape(self, tmp_path: Path) -> None:
        (tmp_path / "raw.html").write_text("{{ value }}")
        rendered = View(tmp_path).render("raw", {"value": "<b>"})
        assert "<b>" not in rendered
        assert "&lt;b" in rendered

    def test_template_name_and_exists(self, tmp_path: Path) -> None:
        (tmp_path / "index.html").write_text("")
        view = View(tmp_path)
        assert view.template_name("index") == "index.html"
        assert view.template_name("feed.xml") == "feed.xml"
        assert view.exists("index")
        assert not view.exists("missing")

    def test_vars(self) -> None:
        view = View()
        view.set("a", 1)
        assert view.has("a")
        assert view.get("a") == 1
        view.clear("a")
        assert view.get("a", "gone") == "gone"
