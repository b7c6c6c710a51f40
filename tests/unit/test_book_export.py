"""Unit tests for photo book HTML export."""

from datetime import date

from little_journey.models import BookCover, PhotoBookPage, PhotoBookPageType
from little_journey.tools.book_export import render_photo_book_html
from little_journey.tools.photo_book import PhotoBookEditor


def _pages():
    return [
        PhotoBookPage(id="t", type=PhotoBookPageType.TITLE, title="Mei's March 2025"),
        PhotoBookPage(
            id="p1", type=PhotoBookPageType.PHOTO, image_uri="file:///a.jpg",
            caption="<script>alert(1)</script>", date=date(2025, 3, 5),
        ),
        PhotoBookPage(
            id="p2", type=PhotoBookPageType.MILESTONE, image_uri="file:///b.jpg",
            title="First Steps", date=date(2025, 3, 9),
        ),
    ]


class TestRenderPhotoBookHtml:
    """Test HTML rendering."""

    def test_renders_pages_and_cover(self):
        html = render_photo_book_html(_pages(), BookCover(title="Mei's March 2025", date_range="March 2025"))

        assert html.startswith("<!DOCTYPE html>")
        assert html.count('class="page ') == 4  # cover + 3 pages
        assert "file:///a.jpg" in html
        assert "5 March 2025" in html
        assert "First Steps" in html
        assert "#FF6B6B" in html

    def test_captions_are_escaped(self):
        html = render_photo_book_html(_pages(), BookCover(title="Book"))

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_layout_and_theme(self):
        cover = BookCover(title="Book", color_theme="navy")

        html = render_photo_book_html([], cover, "playful")

        assert 'class="layout-playful"' in html
        assert "Comic Sans MS" in html
        assert "#2C3E50" in html

    def test_writes_output_file(self, tmp_path):
        out = tmp_path / "books" / "march.html"

        html = render_photo_book_html(_pages(), BookCover(title="Book"), output_path=out)

        assert out.read_text(encoding="utf-8") == html

    def test_editor_renders_current_state(self):
        editor = PhotoBookEditor(_pages(), BookCover(title="Edited"), layout="modern")
        editor.remove_page("p1")

        html = editor.render_html()

        assert "file:///a.jpg" not in html
        assert "<title>Edited</title>" in html
        assert "Helvetica Neue" in html
