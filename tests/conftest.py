"""Pytest fixtures building small static sites on disk."""
import pytest

from html_inliner.config import InlineConfig

# Signature plus IHDR chunk header; enough for type sniffing.
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"

INDEX_HTML = """<!DOCTYPE html>
<html>
  <head>
    <title>Demo</title>
    <link rel="stylesheet" href="css/style.css">
    <link rel="stylesheet" href="http://cdn.example.com/reset.css">
    <!-- page comment -->
  </head>
  <body>
    <h1>Demo</h1>
    <img rome-embed src="img/logo.png" alt="logo">
    <img src="img/photo.png" alt="photo">
    <script src="js/app.js"></script>
    <script src="/static/analytics.js"></script>
  </body>
</html>
"""

STYLE_CSS = """body {
  background-image: url(images/bg.png);
  color: red;
}
"""

APP_JS = 'console.log("hello-from-app");\n'


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def config() -> InlineConfig:
    return InlineConfig()


@pytest.fixture
def site(tmp_path):
    """A page referencing one stylesheet, one script and one marked image."""
    root = tmp_path / "site"
    (root / "css").mkdir(parents=True)
    (root / "js").mkdir()
    (root / "img").mkdir()
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "css" / "style.css").write_text(STYLE_CSS, encoding="utf-8")
    (root / "js" / "app.js").write_text(APP_JS, encoding="utf-8")
    (root / "img" / "logo.png").write_bytes(PNG_BYTES)
    (root / "img" / "photo.png").write_bytes(PNG_BYTES)
    return root


@pytest.fixture
def write_page(tmp_path):
    """Write ``index.html`` with the given markup and return its path."""

    def _write(markup: str, name: str = "index.html"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markup, encoding="utf-8")
        return path

    return _write
