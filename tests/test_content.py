import pytest

from html_inliner.config import InlineConfig
from html_inliner.content import collect_scripts, collect_stylesheets, load_document
from html_inliner.files import FileError


def test_load_document_records_base_path(site, config):
    document = load_document(site / "index.html", config)
    assert document.base_path == site
    assert document.soup.title.string == "Demo"


def test_load_document_missing_file(tmp_path, config):
    with pytest.raises(FileError):
        load_document(tmp_path / "nope.html", config)


def test_collect_scripts_removes_only_local_scripts(site, config):
    document = load_document(site / "index.html", config)
    refs, warnings = collect_scripts(document, config)

    assert warnings == []
    assert [ref.href for ref in refs] == ["js/app.js"]
    assert refs[0].base_dir == "js"
    assert "hello-from-app" in refs[0].raw_content
    remaining = [tag["src"] for tag in document.soup.select("script[src]")]
    assert remaining == ["/static/analytics.js"]


def test_collect_scripts_skips_unreadable_files(write_page, config):
    page = write_page(
        '<html><head></head><body><script src="missing.js"></script>'
        '<script src="//cdn.example.com/x.js"></script></body></html>'
    )
    document = load_document(page, config)
    refs, warnings = collect_scripts(document, config)

    assert refs == []
    assert len(warnings) == 1
    assert "missing.js" in warnings[0]
    assert [tag["src"] for tag in document.soup.select("script[src]")] == [
        "//cdn.example.com/x.js"
    ]


def test_data_uri_script_is_treated_as_local(write_page, config):
    page = write_page('<body><script src="data:text/javascript,alert(1)"></script></body>')
    document = load_document(page, config)
    refs, warnings = collect_scripts(document, config)
    assert refs == []
    assert len(warnings) == 1
    assert document.soup.find("script") is None


def test_data_uri_stylesheet_is_treated_as_local_and_fatal(write_page, config):
    page = write_page('<head><link rel="stylesheet" href="data:text/css,p{}"></head>')
    document = load_document(page, config)
    with pytest.raises(FileError):
        collect_stylesheets(document, config)


def test_collect_stylesheets(site, config):
    document = load_document(site / "index.html", config)
    refs = collect_stylesheets(document, config)

    assert [ref.href for ref in refs] == ["css/style.css"]
    assert refs[0].base_dir == "css"
    assert refs[0].kind == "stylesheet"
    links = [tag["href"] for tag in document.soup.find_all("link")]
    assert links == ["http://cdn.example.com/reset.css"]


def test_unreadable_stylesheet_is_fatal(write_page, config):
    page = write_page('<head><link rel="stylesheet" href="missing.css"></head>')
    document = load_document(page, config)
    with pytest.raises(FileError):
        collect_stylesheets(document, config)


def test_other_link_types_are_ignored(write_page, config):
    page = write_page('<head><link rel="icon" href="favicon.ico"></head>')
    document = load_document(page, config)
    assert collect_stylesheets(document, config) == []
    assert document.soup.find("link") is not None


def test_html5lib_keeps_svg_attribute_case(write_page):
    page = write_page('<body><svg viewBox="0 0 1 1"></svg></body>')
    assert "viewbox" in load_document(page, InlineConfig()).soup.find("svg").attrs
    document = load_document(page, InlineConfig(parser="html5lib"))
    assert document.soup.find("svg")["viewBox"] == "0 0 1 1"
