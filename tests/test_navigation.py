from conftest import XHTML, build_archive, make_opf
from epubie.core.archive import ArchiveReader
from epubie.core.navigation import build_nav_titles, find_nav_item, scan_nav_titles
from epubie.core.package import parse_package_xml


def test_scan_trims_labels():
    markup = '<ol><li><a href="ch1.xhtml">\n   Chapter 1\n  </a></li></ol>'
    assert scan_nav_titles(markup) == {"ch1.xhtml": "Chapter 1"}


def test_scan_keeps_fragment_and_extra_attributes():
    markup = '<a href="ch2.xhtml#s1" class="toc" id="x">Section</a>'
    assert scan_nav_titles(markup) == {"ch2.xhtml#s1": "Section"}


def test_scan_last_duplicate_wins():
    markup = '<a href="ch1.xhtml">First</a> <a href="ch1.xhtml">Second</a>'
    assert scan_nav_titles(markup) == {"ch1.xhtml": "Second"}


def test_scan_skips_labels_with_nested_markup():
    markup = '<a href="ch1.xhtml"><span>Styled</span></a><a href="ch2.xhtml">Plain</a>'
    assert scan_nav_titles(markup) == {"ch2.xhtml": "Plain"}


def test_scan_requires_double_quoted_href_first():
    markup = "<a href='ch1.xhtml'>Single</a><a id=\"x\" href=\"ch2.xhtml\">Late</a>"
    assert scan_nav_titles(markup) == {}


def _package(manifest):
    return parse_package_xml(make_opf(manifest, []).encode())


def test_find_nav_item_uses_property_token():
    package = _package(
        [
            ("toc", "toc.xhtml", XHTML, "navigation-ish"),
            ("nav", "nav.xhtml", XHTML, "scripted nav"),
        ]
    )
    assert find_nav_item(package).id == "nav"


def test_no_nav_item_gives_empty_map():
    package = _package([("ch1", "ch1.xhtml", XHTML)])
    with ArchiveReader(build_archive({})) as archive:
        assert build_nav_titles(archive, package, "OEBPS/content.opf") == {}


def test_unreadable_nav_gives_empty_map():
    package = _package([("nav", "nav.xhtml", XHTML, "nav")])
    with ArchiveReader(build_archive({})) as archive:
        assert build_nav_titles(archive, package, "OEBPS/content.opf") == {}


def test_nav_resolved_against_package_path():
    package = _package([("nav", "nav.xhtml", XHTML, "nav")])
    data = build_archive({"OEBPS/nav.xhtml": '<a href="ch1.xhtml">One</a>'})
    with ArchiveReader(data) as archive:
        assert build_nav_titles(archive, package, "OEBPS/content.opf") == {"ch1.xhtml": "One"}
