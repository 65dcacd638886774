from epubie.core.paths import resolve_path


def test_resolve_against_package_directory():
    assert resolve_path("OEBPS/content.opf", "ch1.xhtml") == "OEBPS/ch1.xhtml"
    assert resolve_path("a/b/content.opf", "text/ch1.xhtml") == "a/b/text/ch1.xhtml"


def test_base_without_directory_returns_relative_unchanged():
    assert resolve_path("content.opf", "ch1.xhtml") == "ch1.xhtml"


def test_dot_segments_are_not_normalized():
    assert resolve_path("OEBPS/content.opf", "../images/c.jpg") == "OEBPS/../images/c.jpg"
    assert resolve_path("OEBPS/content.opf", "./ch1.xhtml") == "OEBPS/./ch1.xhtml"
