from conftest import XHTML, build_epub, make_opf
from epubie.core.cover import find_cover_id, read_cover_bytes
from epubie.core.package import parse_package_xml


def _package(metadata: str, manifest=None):
    manifest = manifest or [("img", "img.jpg", "image/jpeg")]
    return parse_package_xml(make_opf(manifest, [], metadata=metadata).encode())


def test_epub2_name_cover():
    package = _package('<meta name="cover" content="img"/>')
    assert find_cover_id(package) == "img"


def test_name_cover_wins_over_cover_image_property():
    package = _package(
        '<meta property="cover-image" content="other"/><meta name="cover" content="img"/>'
    )
    assert find_cover_id(package) == "img"


def test_cover_image_property_content_then_text():
    assert find_cover_id(_package('<meta property="cover-image" content="c1"/>')) == "c1"
    assert find_cover_id(_package('<meta property="cover-image">c2</meta>')) == "c2"


def test_name_cover_without_content_is_ignored():
    package = _package('<meta name="cover"/><meta property="cover-image">c3</meta>')
    assert find_cover_id(package) == "c3"


def test_manifest_cover_image_fallback():
    package = _package(
        "",
        manifest=[
            ("ch1", "ch1.xhtml", XHTML),
            ("cover", "images/cover.png", "image/png", "cover-image"),
        ],
    )
    assert find_cover_id(package) == "cover"


def test_no_cover():
    assert find_cover_id(_package("<dc:title>x</dc:title>")) is None


def test_read_cover_bytes():
    data = build_epub(
        [("img", "images/c.png", "image/png")],
        [],
        {"OEBPS/images/c.png": b"\x89PNG\r\n\x1a\npng"},
        metadata='<meta name="cover" content="img"/>',
    )
    assert read_cover_bytes(data, "img") == b"\x89PNG\r\n\x1a\npng"


def test_read_cover_bytes_failures_return_none():
    data = build_epub([("img", "images/c.png", "image/png")], [])
    assert read_cover_bytes(data, "img") is None  # entry missing
    assert read_cover_bytes(data, "nope") is None  # not in manifest
    assert read_cover_bytes(b"garbage", "img") is None  # not an archive
