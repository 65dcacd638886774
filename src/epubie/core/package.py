"""Locate and deserialize the container and package documents."""

from lxml import etree
from pydantic import ValidationError

from epubie.core.archive import ArchiveReader
from epubie.core.errors import (
    ArchiveEntryError,
    MalformedContainerError,
    MalformedPackageError,
    MissingContainerError,
    MissingPackageError,
    NoRootFileError,
)
from epubie.models.package import (
    ContainerLocator,
    ManifestItem,
    MetaDeclaration,
    PackageDescriptor,
    PackageMetadata,
    RootFile,
    SpineItemRef,
)

CONTAINER_PATH = "META-INF/container.xml"


def _localname(element: etree._Element) -> str:
    """Tag name without namespace. Comments and PIs have no name."""
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def _child(element: etree._Element, name: str) -> etree._Element | None:
    for child in element:
        if _localname(child) == name:
            return child
    return None


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in element if _localname(child) == name]


def _text(element: etree._Element) -> str | None:
    """Full text content, stripped. Empty text counts as absent."""
    text = "".join(element.itertext()).strip()
    return text or None


def _first_text(element: etree._Element, name: str) -> str | None:
    for child in _children(element, name):
        text = _text(child)
        if text is not None:
            return text
    return None


def _all_text(element: etree._Element, name: str) -> list[str]:
    return [t for t in (_text(child) for child in _children(element, name)) if t]


def _parse_xml(xml: bytes) -> etree._Element:
    # One parser per document; lxml parsers are not shared across threads.
    # External entities and network DTD lookups stay disabled.
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    return etree.fromstring(xml, parser=parser)


def parse_container_xml(xml: bytes) -> ContainerLocator:
    """Deserialize container.xml.

    Raises:
        MalformedContainerError: Bad XML or no <rootfiles> element
    """
    try:
        root = _parse_xml(xml)
    except etree.XMLSyntaxError as e:
        raise MalformedContainerError(f"invalid XML: {e}", CONTAINER_PATH) from e

    if _localname(root) != "container":
        raise MalformedContainerError(
            f"unexpected root element <{_localname(root)}>", CONTAINER_PATH
        )

    rootfiles = _child(root, "rootfiles")
    if rootfiles is None:
        raise MalformedContainerError("missing <rootfiles> element", CONTAINER_PATH)

    return ContainerLocator(
        rootfiles=[
            RootFile(
                full_path=rf.get("full-path", ""),
                media_type=rf.get("media-type", ""),
            )
            for rf in _children(rootfiles, "rootfile")
        ]
    )


def _parse_metadata(element: etree._Element) -> PackageMetadata:
    return PackageMetadata(
        identifiers=_all_text(element, "identifier"),
        title=_first_text(element, "title"),
        creators=_all_text(element, "creator"),
        language=_first_text(element, "language"),
        date=_first_text(element, "date"),
        description=_first_text(element, "description"),
        publisher=_first_text(element, "publisher"),
        rights=_first_text(element, "rights"),
        subjects=_all_text(element, "subject"),
        meta=[
            MetaDeclaration(
                name=meta.get("name"),
                content=meta.get("content"),
                property=meta.get("property"),
                refines=meta.get("refines"),
                value=_text(meta),
            )
            for meta in _children(element, "meta")
        ],
    )


def parse_package_xml(xml: bytes, path: str = "") -> PackageDescriptor:
    """Deserialize a package (OPF) document.

    Raises:
        MalformedPackageError: Bad XML, a missing required section, or a
            manifest item / itemref without its required attributes
    """
    try:
        root = _parse_xml(xml)
    except etree.XMLSyntaxError as e:
        raise MalformedPackageError(f"invalid XML: {e}", path) from e

    sections = {}
    for name in ("metadata", "manifest", "spine"):
        element = _child(root, name)
        if element is None:
            raise MalformedPackageError(f"missing <{name}> element", path)
        sections[name] = element

    try:
        return PackageDescriptor(
            metadata=_parse_metadata(sections["metadata"]),
            manifest=[
                ManifestItem(
                    id=item.get("id"),
                    href=item.get("href"),
                    media_type=item.get("media-type"),
                    properties=item.get("properties"),
                )
                for item in _children(sections["manifest"], "item")
            ],
            spine=[
                SpineItemRef(idref=ref.get("idref"))
                for ref in _children(sections["spine"], "itemref")
            ],
        )
    except ValidationError as e:
        raise MalformedPackageError(
            f"schema mismatch ({e.error_count()} error(s))", path
        ) from e


def load_container(archive: ArchiveReader) -> ContainerLocator:
    """Read and deserialize META-INF/container.xml."""
    try:
        xml = archive.read_bytes(CONTAINER_PATH)
    except ArchiveEntryError as e:
        raise MissingContainerError(e.reason, CONTAINER_PATH) from e
    return parse_container_xml(xml)


def package_path(container: ContainerLocator) -> str:
    """Path of the package document. Only the first root-file is used."""
    if not container.rootfiles:
        raise NoRootFileError("no <rootfile> records", CONTAINER_PATH)
    return container.rootfiles[0].full_path


def load_package(archive: ArchiveReader, opf_path: str) -> PackageDescriptor:
    """Read and deserialize the package document at ``opf_path``."""
    try:
        xml = archive.read_bytes(opf_path)
    except ArchiveEntryError as e:
        raise MissingPackageError(e.reason, opf_path) from e
    return parse_package_xml(xml, opf_path)


def resolve_package(archive: ArchiveReader) -> tuple[str, PackageDescriptor]:
    """Run container and package resolution.

    Returns:
        Tuple of (package document path, parsed package)
    """
    container = load_container(archive)
    opf_path = package_path(container)
    return opf_path, load_package(archive, opf_path)
