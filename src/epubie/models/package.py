"""Data models for the EPUB container and package documents."""

from pydantic import BaseModel, ConfigDict, Field


class RootFile(BaseModel):
    """A root-file record from META-INF/container.xml."""

    model_config = ConfigDict(frozen=True)

    full_path: str = ""
    media_type: str = ""


class ContainerLocator(BaseModel):
    """Parsed container.xml."""

    model_config = ConfigDict(frozen=True)

    rootfiles: list[RootFile] = Field(default_factory=list)


class MetaDeclaration(BaseModel):
    """A free-form <meta> element from the package metadata."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    content: str | None = None
    property: str | None = None
    refines: str | None = None
    value: str | None = None  # Inline text


class PackageMetadata(BaseModel):
    """Dublin Core metadata and meta declarations."""

    model_config = ConfigDict(frozen=True)

    identifiers: list[str] = Field(default_factory=list)
    title: str | None = None
    creators: list[str] = Field(default_factory=list)
    language: str | None = None
    date: str | None = None
    description: str | None = None
    publisher: str | None = None
    rights: str | None = None
    subjects: list[str] = Field(default_factory=list)
    meta: list[MetaDeclaration] = Field(default_factory=list)


class ManifestItem(BaseModel):
    """A single manifest entry. ``href`` is relative to the package document."""

    model_config = ConfigDict(frozen=True)

    id: str
    href: str
    media_type: str
    properties: str | None = None

    def has_property(self, token: str) -> bool:
        """Check the space-separated properties list for ``token``."""
        return bool(self.properties) and token in self.properties.split()


class SpineItemRef(BaseModel):
    """Reference from the spine to a manifest item id."""

    model_config = ConfigDict(frozen=True)

    idref: str


class PackageDescriptor(BaseModel):
    """Parsed package (OPF) document."""

    model_config = ConfigDict(frozen=True)

    metadata: PackageMetadata
    manifest: list[ManifestItem] = Field(default_factory=list)
    spine: list[SpineItemRef] = Field(default_factory=list)

    def get_item(self, item_id: str) -> ManifestItem | None:
        """Find a manifest item by id."""
        for item in self.manifest:
            if item.id == item_id:
                return item
        return None
