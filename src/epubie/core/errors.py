"""Exceptions raised while resolving an EPUB package."""


class EpubError(Exception):
    """Base error for EPUB parsing.

    Every fatal failure carries the pipeline stage that produced it so the
    CLI can report where construction stopped.
    """

    stage = "epub"

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(f"{self.stage}: {message}")


class InvalidArchiveError(EpubError):
    """Input bytes are not a readable ZIP container."""

    stage = "archive"


class MissingContainerError(EpubError):
    """META-INF/container.xml is absent or unreadable."""

    stage = "container"


class MalformedContainerError(EpubError):
    """container.xml does not match the container schema."""

    stage = "container"


class NoRootFileError(EpubError):
    """container.xml declares no root-file records."""

    stage = "container"


class MissingPackageError(EpubError):
    """The package document named by the container is absent or unreadable."""

    stage = "package"


class MalformedPackageError(EpubError):
    """The package document does not match the package schema."""

    stage = "package"


class ArchiveEntryError(KeyError):
    """A named archive entry could not be found or read."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")
