"""Archive-relative path resolution."""


def resolve_path(base_path: str, relative_path: str) -> str:
    """Resolve ``relative_path`` against the directory of ``base_path``.

    ``OEBPS/content.opf`` + ``ch1.xhtml`` gives ``OEBPS/ch1.xhtml``. A base
    without a directory returns the relative path unchanged. ``.`` and ``..``
    segments are kept as-is; such paths simply fail the archive lookup.
    """
    slash = base_path.rfind("/")
    if slash == -1:
        return relative_path
    return f"{base_path[:slash]}/{relative_path}"
