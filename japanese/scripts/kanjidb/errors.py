"""
errors.py

Exceptions raised by the kanji catalog and its binary cache codec.
"""


class CatalogError(RuntimeError):
    """Misuse of a KanjiCatalog (e.g. indexing a record it does not own)."""


class CatalogFormatError(CatalogError):
    """A cache stream could not be read back into a catalog."""


class NotACatalogFileError(CatalogFormatError):
    pass


class StaleCatalogError(CatalogFormatError):
    """The cache was written by an older codec and must be rebuilt."""

    def __init__(self, found: int, expected: int):
        super().__init__(
            f"unsupported/outdated cache: format version {found}, expected {expected}"
        )
        self.found = found
        self.expected = expected


class TruncatedCatalogError(CatalogFormatError):
    pass


class CorruptCatalogError(CatalogFormatError):
    pass


class UnencodableRecordError(CatalogError):
    """A field value does not fit the fixed-width slot the cache format gives it."""
