"""Exception types raised by sitekit."""

from __future__ import annotations


class SitekitError(ValueError):
    """Base class for build faults that must stop the build."""


class EmptyCollectionError(SitekitError):
    """A filter that needs at least one item was handed an empty collection."""


class DataFileError(SitekitError):
    """A data file exists but could not be decoded."""
