"""Client library for browsing a TubeArchivist media archive."""

__version__ = "0.1.0"
