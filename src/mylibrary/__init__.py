"""MyLibrary - shared book collections with per-user permissions."""

__version__ = "0.1.0"
