"""Music library server storing songs, albums and artists in MongoDB, with media files on disk."""

__version__ = "0.1.0"