"""windex - incremental filesystem metadata indexer with substring search."""

__version__ = "0.1.0"
