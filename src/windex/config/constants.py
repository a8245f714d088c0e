"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
For configurable values, see models.py.
"""

SEARCH_MAX_LIMIT = 100
"""Maximum results for a search query, regardless of how many rows match."""

WINDEX_DIR_NAME = ".windex"
"""Per-user data directory under $HOME."""

DB_FILE_NAME = ".winindex.db"
"""Database file name inside WINDEX_DIR_NAME."""

CONFIG_FILE_NAME = "config.yaml"
"""YAML config file name inside WINDEX_DIR_NAME."""

WSL_MOUNT_ROOT = "/mnt/"
"""Default index root when running under WSL or MSYS."""

WINDOWS_DRIVE_ROOT = "C:\\"
"""Fallback index root on native Windows."""

MTIME_FORMAT = "%Y-%m-%d %H:%M:%S"
"""Local-time rendering of entry modification times."""
