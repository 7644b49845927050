"""Small utilities: typed value access, SQL column helpers and synchronisation primitives."""

__version__ = "0.1.0"