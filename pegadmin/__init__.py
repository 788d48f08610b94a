"""Command shell and cluster data model for administering a Pegasus key-value cluster."""

__version__ = "0.1.0"