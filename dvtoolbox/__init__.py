"""Validate metadata of Digital Video (DV) files and decode and encode their subcode packs."""

__version__ = "0.1.0"