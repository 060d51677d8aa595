"""Controlled document registry and file uploads."""
