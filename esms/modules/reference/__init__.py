"""Lookup entities shared by the compliance registers."""
