"""Incident reporting register."""
