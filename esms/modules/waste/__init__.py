"""Waste transfer log and waste management registers."""
