"""Recolour workflow tracking service."""
