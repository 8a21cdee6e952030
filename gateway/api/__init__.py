"""Presentation layer: HTTP routes."""
