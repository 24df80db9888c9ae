"""Catalog Infrastructure Layer."""
