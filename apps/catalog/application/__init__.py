"""Catalog Application Layer."""
