"""Catalog Setup (config, logging, dependency wiring)."""
