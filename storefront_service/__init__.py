"""Storefront backend: catalog, orders and inventory reservation."""

__version__ = "0.1.0"
