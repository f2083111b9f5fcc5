"""Storefront: catalog browsing and admin API for a small e-commerce site."""

__version__ = "0.1.0"
