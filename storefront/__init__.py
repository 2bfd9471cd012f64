"""Storefront backend: catalog storage, admin sessions and the JSON API."""

__version__ = "0.1.0"
