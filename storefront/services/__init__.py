"""
High-level use cases for the storefront API.

Routers call these services instead of manipulating the storage backend or
session state directly.
"""
