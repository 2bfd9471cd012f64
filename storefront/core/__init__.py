"""
Core utilities shared across the storefront API.

This package hosts configuration, the error taxonomy, password hashing,
rate limiting and logging setup. Routers and services depend on these
primitives instead of reading os.environ or FastAPI internals directly.
"""
