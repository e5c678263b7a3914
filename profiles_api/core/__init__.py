"""
Core utilities shared across the profiles API.

This package hosts configuration, logging setup, bearer token helpers and
the error taxonomy. Repositories, services and routers depend on these
primitives instead of reading the environment themselves.
"""
