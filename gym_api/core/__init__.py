"""
Core utilities shared across the gym directory API.

This package hosts configuration, the error taxonomy and logging setup.
Services and routers depend on these primitives instead of reading the
environment or building responses themselves.
"""
