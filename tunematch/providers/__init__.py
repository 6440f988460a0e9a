"""Concrete adapters for the interfaces in ``tunematch.interfaces``."""
