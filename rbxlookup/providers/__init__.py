"""Concrete adapters behind the interfaces in ``rbxlookup.interfaces``."""
