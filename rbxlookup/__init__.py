"""rbxlookup: caching proxy in front of the Roblox user APIs."""

__version__ = "0.1.0"
