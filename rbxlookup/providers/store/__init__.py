"""Persistence providers for the user cache and search-history log.

SQLiteUserStore keeps both tables in data/rbxlookup.db.
"""
