"""Upstream profile-service adapters.

RobloxAPIProvider wraps users.roblox.com, thumbnails.roblox.com and
friends.roblox.com behind IProfileService.
"""
