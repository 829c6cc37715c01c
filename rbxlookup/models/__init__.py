"""rbxlookup domain models, re-exported for convenience.

    - user.py       - profile, cache record, lookup result, stats summary
    - upstream.py   - secondary Roblox payload shapes (avatar, status, counts)
    - history.py    - search-history log entries
    - validation.py - validator functions returning ValidationResult
"""

from __future__ import annotations

from rbxlookup.models.history import SearchHistoryEntry, SearchType, utc_now_iso
from rbxlookup.models.upstream import (
    AvatarThumbnail,
    AvatarThumbnails,
    Relation,
    RelationCount,
    UsernameHistory,
    UsernameHistoryItem,
    UsernameLookup,
    UsernameMatch,
    UserStatus,
)
from rbxlookup.models.user import (
    NOT_AVAILABLE,
    CachedUserRecord,
    CachedUserUpdate,
    NormalizedUserProfile,
    StatsSummary,
    UserLookupResult,
    UserStats,
)
from rbxlookup.models.validation import (
    ValidationResult,
    validate_avatar_thumbnails,
    validate_relation_count,
    validate_user_profile,
    validate_user_status,
    validate_username_history,
    validate_username_lookup,
)

__all__ = [
    "NOT_AVAILABLE",
    "AvatarThumbnail",
    "AvatarThumbnails",
    "CachedUserRecord",
    "CachedUserUpdate",
    "NormalizedUserProfile",
    "Relation",
    "RelationCount",
    "SearchHistoryEntry",
    "SearchType",
    "StatsSummary",
    "UserLookupResult",
    "UserStats",
    "UserStatus",
    "UsernameHistory",
    "UsernameHistoryItem",
    "UsernameLookup",
    "UsernameMatch",
    "ValidationResult",
    "utc_now_iso",
    "validate_avatar_thumbnails",
    "validate_relation_count",
    "validate_user_profile",
    "validate_user_status",
    "validate_username_history",
    "validate_username_lookup",
]
