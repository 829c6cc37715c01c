"""Friend / follower / following counts for a user.

The three counters are independent upstream calls made concurrently.  They
are joined with a **fail-together** policy: if any call fails or returns an
invalid payload, no partial numbers are reported.

``fetch_counts`` raises on failure and is shared with the terminated-account
path of :class:`~rbxlookup.services.user_resolver.UserResolver`, which
substitutes zeros.  ``get_stats`` never raises for upstream problems and
substitutes the ``"N/A"`` sentinel triple instead.
"""

from __future__ import annotations

import structlog

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.models.upstream import Relation
from rbxlookup.models.user import StatsSummary, UserStats
from rbxlookup.models.validation import validate_relation_count
from rbxlookup.utils.concurrency import best_effort, gather_all

logger = structlog.get_logger(logger_name=__name__)

_RELATIONS = (Relation.FRIENDS, Relation.FOLLOWERS, Relation.FOLLOWING)


class StatsAggregator:
    """Fetches and merges the three relation counters of a user."""

    def __init__(self, profile_service: IProfileService) -> None:
        self._profiles = profile_service

    async def fetch_counts(self, user_id: str) -> UserStats:
        """Return all three counts, or raise if any of them cannot be obtained."""
        payloads = await gather_all(
            *(self._profiles.get_relation_count(user_id, relation) for relation in _RELATIONS)
        )
        friends, followers, following = (
            validate_relation_count(payload).unwrap().count for payload in payloads
        )
        return UserStats(friends=friends, followers=followers, following=following)

    async def get_stats(self, user_id: str) -> StatsSummary:
        """Return the three counts, or ``"N/A"`` for all of them on any failure."""
        stats = await best_effort(
            self.fetch_counts(user_id),
            None,
            event="user_stats_unavailable",
            logger=logger,
            user_id=user_id,
        )
        if stats is None:
            return StatsSummary.unavailable()
        return StatsSummary.from_stats(stats)
