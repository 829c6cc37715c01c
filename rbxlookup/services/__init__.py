"""Business-logic services: user resolution, username resolution, stats, status."""

from rbxlookup.services.stats_aggregator import StatsAggregator
from rbxlookup.services.status_service import StatusService
from rbxlookup.services.user_resolver import UserResolver
from rbxlookup.services.username_resolver import UsernameResolver

__all__ = [
    "StatsAggregator",
    "StatusService",
    "UserResolver",
    "UsernameResolver",
]
