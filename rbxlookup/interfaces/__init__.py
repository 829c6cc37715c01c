"""Public interface definitions for the external collaborators.

Business logic talks to the upstream API and the database only through the
abstract base classes defined here; concrete adapters live in
``rbxlookup/providers/`` and are injected by ``rbxlookup/main.py`` at
startup.  Unit tests inject mocks instead.

    Interface          ->  Concrete implementation
    -----------------------------------------------------
    IProfileService    ->  RobloxAPIProvider
    IUserStore         ->  SQLiteUserStore
"""

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.interfaces.user_store import IUserStore

__all__ = [
    "IProfileService",
    "IUserStore",
]
