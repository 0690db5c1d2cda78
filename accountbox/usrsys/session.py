# Copyright (C) 2021 The Accountbox Contributors
#
# This file is part of Accountbox.
#
# Accountbox is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Accountbox is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Accountbox.  If not, see <http://www.gnu.org/licenses/>.

"""Session state and the store keeping it between runs: `SessionState` and `SessionStore`.

The session is two keys in a `accountbox.utils.kvstore.KeyValueStore`:

- `isLoggedIn`: "true" when a user is signed in, absent otherwise.
- `userProfile`: the signed-in user's `ProfileRecord` in JSON.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional

from ..utils.kvstore import KeyValueStore
from .usr import ProfileRecord

KEY_LOGGED_IN = "isLoggedIn"
KEY_USER_PROFILE = "userProfile"
LOGGED_IN_VALUE = "true"


@dataclass
class SessionState(object):
    """The session of the application.

    One instance is created by `accountbox.Accountbox` and shared by the components working on the session.
    Change it in place, then save it with `SessionStore`.

    Attributes:
        logged_in: `bool`.
        profile: `Optional[ProfileRecord]`. The cached profile of the signed-in user.
    """

    logged_in: bool = False
    profile: Optional[ProfileRecord] = None

    def sign_in(self, profile: ProfileRecord) -> None:
        self.logged_in = True
        self.profile = profile

    def reset(self) -> None:
        self.logged_in = False
        self.profile = None


class SessionStore(object):
    """Load and save `SessionState` on a `KeyValueStore`."""

    __logger = logging.getLogger("accountbox.usrsys.session.SessionStore")

    def __init__(self, kvstore: KeyValueStore) -> None:
        self.kvstore = kvstore
        super().__init__()

    @staticmethod
    def dump_profile(profile: ProfileRecord) -> str:
        return json.dumps(profile.to_cache_dict())

    @staticmethod
    def parse_profile(s: str) -> ProfileRecord:
        """Parse the cached profile. Raise `ValueError` or `KeyError` on bad data."""
        d = json.loads(s)
        if not isinstance(d, dict):
            raise ValueError("cached profile is not an object")
        return ProfileRecord.from_cache_dict(d)

    async def load_profile(self) -> Optional[ProfileRecord]:
        """Read the cached profile. Return `None` if it's absent or unreadable."""
        s = await self.kvstore.get(KEY_USER_PROFILE)
        if s is None:
            return None
        try:
            return self.parse_profile(s)
        except (ValueError, KeyError) as e:
            self.__logger.warning("cached profile is unreadable: %r", e)
            return None

    async def load(self) -> SessionState:
        """Restore the session saved before.

        A session flag without a readable profile is treated as signed out, both keys will be removed.
        """
        if await self.kvstore.get(KEY_LOGGED_IN) != LOGGED_IN_VALUE:
            return SessionState()
        profile = await self.load_profile()
        if not profile:
            self.__logger.warning("session flag found without profile, discarded")
            await self.clear()
            return SessionState()
        return SessionState(logged_in=True, profile=profile)

    async def save_profile(self, profile: ProfileRecord) -> None:
        """Replace the cached profile."""
        await self.kvstore.set(KEY_USER_PROFILE, self.dump_profile(profile))

    async def save(self, state: SessionState) -> None:
        """Write `state` to the store. A signed-out state clears the store."""
        if state.logged_in and state.profile:
            await self.save_profile(state.profile)
            await self.kvstore.set(KEY_LOGGED_IN, LOGGED_IN_VALUE)
        else:
            await self.clear()

    async def clear(self) -> None:
        """Remove the session flag and the cached profile."""
        await self.kvstore.remove(KEY_LOGGED_IN)
        await self.kvstore.remove(KEY_USER_PROFILE)
