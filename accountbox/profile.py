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

"""`ProfileEditor`: editing the profile of the signed-in user."""
import dataclasses
import logging
from typing import Optional

from .form import Alert
from .usrsys.session import SessionState, SessionStore
from .usrsys.storage import UserRecordStorage
from .usrsys.usr import PROFILE_FIELDS, ProfileRecord

MESSAGE_PROFILE_UPDATED = "Profile updated"
MESSAGE_PROFILE_SAVE_FAILED = "Failed to save profile"


class ProfileEditor(object):
    """Edit the cached profile in `SessionState`, then save it.

    The edited fields are not validated. Saving always replaces the cached profile in the session store;
    with `write_back` it also rewrites the profile fields of the user in the record store.
    The username and the password never change here, so the user can still sign in with them.
    """

    __logger = logging.getLogger("accountbox.profile.ProfileEditor")

    def __init__(
        self,
        session: SessionState,
        session_store: SessionStore,
        user_records: UserRecordStorage,
        write_back: bool = True,
    ) -> None:
        self.session = session
        self.session_store = session_store
        self.user_records = user_records
        self.write_back = write_back
        self.draft: Optional[ProfileRecord] = None
        """The profile being edited, `None` when not editing."""
        super().__init__()

    @property
    def editing(self) -> bool:
        return self.draft is not None

    def begin(self) -> ProfileRecord:
        """Start editing a copy of the cached profile."""
        if not self.session.logged_in or not self.session.profile:
            raise RuntimeError("no signed-in profile to edit")
        self.draft = dataclasses.replace(self.session.profile)
        return self.draft

    def set_field(self, name: str, value: str) -> None:
        """Change one field of the draft. Only fields in `PROFILE_FIELDS` are editable."""
        if self.draft is None:
            raise RuntimeError("not editing")
        if name not in PROFILE_FIELDS:
            raise ValueError("{!r} is not an editable profile field".format(name))
        setattr(self.draft, name, value)

    def cancel(self) -> None:
        self.draft = None

    async def save(self) -> Alert:
        """Save the draft. Editing stays on if it fails.

        The cached profile is written first, the record store only after it.
        If the record store fails, the old cached profile is put back, so both stores keep the old profile.
        """
        draft = self.draft
        if draft is None:
            raise RuntimeError("not editing")
        try:
            await self.session_store.save_profile(draft)
        except Exception:
            self.__logger.exception("saving profile failed")
            return Alert.error(MESSAGE_PROFILE_SAVE_FAILED)
        if self.write_back:
            try:
                if not await self.user_records.update_profile(draft):
                    self.__logger.warning(
                        "user %r not found in record store, only the cache is updated",
                        draft.username,
                    )
            except Exception:
                self.__logger.exception("writing profile back failed")
                await self._restore_cache()
                return Alert.error(MESSAGE_PROFILE_SAVE_FAILED)
        self.session.profile = draft
        self.draft = None
        self.__logger.info("profile of %r updated", draft.username)
        return Alert.ok(MESSAGE_PROFILE_UPDATED)

    async def _restore_cache(self) -> None:
        old = self.session.profile
        try:
            if old:
                await self.session_store.save_profile(old)
        except Exception:
            self.__logger.exception("restoring cached profile failed")
