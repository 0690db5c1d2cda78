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

"""This module contains all storage classes for the user system.
"""
import asyncio
import logging
from typing import Optional

from ..utils.storage import (
    CommonStorage,
    CommonStorageRecordWrapper,
    DataclassCommonStorageAdapter,
)
from .errors import UsernameConflictError
from .usr import ProfileRecord, UserRecord


class UserRecordStorage(CommonStorageRecordWrapper[UserRecord]):
    """
    A `accountbox.utils.storage.RecordStorage` for `accountbox.usrsys.usr.UserRecord`.

    This is the record store: the source of truth about accounts.
    """

    __logger = logging.getLogger("accountbox.usrsys.storage.UserRecordStorage")

    def __init__(self, common_storage: CommonStorage) -> None:
        super().__init__(common_storage, DataclassCommonStorageAdapter(UserRecord))
        self._register_lock = asyncio.Lock()

    async def register(self, record: UserRecord) -> UserRecord:
        """Save `record` as a new user.

        The fields should be validated before, see `accountbox.usrsys.validation.validate_registration`.

        Raise `accountbox.usrsys.errors.UsernameConflictError` if the username is taken, nothing will be written.
        """
        async with self._register_lock:
            if await self.find_one({"username": record.username}):
                self.__logger.warning(
                    "registration rejected, username %r exists", record.username
                )
                raise UsernameConflictError(record.username)
            rec = await self.store(record)
        self.__logger.info("registered user %r", record.username)
        return rec

    async def login(self, username: str, password: str) -> bool:
        """Check if one user matchs both `username` and `password`.
        ..note:: It does not tell an unknown user from a wrong password."""
        doc = await self.find_one({"username": username, "password": password})
        return doc is not None

    async def find_user(self, username: str) -> Optional[UserRecord]:
        """Find the user named `username`."""
        return await self.find_one({"username": username})

    async def update_profile(self, profile: ProfileRecord) -> Optional[UserRecord]:
        """Rewrite the profile fields of the user `profile.username`.
        The password is kept. Return `None` if the user does not exist."""
        user = await self.find_user(profile.username)
        if not user:
            return None
        return await self.update_one(
            {"username": user.username}, user.with_profile(profile)
        )
