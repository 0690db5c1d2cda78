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

"""This module contains `StorageHub`, the storage centre of Accountbox.
"""
from typing import Optional

from unqlite import UnQLite

from .usrsys.session import SessionStore
from .usrsys.storage import UserRecordStorage
from .utils.kvstore import UnQLiteKeyValueStore
from .utils.storage import CommonStorage, UnQLiteStorage


class StorageHub(object):
    """The storage centre for Accountbox: the record store and the session store.

    ..note:: Typically you use the one from `accountbox.Accountbox`.

    Related:

    - `accountbox.utils.storage` The record storage layer.
    - `accountbox.utils.kvstore` The key-value stores.
    """

    def __init__(
        self, database: UnQLite, session_database: Optional[UnQLite] = None
    ) -> None:
        self.database = database
        """The database instance of the record store."""
        self.session_database = (
            session_database if session_database is not None else database
        )
        """The database instance of the session store, it's `database` if not given."""
        self._user_records = UserRecordStorage(self.get_common_storage("users"))
        self._session_store = SessionStore(UnQLiteKeyValueStore(self.session_database))
        super().__init__()

    def get_common_storage(self, name: str) -> CommonStorage:
        """Get a common storage with `name`."""
        return UnQLiteStorage(self.database, name)

    @property
    def user_records(self) -> UserRecordStorage:
        """
        Related:

        - `accountbox.usrsys.usr.UserRecord` The object being stored.
        """
        return self._user_records

    @property
    def session_store(self) -> SessionStore:
        """
        Related:

        - `accountbox.usrsys.session.SessionState` The object being stored.
        """
        return self._session_store

    async def initialize(self) -> None:
        """Prepare all storages, it's safe to call it more than once."""
        await self.user_records.initialize()
