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

"""Key-value stores: the `KeyValueStore` protocol and its implementations.

Keys and values are both `str`. A missing key reads as `None`.
"""
import asyncio
from typing import Awaitable, Dict, Optional, Protocol

from unqlite import UnQLite

from . import global_executor


class KeyValueStore(Protocol):
    """A protocol type for a small persistent key-value store.

    Related:

    - `accountbox.usrsys.session.SessionStore`
    """

    def get(self, key: str) -> Awaitable[Optional[str]]:
        """Return the value of `key`, or `None` if it is not set."""
        ...

    def set(self, key: str, value: str) -> Awaitable[None]:
        """Set `key` to `value`, replacing any old value."""
        ...

    def remove(self, key: str) -> Awaitable[None]:
        """Remove `key`. Removing a missing key does nothing."""
        ...


class UnQLiteKeyValueStore(KeyValueStore):
    """An implementation of `KeyValueStore` on the key-value API of `unqlite.UnQLite`.

    The database can be the same one used by `accountbox.utils.storage.UnQLiteStorage`:
    collections and plain keys live side by side in an UnQLite file.
    """

    def __init__(self, instance: UnQLite) -> None:
        self.instance = instance
        super().__init__()

    def _run(self, fn, *args):
        return asyncio.get_running_loop().run_in_executor(
            global_executor.get(), fn, *args
        )

    def get_sync(self, key: str) -> Optional[str]:
        if not self.instance.exists(key):
            return None
        value = self.instance.fetch(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_sync(self, key: str, value: str) -> None:
        self.instance.store(key, value)
        self.instance.commit()

    def remove_sync(self, key: str) -> None:
        if self.instance.exists(key):
            self.instance.delete(key)
            self.instance.commit()

    def get(self, key: str) -> Awaitable[Optional[str]]:
        return self._run(self.get_sync, key)

    def set(self, key: str, value: str) -> Awaitable[None]:
        return self._run(self.set_sync, key, value)

    def remove(self, key: str) -> Awaitable[None]:
        return self._run(self.remove_sync, key)


class MemoryKeyValueStore(KeyValueStore):
    """An implementation of `KeyValueStore` in a `dict`. Nothing survives the process."""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}
        super().__init__()

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)
