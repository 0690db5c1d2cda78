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

import pytest
from accountbox import Accountbox, FormFields
from accountbox.usrsys.storage import UserRecordStorage
from accountbox.usrsys.usr import UserRecord
from accountbox.utils.storage import UnQLiteStorage
from unqlite import UnQLite


def alice_fields(**overrides: str) -> FormFields:
    """The sign up form of Alice, every field is valid."""
    fields = FormFields(
        username="alice",
        password="pw12345",
        first_name="Alice",
        last_name="Liddell",
        email="alice@wonder.land",
        contact_number="0123456789",
        address="1 Rabbit Hole",
        profile_picture_url="",
    )
    for name, value in overrides.items():
        setattr(fields, name, value)
    return fields


def alice_record(**overrides: str) -> UserRecord:
    return alice_fields(**overrides).to_user_record()


@pytest.fixture
async def accountbox():
    instance = Accountbox(database_path=":mem:")
    try:
        await instance.start()
        yield instance
    finally:
        instance.stop()


@pytest.fixture
async def user_records():
    database = UnQLite(":mem:")
    storage = UserRecordStorage(UnQLiteStorage(database, "users"))
    try:
        await storage.initialize()
        yield storage
    finally:
        database.close()
