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
from accountbox import Accountbox, FormMode, View
from accountbox.form import (
    ALERT_ERROR,
    ALERT_SUCCESS,
    MESSAGE_INVALID_CREDENTIALS,
    MESSAGE_LOGGED_IN,
    MESSAGE_REGISTERED,
    MESSAGE_USERNAME_TAKEN,
    Alert,
)
from accountbox.usrsys.session import KEY_LOGGED_IN, KEY_USER_PROFILE
from accountbox.usrsys.validation import (
    MESSAGE_INVALID_EMAIL,
    MESSAGE_INVALID_PHONE,
    MESSAGE_MISSING_FIELDS,
)

from .utils import accountbox, alice_fields


async def read_session_keys(box: Accountbox):
    kvstore = box.storage_hub.session_store.kvstore
    return await kvstore.get(KEY_LOGGED_IN), await kvstore.get(KEY_USER_PROFILE)


class TestFormController:
    def test_starts_in_login_mode(self, accountbox: Accountbox):
        assert accountbox.form.mode is FormMode.LOGIN
        assert accountbox.view is View.FORM

    def test_toggle_mode(self, accountbox: Accountbox):
        assert accountbox.form.toggle_mode() is FormMode.REGISTER
        assert accountbox.form.toggle_mode() is FormMode.LOGIN
        assert accountbox.view is View.FORM

    @pytest.mark.asyncio
    async def test_alice_signs_up_and_in(self, accountbox: Accountbox):
        alert = await accountbox.sign_up(alice_fields())
        assert alert == Alert(ALERT_SUCCESS, MESSAGE_REGISTERED)
        # not signed in automatically
        assert accountbox.form.mode is FormMode.LOGIN
        assert accountbox.view is View.FORM
        assert await read_session_keys(accountbox) == (None, None)

        alert = await accountbox.sign_in("alice", "wrong")
        assert alert == Alert(ALERT_ERROR, MESSAGE_INVALID_CREDENTIALS)
        assert accountbox.view is View.FORM

        alert = await accountbox.sign_in("alice", "pw12345")
        assert alert == Alert(ALERT_SUCCESS, MESSAGE_LOGGED_IN)
        assert accountbox.view is View.LOGGED_IN
        assert accountbox.session.profile.display_name == "Alice Liddell"
        flag, profile = await read_session_keys(accountbox)
        assert flag == "true"
        assert '"username": "alice"' in profile
        assert "pw12345" not in profile

    @pytest.mark.asyncio
    async def test_sign_in_with_empty_fields(self, accountbox: Accountbox):
        alert = await accountbox.sign_in("alice", "")
        assert alert == Alert(ALERT_ERROR, MESSAGE_MISSING_FIELDS)

    @pytest.mark.asyncio
    async def test_unknown_user_gets_the_same_message(self, accountbox: Accountbox):
        alert = await accountbox.sign_in("nobody", "pw12345")
        assert alert == Alert(ALERT_ERROR, MESSAGE_INVALID_CREDENTIALS)

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"first_name": ""}, MESSAGE_MISSING_FIELDS),
            ({"address": ""}, MESSAGE_MISSING_FIELDS),
            ({"password": ""}, MESSAGE_MISSING_FIELDS),
            ({"email": "abc@"}, MESSAGE_INVALID_EMAIL),
            ({"contact_number": "12345"}, MESSAGE_INVALID_PHONE),
        ],
    )
    @pytest.mark.asyncio
    async def test_bad_sign_up_stores_nothing(
        self, accountbox: Accountbox, overrides, message
    ):
        alert = await accountbox.sign_up(alice_fields(**overrides))
        assert alert == Alert(ALERT_ERROR, message)
        assert accountbox.form.mode is FormMode.REGISTER
        assert await accountbox.storage_hub.user_records.find_user("alice") is None

    @pytest.mark.asyncio
    async def test_sign_up_with_taken_username(self, accountbox: Accountbox):
        await accountbox.sign_up(alice_fields())
        alert = await accountbox.sign_up(alice_fields(password="another1"))
        assert alert == Alert(ALERT_ERROR, MESSAGE_USERNAME_TAKEN)
        assert accountbox.form.mode is FormMode.REGISTER
        assert (await accountbox.sign_in("alice", "pw12345")).success

    @pytest.mark.asyncio
    async def test_storage_failure_is_reported(self, accountbox: Accountbox, monkeypatch):
        async def broken_register(record):
            raise OSError("disk is full")

        monkeypatch.setattr(
            accountbox.storage_hub.user_records, "register", broken_register
        )
        alert = await accountbox.sign_up(alice_fields())
        assert alert == Alert(ALERT_ERROR, "disk is full")
        assert accountbox.form.mode is FormMode.REGISTER

    @pytest.mark.asyncio
    async def test_session_failure_leaves_state_unchanged(
        self, accountbox: Accountbox, monkeypatch
    ):
        await accountbox.sign_up(alice_fields())

        async def broken_save(state):
            raise OSError("read-only database")

        monkeypatch.setattr(accountbox.storage_hub.session_store, "save", broken_save)
        alert = await accountbox.sign_in("alice", "pw12345")
        assert alert == Alert(ALERT_ERROR, "read-only database")
        assert accountbox.view is View.FORM
        assert accountbox.session.profile is None

    @pytest.mark.asyncio
    async def test_logout(self, accountbox: Accountbox):
        await accountbox.sign_up(alice_fields())
        await accountbox.sign_in("alice", "pw12345")
        await accountbox.log_out()
        assert accountbox.view is View.FORM
        assert accountbox.session.profile is None
        assert accountbox.form.fields.username == ""
        assert accountbox.form.fields.password == ""
        assert await read_session_keys(accountbox) == (None, None)
