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

import logging
from typing import Optional

from unqlite import UnQLite

from .form import Alert, FormController, FormFields, FormMode, View
from .profile import ProfileEditor
from .storagehub import StorageHub
from .usrsys.auth import AuthProvider
from .usrsys.session import SessionState


class Accountbox(object):
    """The entry of Accountbox. This class stores configuration and wires the components together.

    Components:

    - User System (`accountbox.usrsys`): records, validation, authentication and session.
    - Form controller (`accountbox.form`): sign in and sign up.
    - Profile editor (`accountbox.profile`).

    The session is one `accountbox.usrsys.session.SessionState` shared by the form controller and the profile editor.
    It's restored by `Accountbox.start` and saved by the components which change it.

    Typical usage:

    ````python
    box = Accountbox(database_path="accounts.db")
    await box.start()
    alert = await box.sign_in("alice", "pw12345")
    ...
    box.stop()
    ````
    """

    def __init__(
        self,
        *,
        database_path: str,
        session_path: Optional[str] = None,
        profile_write_back: bool = True,
        debug: bool = False,
    ) -> None:
        self.debug = debug
        """`bool`. Set the "accountbox" logger to DEBUG level."""
        if debug:
            logging.getLogger("accountbox").setLevel(logging.DEBUG)
        self.database_path: str = database_path
        """`str`. The path to the record store database. Currently it's a file path or ":mem:".
        ":mem:" tells UnQLite open database in memory."""
        self.session_path: Optional[str] = session_path
        """`Optional[str]`. The path to the session store database.
        If it's `None`, the session is saved in the record store database."""
        self.database = UnQLite(database_path)
        """Database instance of the record store."""
        self.session_database = UnQLite(session_path) if session_path else None
        """Database instance of the session store, `None` if it shares `database`."""
        self.storage_hub = StorageHub(self.database, self.session_database)
        """`accountbox.StorageHub`. The references to all storages in Accountbox."""
        self.auth_provider = AuthProvider(self.storage_hub.user_records)
        """`accountbox.usrsys.auth.AuthProvider`. The auth provider for this instance."""
        self.session = SessionState()
        """`accountbox.usrsys.session.SessionState`. The current session."""
        self.form = FormController(
            self.session,
            self.storage_hub.session_store,
            self.storage_hub.user_records,
            self.auth_provider,
        )
        """`accountbox.form.FormController`. The sign in / sign up form."""
        self.profile_editor = ProfileEditor(
            self.session,
            self.storage_hub.session_store,
            self.storage_hub.user_records,
            write_back=profile_write_back,
        )
        """`accountbox.profile.ProfileEditor`. The editor for the signed-in profile."""
        super().__init__()

    @property
    def profile_write_back(self) -> bool:
        """If saving the profile also updates the user in the record store."""
        return self.profile_editor.write_back

    @property
    def view(self) -> View:
        return self.form.view

    async def start(self) -> None:
        """Prepare the storages and restore the saved session.

        The cached profile is read from the session store, the record store is not asked.
        """
        await self.storage_hub.initialize()
        restored = await self.storage_hub.session_store.load()
        self.session.logged_in = restored.logged_in
        self.session.profile = restored.profile

    def stop(self) -> None:
        """Close the databases."""
        self.database.close()
        if self.session_database is not None:
            self.session_database.close()

    async def sign_in(self, username: str, password: str) -> Alert:
        """Fill the form in `FormMode.LOGIN` and submit it."""
        self.form.mode = FormMode.LOGIN
        self.form.fields.username = username
        self.form.fields.password = password
        return await self.form.submit()

    async def sign_up(self, fields: FormFields) -> Alert:
        """Fill the form in `FormMode.REGISTER` and submit it.
        The form is in `FormMode.LOGIN` after a successful sign up, the user is not signed in."""
        self.form.mode = FormMode.REGISTER
        self.form.fields = fields
        return await self.form.submit()

    def edit_profile(self, **changes: str) -> None:
        """Start editing the profile and apply `changes`, keys are names in `accountbox.usrsys.usr.PROFILE_FIELDS`."""
        if not self.profile_editor.editing:
            self.profile_editor.begin()
        for name, value in changes.items():
            self.profile_editor.set_field(name, value)

    async def save_profile(self) -> Alert:
        return await self.profile_editor.save()

    async def log_out(self) -> None:
        self.profile_editor.cancel()
        await self.form.logout()
