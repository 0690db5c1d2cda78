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

"""The sign in / sign up form: `FormController` and the `Alert`s it answers with.

The controller owns the form fields and the form mode, and works on the `accountbox.usrsys.session.SessionState` given by its owner.
It never renders anything: every submission returns an `Alert` for the user interface to show.
"""
import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .usrsys.auth import AuthProvider, AuthRequest
from .usrsys.errors import (
    InvalidCredentialsError,
    UsernameConflictError,
    ValidationError,
)
from .usrsys.session import SessionState, SessionStore
from .usrsys.storage import UserRecordStorage
from .usrsys.usr import UserRecord
from .usrsys.validation import validate_login, validate_registration

ALERT_SUCCESS = "Success"
ALERT_ERROR = "Error"

MESSAGE_LOGGED_IN = "Logged in successfully"
MESSAGE_REGISTERED = "Registration successful"
MESSAGE_INVALID_CREDENTIALS = "Invalid credentials"
MESSAGE_USERNAME_TAKEN = "Username already taken"


@dataclass
class Alert(object):
    """A message for the user.

    Attributes:
        title: `str`. `ALERT_SUCCESS` or `ALERT_ERROR`.
        message: `str`.
    """

    title: str
    message: str

    @property
    def success(self) -> bool:
        return self.title == ALERT_SUCCESS

    @classmethod
    def ok(cls, message: str) -> "Alert":
        return cls(ALERT_SUCCESS, message)

    @classmethod
    def error(cls, message: str) -> "Alert":
        return cls(ALERT_ERROR, message)


class FormMode(Enum):
    LOGIN = "login"
    REGISTER = "register"


class View(Enum):
    FORM = "form"
    LOGGED_IN = "logged_in"


@dataclass
class FormFields(object):
    """The values typed in the form. Only `username` and `password` are used in `FormMode.LOGIN`."""

    username: str = ""
    password: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    contact_number: str = ""
    address: str = ""
    profile_picture_url: str = ""

    def as_dict(self) -> Dict[str, str]:
        return dataclasses.asdict(self)

    def to_user_record(self) -> UserRecord:
        return UserRecord(**self.as_dict())


class FormController(object):
    """The controller behind the sign in / sign up form.

    Typical usage:

    ````python
    form.toggle_mode()  # to FormMode.REGISTER
    form.fields = FormFields(username="alice", password="...", ...)
    alert = await form.submit()  # back to FormMode.LOGIN if succeed
    alert = await form.submit()  # form.view is View.LOGGED_IN if succeed
    ````
    """

    __logger = logging.getLogger("accountbox.form.FormController")

    def __init__(
        self,
        session: SessionState,
        session_store: SessionStore,
        user_records: UserRecordStorage,
        auth_provider: AuthProvider,
        mode: FormMode = FormMode.LOGIN,
    ) -> None:
        self.session = session
        self.session_store = session_store
        self.user_records = user_records
        self.auth_provider = auth_provider
        self.mode = mode
        self.fields = FormFields()
        super().__init__()

    @property
    def view(self) -> View:
        """`View.LOGGED_IN` when the session is active, otherwise `View.FORM`."""
        return View.LOGGED_IN if self.session.logged_in else View.FORM

    def toggle_mode(self) -> FormMode:
        """Switch between sign in and sign up. The session is not affected."""
        if self.mode is FormMode.LOGIN:
            self.mode = FormMode.REGISTER
        else:
            self.mode = FormMode.LOGIN
        return self.mode

    async def submit(self) -> Alert:
        """Validate the fields then sign in or sign up, depends on `FormController.mode`.

        Nothing is changed if it fails; storage errors are reported with their own message.
        """
        try:
            if self.mode is FormMode.LOGIN:
                validate_login(self.fields.as_dict())
                await self._sign_in()
                return Alert.ok(MESSAGE_LOGGED_IN)
            else:
                validate_registration(self.fields.as_dict())
                await self._sign_up()
                return Alert.ok(MESSAGE_REGISTERED)
        except ValidationError as e:
            self.__logger.warning("form rejected: %s (%s)", e.message, e.field)
            return Alert.error(e.message)
        except InvalidCredentialsError:
            self.__logger.warning("invalid credentials for %r", self.fields.username)
            return Alert.error(MESSAGE_INVALID_CREDENTIALS)
        except UsernameConflictError:
            return Alert.error(MESSAGE_USERNAME_TAKEN)
        except Exception as e:
            self.__logger.exception("form submission failed")
            return Alert.error(str(e))

    async def _sign_in(self) -> None:
        username = self.fields.username
        answer = await self.auth_provider.auth(
            AuthRequest(username=username, password=self.fields.password)
        )
        if not answer.success:
            raise InvalidCredentialsError()
        user = await self.user_records.find_user(username)
        if not user:
            raise InvalidCredentialsError()
        state = SessionState()
        state.sign_in(user.profile())
        await self.session_store.save(state)
        self.session.sign_in(user.profile())
        self.__logger.info("user %r signed in", username)

    async def _sign_up(self) -> None:
        await self.user_records.register(self.fields.to_user_record())
        self.mode = FormMode.LOGIN

    async def logout(self) -> None:
        """Clear the saved session and the credentials in the form."""
        await self.session_store.clear()
        if self.session.profile:
            self.__logger.info("user %r signed out", self.session.profile.username)
        self.session.reset()
        self.fields.username = ""
        self.fields.password = ""
