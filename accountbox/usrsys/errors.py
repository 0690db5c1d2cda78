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

"""Exceptions raised by the user system.

Errors from the database backend are not wrapped, they propagate as they are.
"""
from typing import Optional


class AccountboxError(Exception):
    """The base of all Accountbox errors."""


class ValidationError(AccountboxError):
    """A form field is missing or malformed.

    Attributes:
        message: `str`. The message for the user.
        field: `Optional[str]`. The name of the bad field, if there is only one.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class UsernameConflictError(AccountboxError):
    """The username is already used by another account."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("username {!r} is already taken".format(username))


class InvalidCredentialsError(AccountboxError):
    """No account matches the username and password."""
