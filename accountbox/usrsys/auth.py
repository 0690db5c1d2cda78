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

"""`AuthRequest`, `AuthAnswer` and `AuthProvider`: The authentication tools for the user system.
"""
from dataclasses import dataclass
from typing import Optional

from .storage import UserRecordStorage


@dataclass
class AuthRequest(object):
    """The request for authentication.

    Attributes:
        username: `Optional[str]`.
        password: `Optional[str]`.
    """

    username: Optional[str] = None
    password: Optional[str] = None

    def __repr__(self) -> str:
        return "AuthRequest(username={!r}, password=...)".format(self.username)


@dataclass
class AuthAnswer(object):
    """The answer for authentication.

    Attributes:
        handled: `bool`. If the request can be handled correctly.
        success: `bool`. The result of the authentication.
    """

    handled: bool
    success: bool


class AuthProvider(object):
    """Provide authentication to other concepts of Accountbox."""

    def __init__(self, user_record_storage: UserRecordStorage) -> None:
        self.user_record_storage = user_record_storage
        super().__init__()

    async def auth(self, request: AuthRequest) -> AuthAnswer:
        """Process an authentication request.
        Requests without username or password are not handled."""
        if request.username and request.password:
            success = await self.user_record_storage.login(
                request.username, request.password
            )
            return AuthAnswer(handled=True, success=success)
        else:
            return AuthAnswer(handled=False, success=False)
