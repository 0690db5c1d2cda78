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

"""This module contains definitions about users and profiles.
"""
import dataclasses
from dataclasses import dataclass
from typing import Any, Dict

DEFAULT_AVATAR_URL = "https://placekitten.com/200/200"
"""The picture shown for profiles without a picture URL."""

PROFILE_FIELDS = [
    "first_name",
    "last_name",
    "email",
    "contact_number",
    "address",
    "profile_picture_url",
]
"""The fields a user can edit on the profile. `username` and `password` are not in the list."""

_CACHE_KEYS = {
    "username": "username",
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "contact_number": "contactNumber",
    "address": "address",
    "profile_picture_url": "profilePicture",
}


@dataclass
class ProfileRecord(object):
    """Infomation about the person behind an account.

    Attributes:
        username: `str`. The username of the account.
        first_name: `str`.
        last_name: `str`.
        email: `str`. An address in `local@domain.tld` shape.
        contact_number: `str`. Ten digits.
        address: `str`. The postal address.
        profile_picture_url: `str`. May be empty, see `ProfileRecord.avatar_url`.
    """

    username: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    contact_number: str = ""
    address: str = ""
    profile_picture_url: str = ""

    @property
    def display_name(self) -> str:
        """The first name and the last name."""
        return "{} {}".format(self.first_name, self.last_name).strip()

    def avatar_url(self) -> str:
        """The profile picture URL, or `DEFAULT_AVATAR_URL` if it's empty."""
        return self.profile_picture_url or DEFAULT_AVATAR_URL

    def to_cache_dict(self) -> Dict[str, str]:
        """Build the `dict` stored as the cached profile, keys are in camelCase."""
        return {
            cache_key: getattr(self, name) for name, cache_key in _CACHE_KEYS.items()
        }

    @classmethod
    def from_cache_dict(cls, d: Dict[str, Any]) -> "ProfileRecord":
        """Build a profile from a `dict` made by `ProfileRecord.to_cache_dict`.

        Missing fields are left empty, except `username` which is required.
        """
        kwargs = {}
        for name, cache_key in _CACHE_KEYS.items():
            value = d.get(cache_key)
            if value is not None:
                kwargs[name] = str(value)
        if "username" not in kwargs:
            raise KeyError("username")
        return cls(**kwargs)


@dataclass
class UserRecord(object):
    """Infomation about user.

    Attributes:
        username: `str`. Unique identity choose by user.
        password: `str`. The password, stored as given.
        first_name: `str`.
        last_name: `str`.
        email: `str`.
        contact_number: `str`.
        address: `str`.
        profile_picture_url: `str`. May be empty.
    """

    username: str
    password: str
    first_name: str
    last_name: str
    email: str
    contact_number: str
    address: str
    profile_picture_url: str = ""

    def profile(self) -> ProfileRecord:
        """Return the `ProfileRecord` of this user, without the password."""
        return ProfileRecord(
            username=self.username,
            **{name: getattr(self, name) for name in PROFILE_FIELDS}
        )

    def with_profile(self, profile: ProfileRecord) -> "UserRecord":
        """Return a copy of this record with the profile fields taken from `profile`.
        The username and the password are kept."""
        return dataclasses.replace(
            self, **{name: getattr(profile, name) for name in PROFILE_FIELDS}
        )
