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

"""Checks run on the sign in and sign up forms before anything is stored.

Every check raises `accountbox.usrsys.errors.ValidationError` with the message shown to the user.
"""
import re
from typing import Mapping

from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")

MESSAGE_MISSING_FIELDS = "Please fill in all fields"
MESSAGE_INVALID_EMAIL = "Invalid email address"
MESSAGE_INVALID_PHONE = "Invalid phone number"

LOGIN_REQUIRED_FIELDS = ["username", "password"]
REGISTER_REQUIRED_FIELDS = LOGIN_REQUIRED_FIELDS + [
    "first_name",
    "last_name",
    "email",
    "contact_number",
    "address",
]


def is_valid_email(email: str) -> bool:
    """Check if `email` looks like `local@domain.tld`."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    """Check if `phone` is exactly 10 digits."""
    return PHONE_PATTERN.fullmatch(phone) is not None


def require_fields(values: Mapping[str, str], names) -> None:
    missing = [name for name in names if not values.get(name)]
    if missing:
        raise ValidationError(
            MESSAGE_MISSING_FIELDS, missing[0] if len(missing) == 1 else None
        )


def validate_login(values: Mapping[str, str]) -> None:
    """Validate the fields of the sign in form."""
    require_fields(values, LOGIN_REQUIRED_FIELDS)


def validate_registration(values: Mapping[str, str]) -> None:
    """Validate the fields of the sign up form.

    Missing fields are reported first, then the email, then the phone number.
    """
    require_fields(values, REGISTER_REQUIRED_FIELDS)
    if not is_valid_email(values["email"]):
        raise ValidationError(MESSAGE_INVALID_EMAIL, "email")
    if not is_valid_phone(values["contact_number"]):
        raise ValidationError(MESSAGE_INVALID_PHONE, "contact_number")
