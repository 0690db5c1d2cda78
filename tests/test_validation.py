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
from accountbox.usrsys.errors import ValidationError
from accountbox.usrsys.validation import (
    MESSAGE_INVALID_EMAIL,
    MESSAGE_INVALID_PHONE,
    MESSAGE_MISSING_FIELDS,
    is_valid_email,
    is_valid_phone,
    validate_login,
    validate_registration,
)

from .utils import alice_fields


class TestEmailAndPhone:
    @pytest.mark.parametrize(
        "email", ["alice@wonder.land", "a.b+c@mail.example.com", "x_y%z@d-e.io"]
    )
    def test_good_emails(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["abc@", "abc", "@wonder.land", "alice@wonder", "alice@wonder.l", "a b@c.de", "alice@wonder.land\n"],
    )
    def test_bad_emails(self, email):
        assert not is_valid_email(email)

    def test_good_phone(self):
        assert is_valid_phone("0123456789")

    @pytest.mark.parametrize(
        "phone", ["12345", "01234567890", "012345678a", "012-345-678", "0123456789\n", ""]
    )
    def test_bad_phones(self, phone):
        assert not is_valid_phone(phone)


class TestValidateForms:
    def test_login_only_needs_username_and_password(self):
        validate_login({"username": "alice", "password": "pw12345"})

    @pytest.mark.parametrize("missing", ["username", "password"])
    def test_login_missing_field(self, missing):
        values = {"username": "alice", "password": "pw12345"}
        values[missing] = ""
        with pytest.raises(ValidationError) as exc_info:
            validate_login(values)
        assert exc_info.value.message == MESSAGE_MISSING_FIELDS
        assert exc_info.value.field == missing

    def test_registration_accepts_valid_form(self):
        validate_registration(alice_fields().as_dict())

    def test_registration_does_not_need_picture(self):
        validate_registration(alice_fields(profile_picture_url="").as_dict())

    @pytest.mark.parametrize(
        "missing",
        [
            "username",
            "password",
            "first_name",
            "last_name",
            "email",
            "contact_number",
            "address",
        ],
    )
    def test_registration_missing_field(self, missing):
        values = alice_fields(**{missing: ""}).as_dict()
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(values)
        assert exc_info.value.message == MESSAGE_MISSING_FIELDS

    def test_missing_fields_are_reported_before_bad_email(self):
        values = alice_fields(email="abc@", address="").as_dict()
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(values)
        assert exc_info.value.message == MESSAGE_MISSING_FIELDS

    def test_registration_bad_email(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(alice_fields(email="abc@").as_dict())
        assert exc_info.value.message == MESSAGE_INVALID_EMAIL
        assert exc_info.value.field == "email"

    def test_registration_bad_phone(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(alice_fields(contact_number="12345").as_dict())
        assert exc_info.value.message == MESSAGE_INVALID_PHONE
        assert exc_info.value.field == "contact_number"
