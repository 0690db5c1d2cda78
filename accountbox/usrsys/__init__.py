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

"""The user system for Accountbox.

User system process all the things about users:

- User and Profile
- Validation of sign up and sign in forms
- Authentication
- Session

## User and Profile: The differences
Accountbox defines two structures for user infomation: `usr.UserRecord` and `usr.ProfileRecord`.
`usr.UserRecord` is the account as stored in the record store, with the password.
`usr.ProfileRecord` is what the application shows and caches in the session: the same fields without the password.
"""
