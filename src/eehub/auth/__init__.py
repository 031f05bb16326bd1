# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- Password hashing/verification (argon2)
- Server-side sessions behind a signed cookie (itsdangerous)
- Signup/signin workflow over the users collection
- The session gate used by protected routes
"""
