# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request bodies accepted by the signup and signin forms."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignupForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str = Field(alias="firstname")
    user_name: str = Field(alias="Username")
    email: str
    password: str

    @field_validator("first_name", "user_name", "email", "password")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class SigninForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str
    password: str
