# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LookupStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True)
class Lookup:
    """Result of a read against the document store."""

    status: LookupStatus
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK

    @classmethod
    def found(cls, value: Any) -> "Lookup":
        return cls(LookupStatus.OK, value)

    @classmethod
    def not_found(cls) -> "Lookup":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def unavailable(cls) -> "Lookup":
        return cls(LookupStatus.STORE_UNAVAILABLE)
