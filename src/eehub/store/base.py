# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol


class StoreError(Exception):
    """The document store could not complete a request."""


@dataclass(frozen=True)
class Document:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def as_item(self) -> Dict[str, Any]:
        """Flatten into ``{"id": ..., **data}`` for listings."""
        return {"id": self.id, **self.data}


class DocumentStore(Protocol):
    """Schemaless collection-of-documents database.

    Implementations raise StoreError for any backend failure.
    """

    def find_by(
        self, collection: str, field_name: str, value: Any, *, limit: Optional[int] = None
    ) -> List[Document]:
        """Documents whose ``field_name`` equals ``value`` exactly."""
        ...

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    def list(self, collection: str) -> List[Document]:
        ...

    def add(self, collection: str, data: Dict[str, Any]) -> str:
        """Insert a document and return its store-assigned identifier."""
        ...
