# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import copy
import secrets
import threading
from typing import Any, Dict, List, Optional

from eehub.store.base import Document


def _new_id() -> str:
    # Same shape as Firestore auto-ids (20 chars).
    return secrets.token_hex(10)


class MemoryDocumentStore:
    """In-process document store for local development and tests."""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def find_by(
        self, collection: str, field_name: str, value: Any, *, limit: Optional[int] = None
    ) -> List[Document]:
        with self._lock:
            docs = self._collections.get(collection, {})
            out = [
                Document(id=doc_id, data=copy.deepcopy(data))
                for doc_id, data in docs.items()
                if field_name in data and data[field_name] == value
            ]
        return out[:limit] if limit else out

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            if data is None:
                return None
            return Document(id=doc_id, data=copy.deepcopy(data))

    def list(self, collection: str) -> List[Document]:
        with self._lock:
            return [
                Document(id=doc_id, data=copy.deepcopy(data))
                for doc_id, data in self._collections.get(collection, {}).items()
            ]

    def add(self, collection: str, data: Dict[str, Any]) -> str:
        doc_id = _new_id()
        with self._lock:
            self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(data))
        return doc_id

    def count(self, collection: str) -> int:
        with self._lock:
            return len(self._collections.get(collection, {}))
