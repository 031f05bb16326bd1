# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Document store backends.

- memory: in-process dictionaries (development, tests)
- firestore: Cloud Firestore through firebase-admin
"""

from __future__ import annotations

import logging

from eehub.config import Settings
from eehub.store.base import Document, DocumentStore, StoreError
from eehub.store.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)

__all__ = ["Document", "DocumentStore", "StoreError", "MemoryDocumentStore", "build_store"]


def build_store(settings: Settings) -> DocumentStore:
    if settings.store_backend == "memory":
        logger.warning("Using in-memory document store; data is lost on restart")
        return MemoryDocumentStore()
    # Imported lazily so the memory backend works without Google credentials.
    from eehub.store.firestore import FirestoreDocumentStore

    return FirestoreDocumentStore.from_credentials(settings.firebase_credentials)
