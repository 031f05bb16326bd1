# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cloud Firestore backend (firebase-admin).

Credentials come from a service account JSON file when a path is given,
otherwise from Application Default Credentials.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter

from eehub.store.base import Document, StoreError

logger = logging.getLogger(__name__)


def _to_document(snapshot) -> Document:
    return Document(id=snapshot.id, data=snapshot.to_dict() or {})


class FirestoreDocumentStore:
    def __init__(self, client) -> None:
        self._db = client

    @classmethod
    def from_credentials(cls, credentials_path: str = "") -> "FirestoreDocumentStore":
        try:
            app = firebase_admin.get_app()
        except ValueError:
            if credentials_path:
                cred = credentials.Certificate(credentials_path)
            else:
                cred = credentials.ApplicationDefault()
            app = firebase_admin.initialize_app(cred)
            logger.info("Initialised Firebase app for project %s", app.project_id or "<default>")
        return cls(firestore.client(app))

    def find_by(
        self, collection: str, field_name: str, value: Any, *, limit: Optional[int] = None
    ) -> List[Document]:
        query = self._db.collection(collection).where(filter=FieldFilter(field_name, "==", value))
        if limit:
            query = query.limit(limit)
        try:
            return [_to_document(s) for s in query.stream()]
        except GoogleAPIError as e:
            raise StoreError(f"query {collection}.{field_name} failed: {e}") from e

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            snapshot = self._db.collection(collection).document(doc_id).get()
        except GoogleAPIError as e:
            raise StoreError(f"get {collection}/{doc_id} failed: {e}") from e
        if not snapshot.exists:
            return None
        return _to_document(snapshot)

    def list(self, collection: str) -> List[Document]:
        try:
            return [_to_document(s) for s in self._db.collection(collection).stream()]
        except GoogleAPIError as e:
            raise StoreError(f"list {collection} failed: {e}") from e

    def add(self, collection: str, data: Dict[str, Any]) -> str:
        try:
            _, ref = self._db.collection(collection).add(dict(data))
        except GoogleAPIError as e:
            raise StoreError(f"add to {collection} failed: {e}") from e
        return ref.id
