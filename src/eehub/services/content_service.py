# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from eehub.core.results import Lookup
from eehub.store.base import DocumentStore, StoreError

logger = logging.getLogger(__name__)

ARTICLES = "articles"
ACTIVITIES = "activities"
FORUM = "forum"

CONTENT_COLLECTIONS = (ARTICLES, ACTIVITIES, FORUM)


def _check(collection: str) -> None:
    if collection not in CONTENT_COLLECTIONS:
        raise ValueError(f"Not a content collection: {collection!r}")


def list_items(store: DocumentStore, collection: str) -> Lookup:
    """All documents of a collection as ``{"id": ..., **fields}`` dicts."""
    _check(collection)
    try:
        docs = store.list(collection)
    except StoreError:
        logger.exception("Error fetching %s", collection)
        return Lookup.unavailable()
    return Lookup.found([d.as_item() for d in docs])


def get_item(store: DocumentStore, collection: str, item_id: str) -> Lookup:
    _check(collection)
    try:
        doc = store.get(collection, item_id)
    except StoreError:
        logger.exception("Error fetching %s/%s", collection, item_id)
        return Lookup.unavailable()
    if doc is None:
        return Lookup.not_found()
    return Lookup.found(doc.data)
