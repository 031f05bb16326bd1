# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Load content documents from a YAML file.

Expected layout::

    articles:
      - title: Why wetlands matter
        body: ...
    activities: [...]
    forum: [...]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from eehub.services.content_service import CONTENT_COLLECTIONS
from eehub.store.base import DocumentStore

logger = logging.getLogger(__name__)


def load_seed_file(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping of collection -> documents")

    unknown = sorted(set(raw) - set(CONTENT_COLLECTIONS))
    if unknown:
        raise ValueError(f"{path}: unknown collections: {', '.join(map(str, unknown))}")

    out: Dict[str, List[Dict[str, Any]]] = {}
    for collection in CONTENT_COLLECTIONS:
        docs = raw.get(collection) or []
        if not isinstance(docs, list) or not all(isinstance(d, dict) for d in docs):
            raise ValueError(f"{path}: '{collection}' must be a list of mappings")
        out[collection] = docs
    return out


def seed_store(store: DocumentStore, data: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
    """Insert every document; returns the number written per collection."""
    counts: Dict[str, int] = {}
    for collection, docs in data.items():
        for doc in docs:
            store.add(collection, doc)
        counts[collection] = len(docs)
        logger.info("Seeded %d documents into %s", len(docs), collection)
    return counts
