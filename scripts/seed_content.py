#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path

from eehub.config import load_settings
from eehub.logging_setup import configure_logging
from eehub.services.seed_service import load_seed_file, seed_store
from eehub.store import build_store


def main() -> None:
    parser = argparse.ArgumentParser(description="Load articles/activities/forum documents into the store")
    parser.add_argument("seed_file", type=Path, help="YAML file, see data/seed_example.yml")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)
    if settings.store_backend == "memory":
        raise SystemExit("EEH_STORE=memory: nothing would persist, point EEH_STORE at firestore")

    counts = seed_store(build_store(settings), load_seed_file(args.seed_file))
    for collection, n in counts.items():
        print(f"{collection}: {n}")


if __name__ == "__main__":
    main()
