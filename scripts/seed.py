# scripts/seed.py
"""
永続DBへ初期データ(seed)を投入します。
Store API 経由で書き込むため、正規化・一意制約などのルールはそのまま適用されます。
既にジムが存在する場合は何もしません（--force で強制投入）。
"""

import argparse
import asyncio
import sys

import structlog

from gym_directory.core.config import get_settings
from gym_directory.db import create_engine
from gym_directory.logging import setup_logging
from gym_directory.repositories.sqlalchemy import SqlAlchemyStore
from gym_directory.seed import load_seed


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the persistent gym/user store")
    parser.add_argument("--database-url", help="DATABASE_URL を上書き")
    parser.add_argument("--force", action="store_true", help="既存データがあっても投入する")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging(settings)
    logger = structlog.get_logger("scripts.seed")

    database_url = args.database_url or settings.database_url
    if not database_url:
        logger.error("seed_aborted", reason="DATABASE_URL is not set")
        return 2

    store = SqlAlchemyStore(create_engine(database_url))
    try:
        await store.create_schema()
        if not args.force and await store.gyms.find_all():
            logger.info("seed_skipped", reason="gyms already present")
            return 0
        await load_seed(store)
    finally:
        await store.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
