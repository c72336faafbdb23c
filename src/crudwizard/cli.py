"""Command line entry point.

    crudwizard serve     # run the API with uvicorn
    crudwizard migrate   # connect and auto-migrate, then exit
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence

import uvicorn

from src.crudwizard.core.config import get_settings
from src.crudwizard.core.db import DatabaseError, initialize_database
from src.crudwizard.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="crudwizard", description="CRUD Wizard API")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: PORT setting)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("migrate", help="Connect to the database and auto-migrate the schema")

    return parser.parse_args(argv)


async def migrate() -> None:
    database = await initialize_database(get_settings())
    try:
        logger.info("migration_complete", tables=[m.__tablename__ for m in database.models])
    finally:
        await database.dispose()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.debug)

    if args.command == "migrate":
        try:
            asyncio.run(migrate())
        except DatabaseError as e:
            logger.error("startup_failed", error=str(e))
            return 1
        return 0

    uvicorn.run(
        "src.crudwizard.main:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
