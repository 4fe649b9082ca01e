#!/usr/bin/env python3
"""Issue a JWT for an operator or a scheduled job.

End-user tokens come from the external auth layer. This covers callers of
the authenticated news routes (``POST /news/ingest``, ``/news/refresh`` and
``/news/sources``), e.g. a cron job triggering ingestion over HTTP.

Usage:
    python scripts/issue_token.py <user_id> <username> [--network-id <uuid>]
"""

import argparse
import asyncio
import sys
from uuid import UUID

import logfire
from dishka import AsyncContainer, Scope

from comnet.config import Settings
from comnet.domain.service import JWTService
from comnet.util.di.container import create_container
from comnet.util.logging import setup_logging
from comnet.util.observability import configure_logfire


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a COMNet API token")
    parser.add_argument("user_id", type=UUID, help="Subject of the token")
    parser.add_argument("username", help="Username claim")
    parser.add_argument(
        "--network-id",
        type=UUID,
        default=None,
        help="Network claim; omitted tokens resolve to the default network",
    )
    return parser.parse_args(argv)


async def issue_token(
    container: AsyncContainer,
    user_id: UUID,
    username: str,
    network_id: UUID | None = None,
) -> str:
    async with container(scope=Scope.REQUEST) as request_container:
        jwt_service = await request_container.get(JWTService)
        return jwt_service.create_token(
            str(user_id), username, str(network_id) if network_id else None
        )


async def run(args: argparse.Namespace) -> str:
    container = create_container(with_fastapi=False)
    try:
        return await issue_token(container, args.user_id, args.username, args.network_id)
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        token = asyncio.run(run(args))
    except Exception as e:
        logfire.error("Token issuance failed", error=str(e), _exc_info=sys.exc_info())
        return 1

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
