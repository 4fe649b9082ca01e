#!/usr/bin/env python3
"""Run one news ingestion pass.

Fetches every active channel, stores unseen items and publishes pending
items into the subscribed networks. Scheduling is left to cron or the
platform scheduler.
"""

import asyncio
import sys

import logfire
from dishka import Scope

from comnet.application.usecase.news import RunIngestionUseCase
from comnet.config import Settings
from comnet.util.di.container import create_container
from comnet.util.logging import setup_logging
from comnet.util.observability import configure_logfire


async def run() -> None:
    container = create_container(with_fastapi=False)
    try:
        async with container(scope=Scope.REQUEST) as request_container:
            use_case = await request_container.get(RunIngestionUseCase)
            result = await use_case.execute()
        logfire.info(
            "Ingestion run completed",
            items_fetched=result.items_fetched,
            posts_created=result.posts_created,
            items_failed=result.items_failed,
        )
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(run())
        return 0
    except Exception as e:
        logfire.error(
            "Ingestion run failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
