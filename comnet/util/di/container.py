"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from comnet.util.di import PROVIDERS, get_provider


def create_container(with_fastapi: bool = True) -> AsyncContainer:
    """Build production container (all prod implementations).

    Args:
        with_fastapi: Include the FastAPI integration provider (off for
            batch scripts that run outside a web request)

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    if with_fastapi:
        provider_instances.append(FastapiProvider())
    return make_async_container(*provider_instances)


def setup_di(app, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
