"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from comnet.domain.error import InvalidArgumentError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_uuid(value: str, field: str) -> UUID:
    """Parse an ID received as a string.

    Raises:
        InvalidArgumentError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid {field}: {value}")
