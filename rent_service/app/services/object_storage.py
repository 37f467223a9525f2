import asyncio
import logging
from abc import ABC, abstractmethod

from rent_service.domain.errors import storage_unavailable
from rent_service.libs.result import Result, Return

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised by storage adapters when the backend rejects or fails a call"""


class ObjectStorage(ABC):
    """Object storage port - the core only ever keeps the returned keys"""

    @abstractmethod
    async def store(self, data: bytes, content_type: str, logical_path: str) -> str:
        """Store bytes under logical_path and return the storage key"""
        pass

    @abstractmethod
    async def resolve(self, key: str) -> str:
        """Return a temporary URL for a stored key"""
        pass


async def store_bounded(
    storage: ObjectStorage,
    data: bytes,
    content_type: str,
    logical_path: str,
    timeout: float,
) -> Result[str]:
    """Store with a deadline; timeouts and adapter failures become errors, never retries."""
    try:
        key = await asyncio.wait_for(
            storage.store(data, content_type, logical_path), timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.warning(f"Storage timed out after {timeout}s storing {logical_path}")
        return Return.err(storage_unavailable("timed out"))
    except StorageError as exc:
        logger.warning(f"Storage failed storing {logical_path}: {exc}")
        return Return.err(storage_unavailable(str(exc)))
    return Return.ok(key)


async def resolve_bounded(storage: ObjectStorage, key: str, timeout: float) -> Result[str]:
    try:
        url = await asyncio.wait_for(storage.resolve(key), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Storage timed out after {timeout}s resolving {key}")
        return Return.err(storage_unavailable("timed out"))
    except StorageError as exc:
        logger.warning(f"Storage failed resolving {key}: {exc}")
        return Return.err(storage_unavailable(str(exc)))
    return Return.ok(url)
