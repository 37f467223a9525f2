"""
Object storage adapters.

LocalObjectStorage keeps files under a directory and is the default for
development and tests; S3ObjectStorage talks to S3 (or any S3-compatible
endpoint) through boto3.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from rent_service.app.services.object_storage import ObjectStorage, StorageError

logger = logging.getLogger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Filesystem-backed storage; keys are paths relative to the root directory"""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"Key escapes storage root: {key}")
        return path

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def store(self, data: bytes, content_type: str, logical_path: str) -> str:
        path = self._path_for(logical_path)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as exc:
            raise StorageError(str(exc)) from exc
        logger.debug(f"Stored {len(data)} bytes ({content_type}) at {logical_path}")
        return logical_path

    async def resolve(self, key: str) -> str:
        path = self._path_for(key)
        if not path.exists():
            raise StorageError(f"No object stored under {key}")
        return f"{self.base_url}/{key}"


class S3ObjectStorage(ObjectStorage):
    """S3-backed storage; resolve() returns a presigned GET URL"""

    def __init__(
        self,
        bucket: str,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        url_ttl_seconds: int = 900,
        client=None,
    ):
        self.bucket = bucket
        self.url_ttl_seconds = url_ttl_seconds
        self.client = client or boto3.client(
            "s3", region_name=region, endpoint_url=endpoint_url
        )

    async def store(self, data: bytes, content_type: str, logical_path: str) -> str:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=logical_path,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
        return logical_path

    async def resolve(self, key: str) -> str:
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.url_ttl_seconds,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(str(exc)) from exc
