"""S3 object store adapter.

Stores attachment images in an S3 (or S3-compatible) bucket. boto3 is
synchronous, so each call runs in the default executor to keep the event
loop free. Timeouts and retries are enforced by botocore's Config; a timeout
surfaces as a failure like any other SDK error.

Object keys: "{folder}/{uuid7}-{name}", unique per upload so a retried
upload never overwrites an object another row still references.
"""

import asyncio
from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar
from urllib.parse import quote, unquote

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.errors import UpstreamUnavailableError
from src.core.result import Failure, Result, Success
from src.domain.protocols.object_store_protocol import ObjectInfo, StoredObject

T = TypeVar("T")


def build_s3_client(
    *,
    region: str,
    endpoint_url: str | None = None,
    connect_timeout: float = 5.0,
    read_timeout: float = 30.0,
    max_attempts: int = 3,
) -> BaseClient:
    """Return a configured S3 client (supports S3-compatible endpoints)."""
    return boto3.client(
        "s3",
        region_name=region,
        endpoint_url=endpoint_url.rstrip("/") if endpoint_url else None,
        config=Config(
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={"max_attempts": max_attempts, "mode": "standard"},
        ),
    )


class S3ObjectStore:
    """Implements ObjectStoreProtocol on top of boto3.

    Args:
        client: boto3 S3 client (see build_s3_client).
        bucket: Bucket name.
        public_base_url: Base URL objects are served from. Defaults to the
            virtual-hosted bucket URL for the client's region.
    """

    SERVICE_NAME = "s3"

    def __init__(
        self,
        client: BaseClient,
        bucket: str,
        public_base_url: str | None = None,
    ) -> None:
        self._client = client
        self._bucket = bucket
        if public_base_url:
            self._public_base_url = public_base_url.rstrip("/")
        else:
            region = client.meta.region_name
            self._public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    async def upload(
        self,
        folder: str,
        content: bytes,
        content_type: str,
        name: str,
    ) -> Result[StoredObject, UpstreamUnavailableError]:
        key = f"{folder}/{uuid7().hex}-{name}"
        result = await self._call(
            "upload",
            partial(
                self._client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            ),
        )
        if isinstance(result, Failure):
            return result
        return Success(value=StoredObject(object_id=key, public_url=self._url_for(key)))

    async def delete(self, object_id: str) -> Result[None, UpstreamUnavailableError]:
        result = await self._call(
            "delete",
            partial(self._client.delete_object, Bucket=self._bucket, Key=object_id),
        )
        if isinstance(result, Failure):
            return result
        return Success(value=None)

    def object_id_from_url(self, url: str) -> str | None:
        prefix = f"{self._public_base_url}/"
        if not url.startswith(prefix):
            return None
        key = unquote(url[len(prefix) :].split("?", 1)[0])
        return key or None

    async def list_objects(
        self, folder: str
    ) -> Result[list[ObjectInfo], UpstreamUnavailableError]:
        return await self._call("list", partial(self._list_sync, f"{folder}/"))

    def _list_sync(self, prefix: str) -> list[ObjectInfo]:
        paginator = self._client.get_paginator("list_objects_v2")
        objects: list[ObjectInfo] = []
        for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
            for item in page.get("Contents", []):
                objects.append(
                    ObjectInfo(
                        object_id=item["Key"],
                        public_url=self._url_for(item["Key"]),
                        last_modified=item["LastModified"],
                    )
                )
        return objects

    def _url_for(self, key: str) -> str:
        return f"{self._public_base_url}/{quote(key)}"

    async def _call(
        self, operation: str, func: Callable[[], T]
    ) -> Result[T, UpstreamUnavailableError]:
        """Run a blocking SDK call in the executor, mapping SDK errors to Failure."""
        loop = asyncio.get_running_loop()
        try:
            value = await loop.run_in_executor(None, func)
        except ClientError as e:
            error: dict[str, Any] = e.response.get("Error", {})
            return Failure(
                error=UpstreamUnavailableError(
                    code=ErrorCode.UPSTREAM_UNAVAILABLE,
                    message=f"Object store {operation} failed",
                    service_name=self.SERVICE_NAME,
                    details={
                        "operation": operation,
                        "aws_error_code": str(error.get("Code", "unknown")),
                    },
                )
            )
        except BotoCoreError as e:
            return Failure(
                error=UpstreamUnavailableError(
                    code=ErrorCode.UPSTREAM_UNAVAILABLE,
                    message=f"Object store {operation} failed",
                    service_name=self.SERVICE_NAME,
                    details={"operation": operation, "error_type": type(e).__name__},
                )
            )
        return Success(value=value)
