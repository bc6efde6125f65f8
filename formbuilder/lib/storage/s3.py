"""AWS S3 storage backend."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from formbuilder.lib.errors import StorageError
from formbuilder.lib.resilience import RetryConfig, retry_operation
from formbuilder.lib.storage.base import StorageBackend

logger = logging.getLogger(__name__)

__all__ = ["S3Storage"]

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, BotoCoreError):
        return True
    if isinstance(exc, ClientError):
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0) or 0
        code = exc.response.get("Error", {}).get("Code")
        return int(status) == 429 or int(status) >= 500 or code in {"SlowDown", "RequestLimitExceeded"}
    return False


class _TransientS3Error(Exception):
    """Wraps a boto error that is worth retrying."""


class S3Storage(StorageBackend):
    """Store each key as the object ``<prefix>/<key>.json`` in a bucket.

    Example:
        >>> storage = S3Storage("s3://team-forms/schemas/")
        >>> storage.set("formConfig", "[]")

    Environment Variables:
        AWS_ACCESS_KEY_ID: AWS access key
        AWS_SECRET_ACCESS_KEY: AWS secret key
        AWS_REGION: AWS region
        AWS_ENDPOINT_URL: Custom S3 endpoint (for MinIO, LocalStack, etc.)

    Options:
        key: AWS access key (overrides env var)
        secret: AWS secret key (overrides env var)
        region: AWS region (overrides env var)
        endpoint_url: Custom S3 endpoint
        client: Pre-built boto3 S3 client
        retry: RetryConfig for transient failures
    """

    suffix = ".json"

    def __init__(self, base_path: str, **options: Any) -> None:
        super().__init__(base_path, **options)
        self._bucket, self._prefix = self._parse_path(base_path)
        if not self._bucket:
            raise StorageError("S3 path must name a bucket", backend="s3", key=base_path)
        self._client = options.get("client")
        self._retry: RetryConfig = options.get("retry") or RetryConfig.default()

    @staticmethod
    def _parse_path(path: str) -> tuple[str, str]:
        """Parse an S3 URI into bucket and prefix."""
        if path.startswith("s3://"):
            path = path[5:]
        parts = path.split("/", 1)
        prefix = parts[1].strip("/") if len(parts) > 1 else ""
        return parts[0], prefix

    @property
    def scheme(self) -> str:
        return "s3"

    @property
    def client(self):
        """Lazy-build the boto3 client."""
        if self._client is None:
            client_kwargs: Dict[str, Any] = {}

            key = self.options.get("key") or os.environ.get("AWS_ACCESS_KEY_ID")
            secret = self.options.get("secret") or os.environ.get("AWS_SECRET_ACCESS_KEY")
            if key and secret:
                client_kwargs["aws_access_key_id"] = key
                client_kwargs["aws_secret_access_key"] = secret

            region = self.options.get("region") or os.environ.get("AWS_REGION")
            if region:
                client_kwargs["region_name"] = region

            endpoint_url = self.options.get("endpoint_url") or os.environ.get("AWS_ENDPOINT_URL")
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url

            self._client = boto3.client("s3", **client_kwargs)
            logger.debug(
                "Created S3 client for bucket '%s' with endpoint: %s",
                self._bucket,
                endpoint_url or "default",
            )
        return self._client

    def _object_key(self, key: str) -> str:
        name = f"{key}{self.suffix}"
        return f"{self._prefix}/{name}" if self._prefix else name

    def _call(self, operation_name: str, key: str, fn):
        def attempt():
            try:
                return fn()
            except (BotoCoreError, ClientError) as exc:
                if _is_transient(exc):
                    raise _TransientS3Error(str(exc)) from exc
                raise

        config = RetryConfig(
            max_attempts=self._retry.max_attempts,
            backoff_seconds=self._retry.backoff_seconds,
            exponential=self._retry.exponential,
            jitter=self._retry.jitter,
            retry_exceptions=(_TransientS3Error,),
        )
        try:
            return retry_operation(attempt, config, f"s3 {operation_name}")
        except _TransientS3Error as exc:
            raise StorageError(
                f"S3 {operation_name} failed", backend=self.scheme, key=key, cause=exc.__cause__
            ) from exc

    def get(self, key: str) -> Optional[str]:
        object_key = self._object_key(key)

        def read() -> Optional[bytes]:
            try:
                response = self.client.get_object(Bucket=self._bucket, Key=object_key)
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES:
                    return None
                raise
            return response["Body"].read()

        try:
            data = self._call("get", key, read)
        except ClientError as exc:
            raise StorageError(
                f"Failed to read s3://{self._bucket}/{object_key}",
                backend=self.scheme,
                key=key,
                cause=exc,
            ) from exc

        if data is None:
            logger.debug("No object for key %r at s3://%s/%s", key, self._bucket, object_key)
            return None
        return data.decode("utf-8")

    def set(self, key: str, text: str) -> None:
        object_key = self._object_key(key)

        def write() -> None:
            self.client.put_object(
                Bucket=self._bucket,
                Key=object_key,
                Body=text.encode("utf-8"),
                ContentType="application/json",
            )

        try:
            self._call("put", key, write)
        except ClientError as exc:
            raise StorageError(
                f"Failed to write s3://{self._bucket}/{object_key}",
                backend=self.scheme,
                key=key,
                cause=exc,
            ) from exc
        logger.debug("Wrote %d characters to s3://%s/%s", len(text), self._bucket, object_key)

    def delete(self, key: str) -> bool:
        if not self.exists(key):
            return False
        object_key = self._object_key(key)
        self._call(
            "delete",
            key,
            lambda: self.client.delete_object(Bucket=self._bucket, Key=object_key),
        )
        logger.info("Deleted s3://%s/%s", self._bucket, object_key)
        return True

    def keys(self) -> List[str]:
        prefix = f"{self._prefix}/" if self._prefix else ""
        paginator = self.client.get_paginator("list_objects_v2")
        found: List[str] = []
        for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
            for item in page.get("Contents", []):
                name = item["Key"][len(prefix):]
                if "/" not in name and name.endswith(self.suffix):
                    found.append(name[: -len(self.suffix)])
        return sorted(found)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(bucket={self._bucket!r}, prefix={self._prefix!r})"
