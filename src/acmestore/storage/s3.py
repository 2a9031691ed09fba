"""S3-compatible object store backed by boto3."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError

from acmestore.core.exceptions import ObjectNotFoundError
from acmestore.logging import get_logger
from acmestore.storage.base import ListPage

logger = get_logger("storage.s3")

# Error codes S3 and compatible services use for a missing object
NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def is_not_found(error: ClientError) -> bool:
    """Return True if a botocore ClientError means the object is absent."""
    # NoSuchBucket also carries HTTP 404 but is a configuration error
    code = str(error.response.get("Error", {}).get("Code", ""))
    return code in NOT_FOUND_CODES


class S3ObjectStore:
    """
    Object store for an S3 bucket (AWS, MinIO and other compatible services).

    Authentication, retries and transport are left to boto3. Pass an
    existing client to reuse a session; otherwise one is created lazily
    from the given options and the default credential chain.
    """

    def __init__(
        self,
        bucket: str,
        client: Any = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        page_size: int = 1000,
    ):
        if not bucket:
            raise ValueError("bucket is required for the S3 object store")

        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.page_size = page_size
        self._client = client

    def _get_client(self):
        """Lazy initialization of boto3 client."""
        if self._client is None:
            self._client = boto3.client(
                "s3",
                region_name=self.region,
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
            )
        return self._client

    def get(self, key: str) -> bytes:
        try:
            response = self._get_client().get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if is_not_found(e):
                raise ObjectNotFoundError(key) from e
            raise
        return response["Body"].read()

    def put(self, key: str, body: bytes, content_type: str) -> None:
        self._get_client().put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def list(
        self,
        prefix: str,
        delimiter: str | None = None,
        continuation_token: str | None = None,
    ) -> ListPage:
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Prefix": prefix,
            "MaxKeys": self.page_size,
        }
        if delimiter:
            params["Delimiter"] = delimiter
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        response = self._get_client().list_objects_v2(**params)
        logger.debug(
            "Listed objects",
            fields={"prefix": prefix, "key_count": response.get("KeyCount", 0)},
        )

        next_token = None
        if response.get("IsTruncated"):
            next_token = response.get("NextContinuationToken")

        return ListPage(
            prefixes=[p["Prefix"] for p in response.get("CommonPrefixes", [])],
            keys=[obj["Key"] for obj in response.get("Contents", [])],
            next_token=next_token,
        )
