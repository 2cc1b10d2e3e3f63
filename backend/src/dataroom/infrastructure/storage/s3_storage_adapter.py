"""S3 Storage Adapter - Implementation of ObjectStoragePort using boto3.

Provides bucket operations for AWS S3, MinIO, and other S3-compatible services.
Blocking boto3 calls run in a worker thread so they only suspend the caller.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ...domain.documents.ports.object_storage_port import (
    ObjectStoragePort,
    StorageError,
    StoredObject,
)

logger = logging.getLogger(__name__)


def _client_error_reason(e: ClientError) -> str:
    error = e.response.get("Error", {})
    code = error.get("Code", "Unknown")
    message = error.get("Message")
    return f"{code}: {message}" if message else code


class S3StorageAdapter(ObjectStoragePort):
    """S3-compatible storage adapter using boto3.

    Public URLs are built without a network call:
    - ``{public_base_url}/{key}`` when a public base URL is configured
    - ``{endpoint_url}/{bucket}/{key}`` (path style) for custom endpoints
    - ``https://{bucket}.s3.{region}.amazonaws.com/{key}`` otherwise

    Example:
        storage = S3StorageAdapter(
            endpoint_url="http://localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
            bucket_name="dataroom-documents",
        )
        await storage.upload("1716400000000_deck.pdf", data, "application/pdf")
    """

    def __init__(
        self,
        endpoint_url: Optional[str],
        access_key: Optional[str],
        secret_key: Optional[str],
        bucket_name: str,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ):
        """Initialize S3 storage adapter.

        Args:
            endpoint_url: S3 endpoint URL (None for AWS S3, URL for MinIO)
            access_key: S3 access key ID (None for the default credential chain)
            secret_key: S3 secret access key
            bucket_name: S3 bucket name
            region: AWS region (default: 'us-east-1')
            public_base_url: Base URL for public object links

        Raises:
            StorageError: If S3 client initialization fails
        """
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
        except NoCredentialsError as e:
            raise StorageError(f"Invalid S3 credentials: {e}")
        except BotoCoreError as e:
            raise StorageError(f"Failed to initialize S3 client: {e}")

        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        self.bucket_name = bucket_name
        self.region = region
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

        logger.info(
            f"Initialized S3 storage adapter: bucket={bucket_name}, "
            f"endpoint={endpoint_url or 'AWS S3'}, region={region}"
        )

    async def list_objects(self, prefix: str = "", limit: int = 100) -> List[StoredObject]:
        try:
            response = await asyncio.to_thread(
                self.s3_client.list_objects_v2,
                Bucket=self.bucket_name,
                Prefix=prefix,
                Delimiter="/",
                MaxKeys=limit,
            )
        except ClientError as e:
            reason = _client_error_reason(e)
            logger.error(f"S3 list failed: bucket={self.bucket_name}, error={reason}")
            raise StorageError(reason)
        except BotoCoreError as e:
            logger.error(f"S3 list failed: bucket={self.bucket_name}, error={e}")
            raise StorageError(str(e))

        # Sub-prefixes come back as CommonPrefixes and are not documents
        objects = []
        for item in response.get("Contents", []):
            key = item["Key"]
            # Folder placeholders are not documents
            if key.endswith("/"):
                continue
            objects.append(StoredObject(
                name=key,
                created_at=None,
                updated_at=item.get("LastModified"),
                size_bytes=item.get("Size"),
            ))
        return objects

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
        overwrite: bool = True,
    ) -> StoredObject:
        if not overwrite and await self._object_exists(key):
            raise StorageError(f"The resource already exists: {key}")

        params = {"Bucket": self.bucket_name, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type

        try:
            await asyncio.to_thread(self.s3_client.put_object, **params)
        except ClientError as e:
            reason = _client_error_reason(e)
            logger.error(f"S3 upload failed: storage_key={key}, error={reason}")
            raise StorageError(reason)
        except BotoCoreError as e:
            logger.error(f"S3 upload failed: storage_key={key}, error={e}")
            raise StorageError(str(e))

        logger.info(f"Uploaded object: storage_key={key}, size={len(data)}, content_type={content_type}")
        return StoredObject(name=key, size_bytes=len(data))

    async def remove(self, keys: List[str]) -> None:
        if not keys:
            return

        try:
            response = await asyncio.to_thread(
                self.s3_client.delete_objects,
                Bucket=self.bucket_name,
                Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True},
            )
        except ClientError as e:
            reason = _client_error_reason(e)
            logger.error(f"S3 delete failed: keys={keys}, error={reason}")
            raise StorageError(reason)
        except BotoCoreError as e:
            logger.error(f"S3 delete failed: keys={keys}, error={e}")
            raise StorageError(str(e))

        errors = response.get("Errors", [])
        if errors:
            first = errors[0]
            reason = f"{first.get('Code', 'Unknown')}: {first.get('Message', first.get('Key'))}"
            logger.error(f"S3 delete rejected: keys={keys}, error={reason}")
            raise StorageError(reason)

        logger.info(f"Deleted objects: keys={keys}")

    def public_url(self, key: str) -> str:
        quoted = quote(key)
        if self.public_base_url:
            return f"{self.public_base_url}/{quoted}"
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket_name}/{quoted}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{quoted}"

    async def verify_bucket_exists(self) -> bool:
        """Verify that the configured bucket exists.

        Returns:
            bool: False if S3 reports the bucket as missing

        Raises:
            StorageError: If the bucket check fails for any other reason
        """
        try:
            await asyncio.to_thread(self.s3_client.head_bucket, Bucket=self.bucket_name)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchBucket"):
                logger.warning(f"Bucket does not exist: {self.bucket_name}")
                return False
            raise StorageError(f"Failed to verify bucket: {error_code}")
        except BotoCoreError as e:
            raise StorageError(f"Failed to verify bucket: {e}")
        return True

    async def _object_exists(self, key: str) -> bool:
        try:
            await asyncio.to_thread(self.s3_client.head_object, Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(_client_error_reason(e))
        except BotoCoreError as e:
            raise StorageError(str(e))
