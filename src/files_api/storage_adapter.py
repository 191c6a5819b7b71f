"""
Storage adapter between the HTTP routes and the S3 bucket.

Objects are stored under `<uuid4>-<original filename>` and addressed by the
virtual-hosted URL `https://<bucket>.s3.amazonaws.com/<key>`. Nothing is kept
locally; callers hold on to the returned URL.
"""

import logging
import uuid
from typing import Optional
from urllib.parse import urlsplit

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_s3 import S3Client

from files_api.errors import MalformedReference, StorageUnavailable
from files_api.s3.delete_objects import delete_s3_object
from files_api.s3.write_objects import upload_s3_object
from files_api.settings import Settings
from files_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)


def create_s3_client(settings: Settings) -> S3Client:
    """Create the S3 client shared by every request."""
    client_kwargs = {
        "region_name": settings.aws_region,
        "aws_access_key_id": settings.aws_access_key_id,
        "aws_secret_access_key": settings.aws_secret_access_key,
    }
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url

    client = boto3.client("s3", **client_kwargs)
    logger.info(f"Created S3 client for bucket {settings.s3_bucket_name} in {settings.aws_region}")
    return client


def build_key(original_name: str) -> str:
    """Prefix the file name with a fresh random token."""
    return f"{uuid.uuid4()}-{original_name}"


class StorageAdapter:
    """Upload, delete and replace files in the configured bucket."""

    def __init__(self, settings: Settings, s3_client: Optional[S3Client] = None):
        self.settings = settings
        self.bucket_name = settings.s3_bucket_name
        self.s3_client = s3_client or create_s3_client(settings)

    def object_url(self, key: str) -> str:
        return f"https://{self.settings.bucket_host}/{key}"

    def key_from_url(self, url: str) -> str:
        """
        Recover the object key from a URL returned by `upload`.

        Everything after `<bucket host>/` is the key, taken verbatim.

        :raises MalformedReference: if the URL is not an https URL of this bucket,
            or carries no key.
        """
        host = self.settings.bucket_host
        try:
            parts = urlsplit(url)
        except ValueError as err:
            raise MalformedReference(f"Unparseable file URL: {url}", details={"url": url}) from err

        if parts.scheme != "https" or parts.netloc != host:
            raise MalformedReference(
                f"File URL does not belong to bucket {self.bucket_name}: {url}",
                details={"url": url, "expected_host": host},
            )

        prefix = f"https://{host}/"
        key = url[len(prefix):] if url.startswith(prefix) else ""
        if not key:
            raise MalformedReference(f"File URL has no object key: {url}", details={"url": url})
        return key

    @log_execution_time
    def upload(self, content: bytes, original_name: str, content_type: Optional[str] = None) -> str:
        """
        Store `content` under a new key and return its URL.

        :raises StorageUnavailable: if the put fails.
        """
        key = build_key(original_name)
        try:
            upload_s3_object(
                bucket_name=self.bucket_name,
                object_key=key,
                file_content=content,
                content_type=content_type,
                s3_client=self.s3_client,
            )
        except (BotoCoreError, ClientError) as err:
            logger.error(f"Error uploading {key} to S3: {str(err)}")
            raise StorageUnavailable(
                f"Failed to upload file: {str(err)}",
                details={"operation": "put_object", "key": key},
            ) from err

        url = self.object_url(key)
        logger.info(f"Uploaded file: {url}")
        return url

    @log_execution_time
    def delete(self, url: str) -> None:
        """
        Delete the object behind `url`. Deleting a key that is already gone succeeds.

        :raises MalformedReference: if `url` is not one of this bucket's URLs.
        :raises StorageUnavailable: if the delete fails.
        """
        key = self.key_from_url(url)
        try:
            delete_s3_object(
                bucket_name=self.bucket_name,
                object_key=key,
                s3_client=self.s3_client,
            )
        except (BotoCoreError, ClientError) as err:
            logger.error(f"Error deleting {key} from S3: {str(err)}")
            raise StorageUnavailable(
                f"Failed to delete file: {str(err)}",
                details={"operation": "delete_object", "key": key},
            ) from err

        logger.info(f"Deleted file: {url}")

    def update(
        self,
        content: bytes,
        original_name: str,
        existing_url: str,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Replace the object behind `existing_url` with `content`.

        Deletes first, then uploads. The two calls are not atomic: if the upload
        fails the old object is already gone and the error propagates. If the
        delete fails nothing is uploaded.
        """
        self.delete(existing_url)
        return self.upload(content, original_name, content_type=content_type)
