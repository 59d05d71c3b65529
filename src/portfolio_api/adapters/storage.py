"""
Media storage for uploaded images.

Uploads land either in an S3 bucket (aws-mock, aws-prod) or in a local directory
served by the API itself (local-dev). Both return a public URL for the stored object;
any failure surfaces as UploadError.
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from portfolio_api.config.settings import Settings
from portfolio_api.errors import UploadError
from portfolio_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

MEDIA_ROUTE = "/media"


@dataclass(frozen=True)
class Attachment:
    """An uploaded file held in memory."""
    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


def build_object_key(folder: str, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
    """Generate a unique key under `folder`, keeping the original extension."""
    suffix = PurePosixPath(filename).suffix.lower() if filename else ""
    if not suffix and content_type:
        suffix = mimetypes.guess_extension(content_type) or ""
    return f"{folder.strip('/')}/{uuid.uuid4().hex}{suffix}"


class S3BlobStore:
    """Stores uploads in an S3 bucket and hands back their public URL."""

    def __init__(
        self,
        bucket_name: str,
        s3_client=None,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self.s3_client = s3_client or boto3.client("s3", region_name=region, endpoint_url=endpoint_url)

    def public_url(self, object_key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{object_key}"
        if self.endpoint_url:
            # path-style addressing for S3-compatible endpoints (moto server, MinIO)
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{object_key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{object_key}"

    @log_execution_time
    def upload(self, data: bytes, folder: str, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
        """
        Upload bytes to the bucket.

        :param data: The file content.
        :param folder: Logical folder the object is filed under, e.g. "portfolio/projects".
        :param filename: Original filename, used only for its extension.
        :param content_type: The MIME type of the file.
        :return: Public URL of the stored object.
        """
        object_key = build_object_key(folder, filename, content_type)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=object_key,
                Body=data,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading to S3: {str(e)}")
            raise UploadError(str(e)) from e

        logger.info(f"Uploaded {len(data)} bytes to s3://{self.bucket_name}/{object_key}")
        return self.public_url(object_key)

    def ping(self) -> bool:
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 bucket check failed: {e}")
            return False


class LocalBlobStore:
    """Stores uploads on disk; the app serves them under /media."""

    def __init__(self, storage_dir: Union[str, Path], public_base_url: str):
        self.storage_dir = Path(storage_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    @log_execution_time
    def upload(self, data: bytes, folder: str, filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
        object_key = build_object_key(folder, filename, content_type)
        dest_path = self.storage_dir / object_key
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            dest_path.write_bytes(data)
        except OSError as e:
            logger.error(f"Error writing upload to {dest_path}: {e}")
            raise UploadError(str(e)) from e

        logger.info(f"Stored {len(data)} bytes at {dest_path}")
        return f"{self.public_base_url}{MEDIA_ROUTE}/{object_key}"

    def ping(self) -> bool:
        return self.storage_dir.is_dir()


BlobStore = Union[S3BlobStore, LocalBlobStore]


def init_blob_store(settings: Settings) -> BlobStore:
    """Initialize media storage for the configured deployment mode."""
    if settings.uses_s3:
        client_kwargs = {"region_name": settings.aws_region}
        if settings.aws_access_key_id:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
        if settings.aws_secret_access_key:
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        s3_client = boto3.client("s3", **client_kwargs)
        logger.info(f"Using S3 bucket: {settings.s3_bucket_name}")
        return S3BlobStore(
            bucket_name=settings.s3_bucket_name,
            s3_client=s3_client,
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
            public_base_url=settings.media_base_url,
        )

    logger.info(f"Storing uploads locally in {settings.storage_dir}")
    return LocalBlobStore(settings.storage_dir, settings.public_base_url)
