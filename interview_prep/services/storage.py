"""Profile image storage: S3 when a bucket is configured, local disk otherwise."""

import logging
import os
import re
import time
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from interview_prep.config import (
    AWS_ACCESS_KEY_ID,
    AWS_REGION,
    AWS_S3_BUCKET_NAME,
    AWS_SECRET_ACCESS_KEY,
    BACKEND_URL,
)

logger = logging.getLogger(__name__)

UPLOADS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "uploads"))


class StorageError(RuntimeError):
    pass


def build_object_name(filename: str) -> str:
    """``<epoch-millis>-<sanitized original name>``"""
    base = os.path.basename(filename or "") or "image"
    safe = re.sub(r"[^A-Za-z0-9._-]+", "-", base).strip("-") or "image"
    return f"{int(time.time() * 1000)}-{safe}"


class LocalImageStorage:
    def __init__(self, directory: str = UPLOADS_DIR, base_url: str = BACKEND_URL):
        self.directory = directory
        self.base_url = base_url.rstrip("/")

    def save(self, filename: str, content: bytes, content_type: str) -> str:
        os.makedirs(self.directory, exist_ok=True)
        name = build_object_name(filename)
        try:
            with open(os.path.join(self.directory, name), "wb") as output_file:
                output_file.write(content)
        except OSError as e:
            raise StorageError(f"Could not save image: {e}") from e
        return f"{self.base_url}/uploads/{name}"


class S3ImageStorage:
    def __init__(self, bucket: str, region: str, access_key_id: str = "", secret_access_key: str = ""):
        self.bucket = bucket
        self.region = region
        self.client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
        )

    def save(self, filename: str, content: bytes, content_type: str) -> str:
        key = f"uploads/{build_object_name(filename)}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 upload failed for %s: %s", key, e)
            raise StorageError(f"Could not upload image: {e}") from e
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


@lru_cache
def get_image_storage():
    if AWS_S3_BUCKET_NAME:
        return S3ImageStorage(
            bucket=AWS_S3_BUCKET_NAME,
            region=AWS_REGION,
            access_key_id=AWS_ACCESS_KEY_ID,
            secret_access_key=AWS_SECRET_ACCESS_KEY,
        )
    return LocalImageStorage()
