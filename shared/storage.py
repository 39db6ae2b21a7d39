"""
Shared S3/MinIO storage utilities.
"""
import logging
import os
import uuid
from typing import BinaryIO

from django.conf import settings

logger = logging.getLogger(__name__)


class S3Storage:
    """S3/MinIO storage utility class."""

    def __init__(self, bucket_name: str = None):
        self.bucket_name = bucket_name or settings.AWS_STORAGE_BUCKET_NAME
        self._client = None

    @property
    def client(self):
        """Lazy load S3 client."""
        if self._client is None:
            import boto3
            self._client = boto3.client(
                's3',
                endpoint_url=settings.AWS_S3_ENDPOINT_URL,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=settings.AWS_S3_REGION_NAME,
            )
        return self._client

    def upload_file(self, file_obj: BinaryIO, key: str, content_type: str = None) -> str:
        """Upload file to S3 and return the key."""
        extra_args = {'ContentType': content_type} if content_type else {}
        self.client.upload_fileobj(file_obj, self.bucket_name, key, ExtraArgs=extra_args)
        logger.info(f"Uploaded {key} to bucket {self.bucket_name}")
        return key

    def upload_payment_proof(self, uploaded_file, user_id) -> str:
        """Store a pay-now payment screenshot and return its object key."""
        _, ext = os.path.splitext(getattr(uploaded_file, 'name', '') or '')
        key = f"{settings.PAYMENT_PROOF_PREFIX}/{user_id}/{uuid.uuid4().hex}{ext.lower()}"
        return self.upload_file(
            uploaded_file,
            key,
            content_type=getattr(uploaded_file, 'content_type', None),
        )


# Default storage instance
default_storage = S3Storage()
