# zeromarket/domain/storage.py
import os
from dataclasses import dataclass, field
from typing import Any

import boto3

from ..core.config import Settings


# ---------------------------------------------------------
# Base class
# ---------------------------------------------------------
class BlobStore:
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under key and return the key."""
        raise NotImplementedError

    def delete(self, key: str) -> None:
        """Remove the object at key. Missing objects are not an error."""
        raise NotImplementedError


# ---------------------------------------------------------
# Local filesystem implementation
# ---------------------------------------------------------
@dataclass
class LocalBlobStore(BlobStore):
    root: str

    def _path(self, key: str) -> str:
        root = os.path.realpath(self.root)
        path = os.path.realpath(os.path.join(root, *key.split("/")))
        if os.path.commonpath([root, path]) != root or path == root:
            raise ValueError(f"Blob key escapes storage root: {key}")
        return path

    def put(self, key: str, data: bytes, content_type: str) -> str:
        dst = self._path(key)
        os.makedirs(os.path.dirname(dst), exist_ok=True)
        with open(dst, "wb") as f:
            f.write(data)
        return key

    def delete(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass


# ---------------------------------------------------------
# S3 / R2 implementation
# ---------------------------------------------------------
@dataclass
class S3BlobStore(BlobStore):
    bucket: str
    region: str | None = None
    endpoint_url: str | None = None
    client: Any = field(default=None, repr=False)

    def __post_init__(self):
        if self.client is None:
            self.client = boto3.client(
                "s3",
                region_name=self.region,
                endpoint_url=self.endpoint_url or None,
            )

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        return key

    def delete(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)


# ---------------------------------------------------------
# Factory
# ---------------------------------------------------------
def build_blob_store(s: Settings) -> BlobStore:
    """Return the blob store selected by STORAGE_BACKEND (local or s3)."""
    if s.STORAGE_BACKEND == "local":
        return LocalBlobStore(s.BLOB_ROOT)
    if s.STORAGE_BACKEND == "s3":
        if not s.S3_BUCKET:
            raise RuntimeError("S3 backend selected but S3_BUCKET is not set")
        return S3BlobStore(bucket=s.S3_BUCKET, region=s.AWS_REGION, endpoint_url=s.S3_ENDPOINT_URL)
    raise ValueError(f"Unknown STORAGE_BACKEND={s.STORAGE_BACKEND}")
