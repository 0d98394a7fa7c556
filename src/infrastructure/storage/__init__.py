"""Object store adapters.

- S3ObjectStore: boto3 (production, S3-compatible endpoints)
- InMemoryObjectStore: process-local dict (development, tests)
"""

from src.infrastructure.storage.in_memory_object_store import InMemoryObjectStore
from src.infrastructure.storage.s3_object_store import S3ObjectStore, build_s3_client

__all__ = [
    "InMemoryObjectStore",
    "S3ObjectStore",
    "build_s3_client",
]
