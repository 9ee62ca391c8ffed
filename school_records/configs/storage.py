import io

import urllib3
from minio import Minio, S3Error

from school_records.configs import settings
from school_records.errors import StorageError

endpoint = f"{settings.STORAGE_ENDPOINT}"

client = Minio(
            endpoint,
            access_key=settings.STORAGE_ACCESS_KEY,
            secret_key=settings.STORAGE_SECRET_KEY,
            secure=settings.STORAGE_SECURE,
            http_client=urllib3.PoolManager(
                timeout=urllib3.Timeout(connect=settings.STORAGE_TIMEOUT_SECONDS,
                                        read=settings.STORAGE_TIMEOUT_SECONDS),
                retries=urllib3.Retry(total=2, backoff_factor=0.2, status_forcelist=[500, 502, 503, 504]),
            ),
        )

def upload_file(bucket: str, object_name: str, data: bytes, content_type: str = "application/octet-stream") -> None:
    try:
        client.put_object(bucket, object_name, io.BytesIO(data), length=len(data), content_type=content_type)
    except (S3Error, urllib3.exceptions.HTTPError) as e:
        raise StorageError(f"MinIO upload error: {str(e)}") from e

def public_url(bucket: str, object_name: str) -> str:
    base = settings.STORAGE_PUBLIC_URL
    if not base:
        scheme = "https" if settings.STORAGE_SECURE else "http"
        base = f"{scheme}://{endpoint}"
    return f"{base.rstrip('/')}/{bucket}/{object_name}"
