from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from emojistore.domain.exceptions import NotFound, UpstreamFailure
from emojistore.domain.keys import serve_extension
from emojistore.infrastructure.settings import Settings

_MISSING_CODES = {"404", "NoSuchKey", "NoSuchBucket", "NotFound"}


@dataclass(frozen=True)
class S3StoreConfig:
    endpoint: Optional[str]
    region: str
    access_key: Optional[str]
    secret_key: Optional[str]
    use_ssl: bool = False
    force_path_style: bool = True


def _error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


class S3BlobStore:
    """Blob store over S3-compatible buckets, one bucket per rendition size."""

    def __init__(self, cfg: S3StoreConfig, client: Any = None) -> None:
        self.cfg = cfg
        if client is None:
            s3_cfg = Config(s3={"addressing_style": "path"} if cfg.force_path_style else {})
            client = boto3.client(
                "s3",
                endpoint_url=cfg.endpoint,
                aws_access_key_id=cfg.access_key,
                aws_secret_access_key=cfg.secret_key,
                region_name=cfg.region,
                use_ssl=cfg.use_ssl,
                config=s3_cfg,
            )
        self.client = client

    def put(self, bucket: str, filename: str, data: bytes) -> None:
        extension = filename.rpartition(".")[2]
        try:
            self.client.put_object(
                Bucket=bucket,
                Key=filename,
                Body=data,
                ContentType=f"image/{serve_extension(extension)}",
            )
        except (ClientError, BotoCoreError) as e:
            raise UpstreamFailure(f"Upload of {bucket}/{filename} failed: {e}") from e
        logger.debug(f"Uploaded {len(data)} bytes to s3://{bucket}/{filename}")

    def get(self, bucket: str, filename: str) -> bytes:
        try:
            resp = self.client.get_object(Bucket=bucket, Key=filename)
            return resp["Body"].read()
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                raise NotFound(f"{bucket}/{filename} not found") from e
            raise UpstreamFailure(f"Download of {bucket}/{filename} failed: {e}") from e
        except BotoCoreError as e:
            raise UpstreamFailure(f"Download of {bucket}/{filename} failed: {e}") from e

    def delete(self, bucket: str, filename: str) -> None:
        # S3 reports success for missing keys; some compatible stores do not.
        try:
            self.client.delete_object(Bucket=bucket, Key=filename)
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                return
            raise UpstreamFailure(f"Delete of {bucket}/{filename} failed: {e}") from e
        except BotoCoreError as e:
            raise UpstreamFailure(f"Delete of {bucket}/{filename} failed: {e}") from e
        logger.debug(f"Deleted s3://{bucket}/{filename}")

    def list(self, bucket: str, prefix: str = "") -> Iterator[str]:
        """Lazily yield object keys; each call starts a fresh listing."""
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    yield obj["Key"]
        except (ClientError, BotoCoreError) as e:
            raise UpstreamFailure(f"Listing of {bucket} failed: {e}") from e

    def ensure_buckets(self, buckets: Iterable[str]) -> None:
        """Create buckets that don't exist yet."""
        for bucket in buckets:
            try:
                self.client.head_bucket(Bucket=bucket)
                continue
            except ClientError as e:
                if _error_code(e) not in _MISSING_CODES:
                    raise UpstreamFailure(f"Bucket check for {bucket} failed: {e}") from e
            except BotoCoreError as e:
                raise UpstreamFailure(f"Bucket check for {bucket} failed: {e}") from e

            logger.info(f"Creating bucket {bucket}")
            try:
                self.client.create_bucket(Bucket=bucket)
            except (ClientError, BotoCoreError) as e:
                raise UpstreamFailure(f"Creating bucket {bucket} failed: {e}") from e

    def health_check(self, buckets: Iterable[str]) -> dict[str, Any]:
        """Check that every configured bucket is reachable."""
        try:
            for bucket in buckets:
                self.client.head_bucket(Bucket=bucket)
            return {"status": "healthy", "endpoint": self.cfg.endpoint}
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 health check failed: {e}")
            return {"status": "unhealthy", "endpoint": self.cfg.endpoint, "error": str(e)}


def s3_store_from_settings(settings: Settings) -> S3BlobStore:
    secret = settings.s3_secret_key.get_secret_value() if settings.s3_secret_key else None
    cfg = S3StoreConfig(
        endpoint=settings.s3_endpoint,
        region=settings.s3_region,
        access_key=settings.s3_access_key,
        secret_key=secret,
        use_ssl=settings.s3_use_ssl,
        force_path_style=settings.s3_force_path_style,
    )
    return S3BlobStore(cfg)
