"""
S3 Multipart Upload Sink

Streams generated output to an S3 object using the multipart protocol:
1. Initiate: create_multipart_upload -> UploadId (fatal before data flows)
2. Accumulate batches in memory; every `part_size` bytes becomes one part
3. Complete with the (PartNumber, ETag) list, or abort on any failure

Aborting is best-effort: a failed abort is logged and left for the operator
to clean up through the S3 API.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..config import DEFAULT_PART_SIZE, StorageConfig
from ..exceptions import ConfigurationError, SinkError
from .base import Sink

logger = logging.getLogger(__name__)


def parse_location(location: str) -> Tuple[str, str]:
    """
    Split an output location of the form "<bucket>:<key>"

    Args:
        location: Location string

    Returns:
        Tuple of (bucket, key)
    """
    bucket, sep, key = location.partition(':')
    if not sep or not bucket or not key:
        raise ConfigurationError(
            f"output_file must follow the format bucket:path for s3 output, got '{location}'"
        )
    return bucket, key


def build_s3_client(config: StorageConfig):
    """Create an S3 client from storage settings"""
    boto_config = BotoConfig(
        signature_version="s3v4",
        retries={"max_attempts": config.max_attempts, "mode": "standard"},
    )

    kwargs: Dict[str, Any] = {
        "config": boto_config,
        "region_name": config.region,
    }
    if config.endpoint_url:
        kwargs["endpoint_url"] = config.endpoint_url

    logger.debug(f"Creating S3 client (region={config.region}, endpoint={config.endpoint_url})")
    return boto3.client("s3", **kwargs)


class MultipartUploadSink(Sink):
    """
    Multipart upload of the whole run to one S3 object

    Args:
        bucket: Destination bucket
        key: Destination object key
        client: S3 client; built from `storage` on open() when omitted
        part_size: Buffer size that triggers a part upload
        storage: Client settings used when no client is given
        logger: Optional logger
    """

    name = "s3"

    def __init__(
        self,
        bucket: str,
        key: str,
        client: Any = None,
        part_size: int = DEFAULT_PART_SIZE,
        storage: Optional[StorageConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(logger)
        self.bucket = bucket
        self.key = key
        self.client = client
        self.part_size = part_size
        self.storage = storage or StorageConfig()

        self.upload_id: Optional[str] = None
        self.completed_parts: List[Dict[str, Any]] = []
        self._buffer = bytearray()
        self._part_number = 1
        self._aborted = False

    def open(self):
        if self.client is None:
            self.client = build_s3_client(self.storage)

        self.logger.info(f"Initiating multipart S3 upload to s3://{self.bucket}/{self.key}")
        try:
            response = self.client.create_multipart_upload(Bucket=self.bucket, Key=self.key)
        except (BotoCoreError, ClientError) as e:
            raise SinkError(f"Failed to initiate multipart upload: {e}") from e

        self.logger.debug(f"{response}")
        upload_id = response.get("UploadId")
        if not upload_id:
            raise SinkError("No UploadId returned from S3!")
        self.upload_id = upload_id

    def write(self, batch: str):
        self._buffer.extend(batch.encode('utf-8'))
        if len(self._buffer) >= self.part_size:
            self._upload_part()

    def _upload_part(self):
        part_number = self._part_number
        body = bytes(self._buffer)
        self.logger.info(f"Writing part {part_number} to S3 ({len(body)} bytes)...")

        try:
            response = self.client.upload_part(
                Bucket=self.bucket,
                Key=self.key,
                UploadId=self.upload_id,
                PartNumber=part_number,
                Body=body,
            )
        except (BotoCoreError, ClientError) as e:
            raise SinkError(f"Upload of part {part_number} failed: {e}") from e

        self.logger.debug(f"{response}")
        e_tag = response.get("ETag")
        if e_tag is None:
            raise SinkError(f"No ETag returned for part {part_number}")

        self.completed_parts.append({"ETag": e_tag, "PartNumber": part_number})
        self._part_number += 1
        self._buffer.clear()

    def finalize(self):
        # The final partial buffer is flushed once; at least one part is required to complete
        if self._buffer or not self.completed_parts:
            self._upload_part()

        parts = sorted(self.completed_parts, key=lambda p: p["PartNumber"])
        self.logger.info(f"Completing multipart upload with {len(parts)} parts...")
        try:
            response = self.client.complete_multipart_upload(
                Bucket=self.bucket,
                Key=self.key,
                UploadId=self.upload_id,
                MultipartUpload={"Parts": parts},
            )
        except (BotoCoreError, ClientError) as e:
            raise SinkError(f"Failed to complete multipart upload: {e}") from e

        self.logger.debug(f"{response}")
        self.logger.info("Multipart upload completed.")

    def abort(self):
        if self.upload_id is None or self._aborted:
            return
        self._aborted = True
        self._buffer.clear()

        self.logger.info("Multipart upload failed, aborting...")
        try:
            response = self.client.abort_multipart_upload(
                Bucket=self.bucket,
                Key=self.key,
                UploadId=self.upload_id,
            )
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"{e}")
            self.logger.error(
                f"Failed to abort upload {self.upload_id}, please abort via S3 API."
            )
            return

        self.logger.debug(f"{response}")
        self.logger.info("Multipart upload aborted.")
