import json
import logging
from datetime import datetime
from typing import Mapping, Any

import boto3

logger = logging.getLogger(__name__)


def get_s3_client():
    """Create S3 client."""
    return boto3.client("s3")


def build_s3_key(prefix: str, timestamp: datetime, filename: str) -> str:
    """Build a partitioned S3 key path."""
    return (
        f"{prefix}/"
        f"year={timestamp.year:04d}/"
        f"month={timestamp.month:02d}/"
        f"day={timestamp.day:02d}/"
        f"{filename}"
    )


def upload_json_to_s3(
    record: Mapping[str, Any],
    bucket: str,
    key: str,
    s3=None,
) -> None:
    """Upload a single in-memory record to S3 as a JSON object."""
    body = json.dumps(record, default=str, ensure_ascii=False)

    s3 = s3 or get_s3_client()
    s3.put_object(
        Bucket=bucket,
        Key=key,
        Body=body.encode("utf-8"),
        ContentType="application/json",
    )
