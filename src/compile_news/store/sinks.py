"""Destinations for persisted news article records."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from common.aws import build_s3_key, get_s3_client, upload_json_to_s3

logger = logging.getLogger(__name__)


class ArticleSink(Protocol):
    def store(self, record: dict) -> None:
        ...


class JsonlArticleSink:
    """Appends records to a local JSONL file, one line per record."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def for_run(cls, output_dir: str, prefix: str = "news_articles") -> "JsonlArticleSink":
        now = datetime.now(timezone.utc)
        filename = f"{prefix}_{now.strftime('%Y_%m_%d_%H_%M')}.jsonl"
        return cls(Path(output_dir) / filename)

    def store(self, record: dict) -> None:
        with self.path.open("a") as f:
            f.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")
        logger.debug("Saved record %s to %s", record.get("key"), self.path)


class S3ArticleSink:
    """Writes each record as its own JSON object under a date-partitioned prefix."""

    def __init__(self, bucket: str, prefix: str = "news_articles", s3: Any = None):
        self.bucket = bucket
        self.prefix = prefix
        self._s3 = s3

    @property
    def s3(self) -> Any:
        if self._s3 is None:
            self._s3 = get_s3_client()
        return self._s3

    def store(self, record: dict) -> None:
        now = datetime.now(timezone.utc)
        key = build_s3_key(self.prefix, now, f"{record['key']}.json")
        upload_json_to_s3(record, self.bucket, key, s3=self.s3)
        logger.debug("Uploaded record to s3://%s/%s", self.bucket, key)
