from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import boto3
from botocore.client import BaseClient

from lightrail.app.ports.output import ISnapshotStore

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = BaseClient  # type: ignore[misc,assignment]


@dataclass(slots=True)
class S3SnapshotStore(ISnapshotStore):
    """Uploads the latest raw feed payload to a fixed S3 key.

    `endpoint_url` points boto3 at LocalStack or another S3-compatible store.
    """

    bucket: str
    key: str = "feeds/lightrail.pb"
    region: str = "ap-southeast-2"
    endpoint_url: str | None = None
    client: Any = field(default=None, repr=False)

    def _client(self) -> S3Client:
        if self.client is None:
            session = boto3.session.Session(region_name=self.region)
            self.client = session.client("s3", endpoint_url=self.endpoint_url)
        return self.client

    def save(self, raw: bytes) -> None:
        self._client().put_object(
            Bucket=self.bucket,
            Key=self.key,
            Body=raw,
            ContentType="application/octet-stream",
        )
