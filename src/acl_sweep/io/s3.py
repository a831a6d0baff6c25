# acl_sweep/io/s3.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import boto3
from botocore.config import Config

from acl_sweep.errors import Cancelled
from acl_sweep.io.collection import ListPage

logger = logging.getLogger(__name__)

__all__ = ["S3Collection", "make_s3_client"]


def make_s3_client(
    *,
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    max_pool_connections: int = 10,
    connect_timeout: float = 10.0,
    read_timeout: float = 60.0,
):
    """
    Build a boto3 S3 client sized for ``max_pool_connections`` concurrent calls.

    Credentials come from boto3's default chain (env, profile, instance role).
    """
    kwargs: dict[str, Any] = {
        "config": Config(
            max_pool_connections=max_pool_connections,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={"mode": "standard"},
        )
    }
    if region:
        kwargs["region_name"] = region
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.client("s3", **kwargs)


@dataclass
class S3Collection:
    """
    Every object of one S3 bucket; the mutation sets a canned ACL.

    Keys are listed with ``EncodingType=url`` so that keys containing control
    characters survive the XML response; callers must decode them.
    """

    bucket: str
    canned_acl: str = "private"
    client: Any = field(default=None, repr=False)
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    max_pool_connections: int = 10

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = make_s3_client(
                region=self.region,
                endpoint_url=self.endpoint_url,
                max_pool_connections=self.max_pool_connections,
            )

    def list_page(self, after: Optional[str], limit: int) -> ListPage:
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "EncodingType": "url",
            "MaxKeys": limit,
        }
        if after:
            params["StartAfter"] = after
        resp = self.client.list_objects_v2(**params)
        raw_keys = [obj["Key"] for obj in resp.get("Contents", []) if obj.get("Key")]
        truncated = bool(resp.get("IsTruncated", False))
        logger.debug(
            "Listed %d keys from s3://%s after %r (truncated=%s)",
            len(raw_keys),
            self.bucket,
            after,
            truncated,
        )
        return ListPage(raw_keys=raw_keys, truncated=truncated)

    def mutate(
        self, key: str, cancel_event: Optional[threading.Event] = None
    ) -> None:
        # botocore calls cannot be interrupted; checking right before the call
        # plus the client timeouts bounds how long a cancelled worker lingers.
        if cancel_event is not None and cancel_event.is_set():
            raise Cancelled()
        self.client.put_object_acl(Bucket=self.bucket, Key=key, ACL=self.canned_acl)
