# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# [2014] - [2025] MinIO, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Records of S3 request and response XML documents.

XML records are registered with :mod:`s3core.xml`; the decorator table is
their complete wire mapping. :class:`ObjectStat` is built from response
headers instead.
"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from urllib3._collections import HTTPHeaderDict

from .time import from_http_header, to_utc
from .xml import REPEATED, REQUIRED, Field, schema

GOVERNANCE = "GOVERNANCE"
COMPLIANCE = "COMPLIANCE"
ON = "ON"
OFF = "OFF"
ENABLED = "Enabled"
SUSPENDED = "Suspended"
DISABLED = "Disabled"

_MAX_OBJECT_TAG_COUNT = 10


def _set_utc(record, name: str):
    """Store datetime attribute of frozen record as timezone-aware UTC."""
    value = getattr(record, name)
    if value is not None and not isinstance(value, datetime):
        raise ValueError(f"{name} must be datetime type")
    object.__setattr__(record, name, to_utc(value))


@schema(
    "Owner",
    Field("id", "ID"),
    Field("display_name", "DisplayName"),
)
@dataclass(frozen=True)
class Owner:
    """Owner of bucket or object."""
    id: Optional[str] = None  # pylint: disable=invalid-name
    display_name: Optional[str] = None


@schema(
    "Initiator",
    Field("id", "ID"),
    Field("display_name", "DisplayName"),
)
@dataclass(frozen=True)
class Initiator:
    """Initiator of multipart upload."""
    id: Optional[str] = None  # pylint: disable=invalid-name
    display_name: Optional[str] = None


@schema(
    "Bucket",
    Field("name", "Name", cardinality=REQUIRED),
    Field("creation_date", "CreationDate", datetime),
)
@dataclass(frozen=True)
class Bucket:
    """Bucket information."""
    name: str
    creation_date: Optional[datetime] = None

    def __post_init__(self):
        _set_utc(self, "creation_date")


@schema(
    "ListAllMyBucketsResult",
    Field("buckets", "Bucket", Bucket, REPEATED, wrapper="Buckets"),
    Field("owner", "Owner", Owner, REQUIRED),
)
@dataclass(frozen=True)
class ListAllMyBucketsResult:
    """ListBuckets API result."""
    owner: Owner
    buckets: list[Bucket] = field(default_factory=list)


@schema(
    "CommonPrefix",
    Field("prefix", "Prefix", cardinality=REQUIRED),
)
@dataclass(frozen=True)
class CommonPrefix:
    """Common prefix of listed keys."""
    prefix: str


@schema(
    "Object",
    Field("key", "Key", cardinality=REQUIRED),
    Field("last_modified", "LastModified", datetime),
    Field("etag", "ETag"),
    Field("size", "Size", int),
    Field("storage_class", "StorageClass"),
    Field("owner", "Owner", Owner),
    Field("checksum_algorithm", "ChecksumAlgorithm"),
)
@dataclass(frozen=True)
class Object:
    """Object information in listing."""
    key: str
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    size: Optional[int] = None
    storage_class: Optional[str] = None
    owner: Optional[Owner] = None
    checksum_algorithm: Optional[str] = None

    def __post_init__(self):
        _set_utc(self, "last_modified")

    @property
    def is_dir(self) -> bool:
        """Check whether object is a directory marker."""
        return self.key.endswith("/")


@schema(
    "ListBucketResult",
    Field("name", "Name", cardinality=REQUIRED),
    Field("prefix", "Prefix"),
    Field("key_count", "KeyCount", int),
    Field("max_keys", "MaxKeys", int),
    Field("delimiter", "Delimiter"),
    Field("is_truncated", "IsTruncated", bool),
    Field("start_after", "StartAfter"),
    Field("contents", "Contents", Object, REPEATED),
    Field("common_prefixes", "CommonPrefixes", CommonPrefix, REPEATED),
    Field("continuation_token", "ContinuationToken"),
    Field("next_continuation_token", "NextContinuationToken"),
    Field("encoding_type", "EncodingType"),
)
@dataclass(frozen=True)
class ListBucketResult:  # pylint: disable=too-many-instance-attributes
    """ListObjectsV2 API result."""
    name: str
    prefix: Optional[str] = None
    key_count: Optional[int] = None
    max_keys: Optional[int] = None
    delimiter: Optional[str] = None
    is_truncated: Optional[bool] = None
    start_after: Optional[str] = None
    contents: list[Object] = field(default_factory=list)
    common_prefixes: list[CommonPrefix] = field(default_factory=list)
    continuation_token: Optional[str] = None
    next_continuation_token: Optional[str] = None
    encoding_type: Optional[str] = None


@schema(
    "Part",
    Field("part_number", "PartNumber", int, REQUIRED),
    Field("etag", "ETag", cardinality=REQUIRED),
    Field("last_modified", "LastModified", datetime),
    Field("size", "Size", int),
)
@dataclass(frozen=True)
class Part:
    """Part information of multipart upload."""
    part_number: int
    etag: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None

    def __post_init__(self):
        _set_utc(self, "last_modified")


@schema(
    "CompleteMultipartUpload",
    Field("parts", "Part", Part, REPEATED),
)
@dataclass(frozen=True)
class CompleteMultipartUpload:
    """CompleteMultipartUpload API request; parts ordered by part number."""
    parts: list[Part] = field(default_factory=list)

    def __post_init__(self):
        numbers = [part.part_number for part in self.parts]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError(
                "part numbers must be contiguous and ascending from 1",
            )


@schema(
    "CompleteMultipartUploadResult",
    Field("location", "Location"),
    Field("bucket", "Bucket", cardinality=REQUIRED),
    Field("key", "Key", cardinality=REQUIRED),
    Field("etag", "ETag", cardinality=REQUIRED),
)
@dataclass(frozen=True)
class CompleteMultipartUploadResult:
    """CompleteMultipartUpload API result."""
    bucket: str
    key: str
    etag: str
    location: Optional[str] = None


@schema(
    "InitiateMultipartUploadResult",
    Field("bucket", "Bucket", cardinality=REQUIRED),
    Field("key", "Key", cardinality=REQUIRED),
    Field("upload_id", "UploadId", cardinality=REQUIRED),
)
@dataclass(frozen=True)
class InitiateMultipartUploadResult:
    """CreateMultipartUpload API result."""
    bucket: str
    key: str
    upload_id: str


@schema(
    "CopyObjectResult",
    Field("etag", "ETag", cardinality=REQUIRED),
    Field("last_modified", "LastModified", datetime),
)
@dataclass(frozen=True)
class CopyObjectResult:
    """CopyObject API result."""
    etag: str
    last_modified: Optional[datetime] = None

    def __post_init__(self):
        _set_utc(self, "last_modified")


@schema(
    "Upload",
    Field("key", "Key", cardinality=REQUIRED),
    Field("upload_id", "UploadId", cardinality=REQUIRED),
    Field("initiator", "Initiator", Initiator),
    Field("owner", "Owner", Owner),
    Field("storage_class", "StorageClass"),
    Field("initiated", "Initiated", datetime),
    Field("checksum_algorithm", "ChecksumAlgorithm"),
)
@dataclass(frozen=True)
class MultipartUpload:
    """Incomplete multipart upload information."""
    key: str
    upload_id: str
    initiator: Optional[Initiator] = None
    owner: Optional[Owner] = None
    storage_class: Optional[str] = None
    initiated: Optional[datetime] = None
    checksum_algorithm: Optional[str] = None

    def __post_init__(self):
        _set_utc(self, "initiated")


@schema(
    "ListMultipartUploadsResult",
    Field("bucket", "Bucket", cardinality=REQUIRED),
    Field("key_marker", "KeyMarker"),
    Field("upload_id_marker", "UploadIdMarker"),
    Field("next_key_marker", "NextKeyMarker"),
    Field("next_upload_id_marker", "NextUploadIdMarker"),
    Field("prefix", "Prefix"),
    Field("delimiter", "Delimiter"),
    Field("max_uploads", "MaxUploads", int),
    Field("is_truncated", "IsTruncated", bool),
    Field("uploads", "Upload", MultipartUpload, REPEATED),
    Field("common_prefixes", "CommonPrefixes", CommonPrefix, REPEATED),
    Field("encoding_type", "EncodingType"),
)
@dataclass(frozen=True)
# pylint: disable=too-many-instance-attributes
class ListMultipartUploadsResult:
    """ListMultipartUploads API result."""
    bucket: str
    key_marker: Optional[str] = None
    upload_id_marker: Optional[str] = None
    next_key_marker: Optional[str] = None
    next_upload_id_marker: Optional[str] = None
    prefix: Optional[str] = None
    delimiter: Optional[str] = None
    max_uploads: Optional[int] = None
    is_truncated: Optional[bool] = None
    uploads: list[MultipartUpload] = field(default_factory=list)
    common_prefixes: list[CommonPrefix] = field(default_factory=list)
    encoding_type: Optional[str] = None


@schema(
    "ListPartsResult",
    Field("bucket", "Bucket", cardinality=REQUIRED),
    Field("key", "Key", cardinality=REQUIRED),
    Field("upload_id", "UploadId", cardinality=REQUIRED),
    Field("initiator", "Initiator", Initiator),
    Field("owner", "Owner", Owner),
    Field("storage_class", "StorageClass"),
    Field("part_number_marker", "PartNumberMarker", int),
    Field("next_part_number_marker", "NextPartNumberMarker", int),
    Field("max_parts", "MaxParts", int),
    Field("is_truncated", "IsTruncated", bool),
    Field("parts", "Part", Part, REPEATED),
)
@dataclass(frozen=True)
class ListPartsResult:  # pylint: disable=too-many-instance-attributes
    """ListParts API result."""
    bucket: str
    key: str
    upload_id: str
    initiator: Optional[Initiator] = None
    owner: Optional[Owner] = None
    storage_class: Optional[str] = None
    part_number_marker: Optional[int] = None
    next_part_number_marker: Optional[int] = None
    max_parts: Optional[int] = None
    is_truncated: Optional[bool] = None
    parts: list[Part] = field(default_factory=list)


@schema(
    "Retention",
    Field("mode", "Mode", cardinality=REQUIRED),
    Field("retain_until_date", "RetainUntilDate", datetime, REQUIRED),
)
@dataclass(frozen=True)
class Retention:
    """Object retention configuration."""

    mode: str
    retain_until_date: datetime

    def __post_init__(self):
        if self.mode not in [GOVERNANCE, COMPLIANCE]:
            raise ValueError(f"mode must be {GOVERNANCE} or {COMPLIANCE}")
        if not isinstance(self.retain_until_date, datetime):
            raise ValueError(
                "retain until date must be datetime type",
            )
        _set_utc(self, "retain_until_date")


@schema(
    "LegalHold",
    Field("status", "Status", cardinality=REQUIRED),
)
@dataclass(frozen=True)
class LegalHold:
    """Object legal hold configuration."""

    status: str = OFF

    def __post_init__(self):
        if self.status not in [ON, OFF]:
            raise ValueError(f"status must be {ON} or {OFF}")

    @property
    def enabled(self) -> bool:
        """Check whether legal hold is on."""
        return self.status == ON


@schema(
    "Tag",
    Field("key", "Key", cardinality=REQUIRED),
    Field("value", "Value", cardinality=REQUIRED),
)
@dataclass(frozen=True)
class Tag:
    """Key/value pair of a tag set."""
    key: str
    value: str


@schema(
    "Tagging",
    Field("tags", "Tag", Tag, REPEATED, wrapper="TagSet"),
)
@dataclass(frozen=True)
class Tagging:
    """Object tagging configuration."""
    tags: list[Tag] = field(default_factory=list)

    def __post_init__(self):
        if len(self.tags) > _MAX_OBJECT_TAG_COUNT:
            raise ValueError(
                f"too many tags; allowed = {_MAX_OBJECT_TAG_COUNT}, "
                f"found = {len(self.tags)}"
            )
        keys = [tag.key for tag in self.tags]
        if len(set(keys)) != len(keys):
            raise ValueError("tag keys must be unique")

    @classmethod
    def fromdict(cls, tags: dict[str, str]) -> Tagging:
        """Create tagging from key/value dictionary."""
        return cls([Tag(key, value) for key, value in tags.items()])

    def todict(self) -> dict[str, str]:
        """Convert tags to key/value dictionary."""
        return {tag.key: tag.value for tag in self.tags}


@schema(
    "VersioningConfiguration",
    Field("status", "Status"),
    Field("mfa_delete", "MfaDelete"),
)
@dataclass(frozen=True)
class VersioningConfiguration:
    """Bucket versioning configuration."""
    status: Optional[str] = None
    mfa_delete: Optional[str] = None

    def __post_init__(self):
        if self.status is not None and self.status not in [
                ENABLED, SUSPENDED,
        ]:
            raise ValueError(f"status must be {ENABLED} or {SUSPENDED}")
        if self.mfa_delete is not None and self.mfa_delete not in [
                ENABLED, DISABLED,
        ]:
            raise ValueError(f"MFA delete must be {ENABLED} or {DISABLED}")


@schema(
    "Error",
    Field("code", "Code"),
    Field("message", "Message"),
    Field("resource", "Resource"),
    Field("request_id", "RequestId"),
    Field("host_id", "HostId"),
    Field("bucket_name", "BucketName"),
    Field("key", "Key"),
)
@dataclass(frozen=True)
class ErrorResponse:
    """S3 error response document."""
    code: Optional[str] = None
    message: Optional[str] = None
    resource: Optional[str] = None
    request_id: Optional[str] = None
    host_id: Optional[str] = None
    bucket_name: Optional[str] = None
    key: Optional[str] = None


@schema(
    "CreateBucketConfiguration",
    Field("location_constraint", "LocationConstraint"),
)
@dataclass(frozen=True)
class CreateBucketConfiguration:
    """CreateBucket API request."""
    location_constraint: Optional[str] = None


@dataclass(frozen=True)
class ObjectStat:  # pylint: disable=too-many-instance-attributes
    """Object information from HeadObject API response headers."""
    bucket_name: str
    object_name: str
    size: int
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None
    version_id: Optional[str] = None
    metadata: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)

    @classmethod
    def new(
            cls,
            headers: HTTPHeaderDict,
            bucket_name: str,
            object_name: str,
    ) -> ObjectStat:
        """Create new object with values from HEAD response headers."""
        value = headers.get("last-modified")
        return cls(
            bucket_name,
            object_name,
            int(headers.get("content-length", "0")),
            etag=headers.get("etag", "").replace('"', "") or None,
            last_modified=from_http_header(value) if value else None,
            content_type=headers.get("content-type"),
            version_id=headers.get("x-amz-version-id"),
            metadata=headers,
        )
