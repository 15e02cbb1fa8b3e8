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

"""Helper functions."""

from __future__ import absolute_import, annotations

import base64
import hashlib
import math
import platform
import re
import urllib.parse
from dataclasses import dataclass
from datetime import datetime
from queue import Queue
from threading import BoundedSemaphore, Thread
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from typing_extensions import Protocol
from urllib3._collections import HTTPHeaderDict

from . import __title__, __version__

_DEFAULT_USER_AGENT = (
    f"s3core ({platform.system()}; {platform.machine()}) "
    f"{__title__}/{__version__}"
)

MAX_MULTIPART_COUNT = 10000  # 10000 parts
MAX_MULTIPART_OBJECT_SIZE = 5 * 1024 * 1024 * 1024 * 1024  # 5TiB
MAX_PART_SIZE = 5 * 1024 * 1024 * 1024  # 5GiB
MIN_PART_SIZE = 5 * 1024 * 1024  # 5MiB
DEFAULT_PART_SIZE = 8 * 1024 * 1024  # 8MiB

# SHA-256 of empty payload.
EMPTY_SHA256 = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)

_BUCKET_NAME_REGEX = re.compile(r'^[a-z0-9][a-z0-9\.\-]{1,61}[a-z0-9]$')
_IPV4_REGEX = re.compile(
    r'^((25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])\.){3}'
    r'(25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])$')
_REGION_REGEX = re.compile(r'^((?!_)(?!-)[a-z_\d-]{1,63}(?<!-)(?<!_))$',
                           re.IGNORECASE)
_REDACTIONS = (
    (re.compile(r"Credential=[^/]+"), "Credential=*REDACTED*"),
    (re.compile(r"Signature=[0-9a-f]+"), "Signature=*REDACTED*"),
)

DictType = Dict[str, Union[str, List[str], Tuple[str]]]


class ReaderType(Protocol):
    """typing stub for readable byte stream."""

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes."""


def quote(
        resource: str | bytes,
        safe: str = "/",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """
    Percent-encode resource keeping RFC 3986 unreserved characters and
    characters in safe as is.
    """
    return urllib.parse.quote(
        resource,
        safe=safe,
        encoding=encoding,
        errors=errors,
    ).replace("%7E", "~")


def queryencode(
        query: str | bytes,
        safe: str = "",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """Encode query parameter key or value."""
    return quote(query, safe, encoding, errors)


def encode_query_params(query_params: DictType | None) -> str:
    """
    Encode query parameters sorted by encoded key then by encoded value.
    """
    pairs = []
    for key, values in (query_params or {}).items():
        values = values if isinstance(values, (list, tuple)) else [values]
        pairs += [(queryencode(key), queryencode(value)) for value in values]
    return "&".join(f"{key}={value}" for key, value in sorted(pairs))


def _redact(value: str) -> str:
    """Mask access key and signature in Authorization header value."""
    for pattern, replacement in _REDACTIONS:
        value = pattern.sub(replacement, value)
    return value


def headers_to_strings(
        headers: Mapping[str, str | list[str] | tuple[str]],
        titled_key: bool = False,
) -> str:
    """
    Render headers one per line. With titled_key, names are title-cased and
    credentials are redacted; request headers are traced this way.
    """
    lines = []
    for key, value in headers.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        if titled_key:
            key = key.title()
            values = [_redact(item) for item in values]
        lines += [f"{key}: {item}" for item in values]
    return "\n".join(lines)


def normalize_headers(headers: DictType | None) -> DictType:
    """Normalize headers by prefixing 'X-Amz-Meta-' for user metadata."""
    def is_user_metadata(key: str) -> bool:
        key = key.lower()
        return not (
            key.startswith("x-amz-") or
            key in [
                "cache-control",
                "content-encoding",
                "content-type",
                "content-disposition",
                "content-language",
                "expires",
            ]
        )

    normalized: DictType = {}
    for key, value in (headers or {}).items():
        key = str(key)
        normalized["X-Amz-Meta-" + key if is_user_metadata(key) else key] = (
            value
        )
    return normalized


def check_part_size(part_size: int):
    """Check part size is within S3 multipart limits."""
    if part_size < MIN_PART_SIZE:
        raise ValueError(
            f"part size {part_size} is not supported; minimum allowed 5MiB"
        )
    if part_size > MAX_PART_SIZE:
        raise ValueError(
            f"part size {part_size} is not supported; maximum allowed 5GiB"
        )


def get_part_info(object_size: int | None, part_size: int) -> tuple[int, int]:
    """
    Compute part size and part count for object size. Part count is -1 for
    unknown object size. Part size is raised above given part size if
    needed to keep part count within 10000.
    """
    check_part_size(part_size)

    if object_size is None:
        return part_size, -1

    if object_size < 0:
        raise ValueError(f"object size {object_size} must not be negative")

    if object_size > MAX_MULTIPART_OBJECT_SIZE:
        raise ValueError(
            f"object size {object_size} is not supported; "
            f"maximum allowed 5TiB"
        )

    optimal_size = math.ceil(
        math.ceil(object_size / MAX_MULTIPART_COUNT) / MIN_PART_SIZE,
    ) * MIN_PART_SIZE
    part_size = max(part_size, optimal_size)
    return part_size, max(math.ceil(object_size / part_size), 1)


class ChunkReader:
    """Readable adapter over an iterable of byte chunks."""

    def __init__(self, chunks: Iterable[bytes]):
        self._chunks = iter(chunks)
        self._buffer = bytearray()

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes; all remaining bytes if size is negative."""
        while size < 0 or len(self._buffer) < size:
            try:
                chunk = next(self._chunks)
            except StopIteration:
                break
            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise ValueError("stream must produce bytes-like chunks")
            self._buffer += chunk

        if size < 0:
            size = len(self._buffer)
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data


def read_part_data(
        stream: ReaderType,
        size: int,
        part_data: bytes = b"",
) -> bytes:
    """Read part data of given size from stream."""
    size -= len(part_data)
    while size:
        data = stream.read(size)
        if not data:
            break  # EOF reached
        if not isinstance(data, bytes):
            raise ValueError("read() must return 'bytes' object")
        part_data += data
        size -= len(data)
    return part_data


def check_bucket_name(bucket_name: str):
    """Check whether bucket name is valid."""
    if not isinstance(bucket_name, str):
        raise TypeError("bucket name must be str type")

    if not _BUCKET_NAME_REGEX.match(bucket_name):
        raise ValueError(f"invalid bucket name {bucket_name}")
    if _IPV4_REGEX.match(bucket_name):
        raise ValueError(
            f"bucket name {bucket_name} must not look like IPv4 address",
        )
    if any(chars in bucket_name for chars in ("..", ".-", "-.")):
        raise ValueError(
            f"bucket name {bucket_name} must not contain '..', '.-' or '-.'",
        )


def check_object_name(object_name: str):
    """Check whether object name is valid."""
    if not isinstance(object_name, str):
        raise TypeError("object name must be str type")
    if not object_name:
        raise ValueError("object name must not be empty")


def check_region(region: str):
    """Check whether region is valid."""
    if not _REGION_REGEX.match(region):
        raise ValueError(f"invalid region {region}")


def md5sum_hash(data: str | bytes | None) -> str:
    """Compute MD5 of data and return hash as Base64 encoded value."""
    data = data or b""
    hasher = hashlib.md5()
    hasher.update(data.encode() if isinstance(data, str) else data)
    return base64.b64encode(hasher.digest()).decode()


def sha256_hash(data: str | bytes | None) -> str:
    """Compute SHA-256 of data and return hash as hex encoded value."""
    data = data or b""
    hasher = hashlib.sha256()
    hasher.update(data.encode() if isinstance(data, str) else data)
    return hasher.hexdigest()


def _parse_url(endpoint: str) -> urllib.parse.SplitResult:
    """
    Parse endpoint URL. Only scheme, host and port are allowed; the default
    port of the scheme is dropped from netloc.
    """
    url = urllib.parse.urlsplit(endpoint)
    scheme = url.scheme.lower()
    if scheme not in ("http", "https"):
        raise ValueError("scheme in endpoint must be http or https")
    if not url.hostname:
        raise ValueError("hostname in endpoint must not be empty")
    try:
        port = url.port
    except ValueError as exc:
        raise ValueError(f"invalid port in endpoint {endpoint}") from exc

    for name, value in (
            ("path", url.path.strip("/")),
            ("query", url.query),
            ("fragment", url.fragment),
            ("username", url.username),
            ("password", url.password),
    ):
        if value:
            raise ValueError(f"{name} in endpoint is not allowed")

    netloc = url.netloc
    if port == {"http": 80, "https": 443}[scheme]:
        netloc = netloc.rsplit(":", 1)[0]
    return urllib.parse.SplitResult(scheme, netloc, "", "", "")


class BaseURL:
    """Base URL of S3 endpoint; builds path-style request URLs."""
    _url: urllib.parse.SplitResult

    def __init__(self, endpoint: str):
        self._url = _parse_url(endpoint)

    @property
    def is_https(self) -> bool:
        """Check if scheme is HTTPS."""
        return self._url.scheme == "https"

    @property
    def host(self) -> str:
        """Get host with port if any."""
        return self._url.netloc

    def build(
            self,
            bucket_name: str | None = None,
            object_name: str | None = None,
            query_params: DictType | str | None = None,
    ) -> urllib.parse.SplitResult:
        """
        Build URL for given bucket, object and query parameters. Query
        parameters passed as str must already be encoded.
        """
        if not bucket_name and object_name:
            raise ValueError(
                f"empty bucket name for object name {object_name}",
            )

        path = "/"
        if bucket_name:
            path += bucket_name + "/"
            if object_name:
                path += quote(object_name)

        query = (
            query_params if isinstance(query_params, str)
            else encode_query_params(query_params)
        )
        return self._url._replace(path=path, query=query)


@dataclass(frozen=True)
class ObjectWriteResult:  # pylint: disable=too-many-instance-attributes
    """
    Result of object creation. ``part_count`` is the number of uploaded
    parts of multipart upload and zero for single PUT.
    """
    bucket_name: str
    object_name: str
    version_id: str | None
    etag: str | None
    http_headers: HTTPHeaderDict
    last_modified: datetime | None = None
    location: str | None = None
    part_count: int = 0

    @classmethod
    def new(
            cls,
            headers: HTTPHeaderDict,
            bucket_name: str,
            object_name: str,
    ) -> ObjectWriteResult:
        """Create new object with values from PUT response headers."""
        etag = headers.get("etag")
        return cls(
            bucket_name,
            object_name,
            headers.get("x-amz-version-id"),
            etag.replace('"', "") if etag else None,
            headers,
        )


class ThreadPool:
    """
    Fixed set of daemon threads running queued tasks. At most
    ``num_threads`` tasks are queued or running at once, so the producer
    calling :meth:`add_task` waits for free workers and memory held by
    pending part data stays bounded.
    """
    _num_threads: int
    _tasks: Queue
    _results: Queue
    _errors: Queue
    _slots: BoundedSemaphore

    def __init__(self, num_threads: int):
        self._num_threads = num_threads
        self._tasks = Queue()
        self._results = Queue()
        self._errors = Queue()
        self._slots = BoundedSemaphore(num_threads)

    def _run(self):
        for func, args, kwargs in iter(self._tasks.get, None):
            try:
                # Remaining tasks are skipped once any task failed.
                if self._errors.empty():
                    self._results.put(func(*args, **kwargs))
            except Exception as exc:  # pylint: disable=broad-except
                self._errors.put(exc)
            finally:
                self._slots.release()
                self._tasks.task_done()
        self._tasks.task_done()  # stop marker

    def start_parallel(self):
        """Start worker threads."""
        for _ in range(self._num_threads):
            Thread(target=self._run, daemon=True).start()

    def add_task(self, func, *args, **kwargs):
        """Queue a task; blocks while all workers are busy."""
        self._slots.acquire()  # pylint: disable=consider-using-with
        self._tasks.put((func, args, kwargs))

    def result(self) -> Queue:
        """
        Stop workers after queued tasks and return queue of task results.
        The first exception raised by any task is raised here.
        """
        for _ in range(self._num_threads):
            self._tasks.put(None)
        self._tasks.join()
        if not self._errors.empty():
            raise self._errors.get()
        return self._results
