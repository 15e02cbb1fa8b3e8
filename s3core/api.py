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

# pylint: disable=too-many-arguments
# pylint: disable=too-many-branches
# pylint: disable=too-many-locals
# pylint: disable=too-many-public-methods
# pylint: disable=too-many-statements

"""
Simple Storage Service (aka S3) client with signed request execution and
streaming multipart upload.
"""

from __future__ import absolute_import, annotations

import io
import itertools
import logging
import os
from collections.abc import Iterable
from typing import Optional, TextIO, Union, cast
from urllib.parse import SplitResult, urlunsplit

import certifi
import urllib3
from urllib3 import Retry
from urllib3._collections import HTTPHeaderDict
from urllib3.exceptions import HTTPError
from urllib3.response import BaseHTTPResponse
from urllib3.util import Timeout

from . import time
from .config import DEFAULT_REGION, ClientConfig
from .credentials import StaticProvider
from .credentials.providers import Provider
from .datatypes import (OFF, ON, CompleteMultipartUpload,
                        CompleteMultipartUploadResult, CopyObjectResult,
                        CreateBucketConfiguration, ErrorResponse,
                        InitiateMultipartUploadResult, LegalHold,
                        ListAllMyBucketsResult, ListBucketResult,
                        ListMultipartUploadsResult, ObjectStat, Part,
                        Retention, Tagging, VersioningConfiguration)
from .error import (S3CoreException, S3Error, ServerError, TransportError,
                    XmlError)
from .helpers import (DEFAULT_PART_SIZE, MAX_PART_SIZE, BaseURL, ChunkReader,
                      DictType, ObjectWriteResult, ReaderType, ThreadPool,
                      check_bucket_name, check_object_name, get_part_info,
                      headers_to_strings, md5sum_hash, normalize_headers,
                      quote, read_part_data, sha256_hash)
from .signer import sign_v4_s3
from .xml import decode, encode

_LOGGER = logging.getLogger(__name__)

BodyType = Union[bytes, bytearray, ReaderType, Iterable[bytes]]


class Client:
    """
    Simple Storage Service (aka S3) client to perform bucket and object
    operations. Every operation sends its requests through :meth:`_execute`,
    the single signed round trip with error mapping.
    """
    _config: ClientConfig
    _base_url: BaseURL
    _user_agent: str
    _trace_stream: Optional[TextIO]
    _provider: Optional[Provider]
    _http: urllib3.PoolManager

    def __init__(
            self,
            endpoint: str,
            access_key: Optional[str] = None,
            secret_key: Optional[str] = None,
            session_token: Optional[str] = None,
            secure: bool = True,
            region: Optional[str] = None,
            http_client: Optional[urllib3.PoolManager] = None,
            credentials: Optional[Provider] = None,
            cert_check: bool = True,
            part_size: int = DEFAULT_PART_SIZE,
            multipart_threshold: Optional[int] = None,
            num_parallel_uploads: int = 3,
    ):
        """
        Initializes a new client object.

        Args:
            endpoint (str):
                Hostname of a S3 service.

            access_key (Optional[str], default=None):
                Access key (aka user ID) of your account in S3 service.

            secret_key (Optional[str], default=None):
                Secret Key (aka password) of your account in S3 service.

            session_token (Optional[str], default=None):
                Session token of your account in S3 service.

            secure (bool, default=True):
                Flag to indicate to use secure (TLS) connection to S3
                service or not.

            region (Optional[str], default=None):
                Region name used for request signing; "us-east-1" if not
                given.

            http_client (Optional[urllib3.PoolManager], default=None):
                Customized HTTP client.

            credentials (Optional[Provider], default=None):
                Credentials provider of your account in S3 service.

            cert_check (bool, default=True):
                Flag to enable/disable server certificate validation
                for HTTPS connections.

            part_size (int, default=8MiB):
                Part size of multipart upload.

            multipart_threshold (Optional[int], default=None):
                Largest body size sent in single PUT; defaults to part size.

            num_parallel_uploads (int, default=3):
                Number of parts uploaded in parallel.

        Notes:
            Client without access key and credentials provider sends
            anonymous (unsigned) requests. The client object is thread-safe.

        Example:
            >>> from s3core import Client
            >>>
            >>> # Create client with anonymous access
            >>> client = Client("play.min.io")
            >>>
            >>> # Create client with access and secret key
            >>> client = Client(
            ...     "s3.amazonaws.com",
            ...     access_key="ACCESS-KEY",
            ...     secret_key="SECRET-KEY",
            ... )
        """
        if access_key:
            if secret_key is None:
                raise ValueError("secret key must be provided with access key")
            credentials = StaticProvider(access_key, secret_key, session_token)
        elif secret_key:
            raise ValueError("access key must be provided with secret key")

        config = ClientConfig(
            endpoint=endpoint,
            secure=secure,
            region=region or DEFAULT_REGION,
            part_size=part_size,
            multipart_threshold=multipart_threshold,
            num_parallel_uploads=num_parallel_uploads,
            cert_check=cert_check,
        )
        self._configure(config, credentials, http_client)

    @classmethod
    def from_config(
            cls,
            config: ClientConfig,
            credentials: Optional[Provider] = None,
            http_client: Optional[urllib3.PoolManager] = None,
    ) -> Client:
        """Create client from prebuilt configuration."""
        if not isinstance(config, ClientConfig):
            raise TypeError("config must be ClientConfig type")
        client = cls.__new__(cls)
        client._configure(  # pylint: disable=protected-access
            config, credentials, http_client,
        )
        return client

    def _configure(
            self,
            config: ClientConfig,
            credentials: Optional[Provider],
            http_client: Optional[urllib3.PoolManager],
    ):
        """Set up client state from configuration."""
        # Validate http client has correct base class.
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )
        if credentials is not None and not isinstance(credentials, Provider):
            raise TypeError("credentials must be Provider type")

        self._config = config
        self._base_url = config.base_url
        self._user_agent = config.user_agent
        self._trace_stream = None
        self._provider = credentials

        # Load CA certificates from SSL_CERT_FILE file if set
        self._http = http_client or urllib3.PoolManager(
            timeout=Timeout(connect=config.timeout, read=config.timeout),
            maxsize=10,
            cert_reqs='CERT_REQUIRED' if config.cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
            retries=Retry(
                total=5,
                backoff_factor=0.2,
                status_forcelist=[500, 502, 503, 504]
            )
        )

    def __del__(self):
        if hasattr(self, "_http"):  # Only required for unit test run
            self._http.clear()

    @property
    def config(self) -> ClientConfig:
        """Get client configuration."""
        return self._config

    def set_app_info(self, app_name: str, app_version: str):
        """
        Set your application name and version to user agent header.

        Args:
            app_name (str):
                Application name.

            app_version (str):
                Application version.

        Example:
            >>> client.set_app_info("my_app", "1.0.2")
        """
        if not (app_name and app_version):
            raise ValueError("Application name/version cannot be empty.")
        self._user_agent = (
            f"{self._config.user_agent} {app_name}/{app_version}"
        )

    def trace_on(self, stream: TextIO):
        """
        Enable http trace.

        Args:
            stream (TextIO):
                Stream for writing HTTP call tracing.

        Example:
            >>> client.trace_on(sys.stdout)
        """
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        # Save new output stream.
        self._trace_stream = stream

    def trace_off(self):
        """Disable HTTP trace."""
        self._trace_stream = None

    def _s3_error(
            self,
            document: ErrorResponse,
            response: BaseHTTPResponse,
            resource: str,
            bucket_name: Optional[str],
            object_name: Optional[str],
    ) -> S3Error:
        """Build S3Error from decoded error document."""
        return S3Error(
            response.status,
            document.code,
            document.message,
            document.resource or resource,
            document.request_id or response.headers.get("x-amz-request-id"),
            document.host_id or response.headers.get("x-amz-id-2"),
            bucket_name=document.bucket_name or bucket_name,
            object_name=document.key or object_name,
            response=response,
        )

    def _response_error(
            self,
            method: str,
            url: SplitResult,
            response: BaseHTTPResponse,
            bucket_name: Optional[str],
            object_name: Optional[str],
    ) -> ServerError:
        """Build error of non-2xx response."""
        body = (
            response.data.decode(errors="replace") if response.data else None
        )
        if body and method != "HEAD":
            try:
                document = decode(body, ErrorResponse)
            except XmlError as exc:
                _LOGGER.debug("undecodable error response; %s", exc)
                return ServerError(
                    f"server failed with HTTP status code {response.status}",
                    response.status,
                    response=response,
                    body=body,
                )
            return self._s3_error(
                document, response, url.path, bucket_name, object_name,
            )

        region = response.headers.get("x-amz-bucket-region")
        error_map = {
            301: lambda: ("PermanentRedirect", "Moved Permanently"),
            307: lambda: ("Redirect", "Temporary redirect"),
            400: lambda: ("BadRequest", "Bad request"),
            403: lambda: ("AccessDenied", "Access denied"),
            404: lambda: (
                ("NoSuchKey", "Object does not exist")
                if object_name
                else ("NoSuchBucket", "Bucket does not exist")
                if bucket_name
                else ("ResourceNotFound", "Request resource not found")
            ),
            405: lambda: (
                "MethodNotAllowed",
                "The specified method is not allowed against this resource",
            ),
            409: lambda: (
                ("NoSuchBucket", "Bucket does not exist")
                if bucket_name
                else ("ResourceConflict", "Request resource conflicts")
            ),
            501: lambda: (
                "MethodNotAllowed",
                "The specified method is not allowed against this resource",
            ),
        }

        func = error_map.get(response.status)
        if not func:
            return ServerError(
                f"server failed with HTTP status code {response.status}",
                response.status,
                response=response,
                body=body,
            )
        code, message = func()
        if response.status in [301, 307, 400] and region:
            message += "; use region " + region
        return S3Error(
            response.status,
            code,
            message,
            url.path,
            response.headers.get("x-amz-request-id"),
            response.headers.get("x-amz-id-2"),
            bucket_name=bucket_name,
            object_name=object_name,
            response=response,
        )

    def _url_open(
            self,
            method: str,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            body: Optional[bytes] = None,
            headers: Optional[DictType] = None,
            query_params: Optional[Union[DictType, str]] = None,
            preload_content: bool = True,
            no_body_trace: bool = False,
    ) -> BaseHTTPResponse:
        """Execute HTTP request."""
        url = self._base_url.build(
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=query_params,
        )

        headers = HTTPHeaderDict(headers or {})
        headers["Host"] = url.netloc
        headers["User-Agent"] = self._user_agent
        if body is not None or method in ["PUT", "POST"]:
            headers["Content-Length"] = str(len(body or b""))
            if not headers.get("Content-Type"):
                headers["Content-Type"] = "application/octet-stream"
        content_sha256 = sha256_hash(body)
        headers["x-amz-content-sha256"] = content_sha256
        date = time.utcnow()
        headers["x-amz-date"] = time.to_amz_date(date)

        if self._provider is not None:
            creds = self._provider.fetch()
            if creds.session_token:
                headers["X-Amz-Security-Token"] = creds.session_token
            headers = sign_v4_s3(
                method=method,
                url=url,
                region=self._config.region,
                headers=headers,
                credentials=creds,
                content_sha256=content_sha256,
                date=date,
            )

        if self._trace_stream:
            self._trace_stream.write("---------START-HTTP---------\n")
            query = ("?" + url.query) if url.query else ""
            self._trace_stream.write(f"{method} {url.path}{query} HTTP/1.1\n")
            self._trace_stream.write(
                headers_to_strings(headers, titled_key=True),
            )
            self._trace_stream.write("\n")
            if not no_body_trace and body is not None:
                self._trace_stream.write("\n")
                self._trace_stream.write(body.decode())
                self._trace_stream.write("\n")
            self._trace_stream.write("\n")

        try:
            response = self._http.urlopen(
                method,
                urlunsplit(url),
                body=body,
                headers=headers,
                preload_content=preload_content,
            )
        except HTTPError as exc:
            raise TransportError(
                method, urlunsplit(url), f"{type(exc).__name__}: {exc}",
            ) from exc

        _LOGGER.debug("%s %s -> %s", method, url.path, response.status)

        if self._trace_stream:
            self._trace_stream.write(f"HTTP/1.1 {response.status}\n")
            self._trace_stream.write(
                headers_to_strings(response.headers),
            )
            self._trace_stream.write("\n")

        if 200 <= response.status < 300:
            if self._trace_stream:
                if preload_content and response.data:
                    self._trace_stream.write("\n")
                    self._trace_stream.write(response.data.decode())
                    self._trace_stream.write("\n")
                self._trace_stream.write("----------END-HTTP----------\n")
            return response

        response.read(cache_content=True)
        if not preload_content:
            response.release_conn()

        if self._trace_stream:
            if method != "HEAD" and response.data:
                self._trace_stream.write(response.data.decode())
                self._trace_stream.write("\n")
            self._trace_stream.write("----------END-HTTP----------\n")

        raise self._response_error(
            method, url, response, bucket_name, object_name,
        )

    def _execute(
            self,
            method: str,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            body: Optional[bytes] = None,
            headers: Optional[DictType] = None,
            query_params: Optional[Union[DictType, str]] = None,
            preload_content: bool = True,
            no_body_trace: bool = False,
    ) -> BaseHTTPResponse:
        """
        Validate bucket and object names, then execute HTTP request as
        single round trip.
        """
        if bucket_name is not None:
            check_bucket_name(bucket_name)
        if object_name is not None:
            check_object_name(object_name)
            if not bucket_name:
                raise ValueError(
                    f"bucket name must be provided for object {object_name}",
                )
        if body is not None and not isinstance(body, bytes):
            raise TypeError("body must be bytes type")

        return self._url_open(
            method=method,
            bucket_name=bucket_name,
            object_name=object_name,
            body=body,
            headers=headers,
            query_params=query_params,
            preload_content=preload_content,
            no_body_trace=no_body_trace,
        )

    def list_buckets(self) -> ListAllMyBucketsResult:
        """
        List information of all accessible buckets.

        Returns:
            ListAllMyBucketsResult:
                Owner and buckets.

        Example:
            >>> result = client.list_buckets()
            >>> for bucket in result.buckets:
            ...     print(bucket.name, bucket.creation_date)
        """
        response = self._execute("GET")
        return decode(response.data, ListAllMyBucketsResult)

    def make_bucket(self, bucket_name: str, location: Optional[str] = None):
        """
        Create a bucket.

        Args:
            bucket_name (str):
                Name of the bucket.

            location (Optional[str], default=None):
                Region in which the bucket will be created; client region
                if not given.

        Example:
            >>> client.make_bucket("my-bucket")
        """
        location = location or self._config.region
        body = None
        headers = None
        if location != DEFAULT_REGION:
            body = encode(CreateBucketConfiguration(location)).encode()
            headers = {"Content-Type": "application/xml"}
        self._execute("PUT", bucket_name, body=body, headers=headers)

    def bucket_exists(self, bucket_name: str) -> bool:
        """
        Check if a bucket exists.

        Example:
            >>> if client.bucket_exists("my-bucket"):
            ...     print("my-bucket exists")
        """
        try:
            self._execute("HEAD", bucket_name)
            return True
        except S3Error as exc:
            if exc.code != "NoSuchBucket":
                raise
        return False

    def remove_bucket(self, bucket_name: str):
        """
        Remove an empty bucket.

        Example:
            >>> client.remove_bucket("my-bucket")
        """
        self._execute("DELETE", bucket_name)

    def list_objects(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            delimiter: Optional[str] = None,
            start_after: Optional[str] = None,
            continuation_token: Optional[str] = None,
            max_keys: Optional[int] = None,
            fetch_owner: bool = False,
    ) -> ListBucketResult:
        """
        List objects of a bucket using ListObjectsV2 API; one page per call.
        Pass ``next_continuation_token`` of a truncated result as
        ``continuation_token`` to fetch the next page.

        Args:
            bucket_name (str):
                Name of the bucket.

            prefix (Optional[str], default=None):
                List objects whose names start with this prefix.

            delimiter (Optional[str], default=None):
                Group names sharing a prefix up to the delimiter into
                common prefixes; ``"/"`` lists one directory level.

            start_after (Optional[str], default=None):
                List objects after this object name.

            continuation_token (Optional[str], default=None):
                Token of the next page from previous result.

            max_keys (Optional[int], default=None):
                Maximum number of objects in the page.

            fetch_owner (bool, default=False):
                Include owner of each object.

        Returns:
            ListBucketResult:
                Objects and common prefixes of the page.

        Example:
            >>> result = client.list_objects("my-bucket", prefix="my/")
            >>> for obj in result.contents:
            ...     print(obj.key, obj.size)
        """
        if max_keys is not None and max_keys <= 0:
            raise ValueError("max keys must be positive")
        query_params: DictType = {"list-type": "2"}
        if prefix is not None:
            query_params["prefix"] = prefix
        if delimiter is not None:
            query_params["delimiter"] = delimiter
        if start_after:
            query_params["start-after"] = start_after
        if continuation_token:
            query_params["continuation-token"] = continuation_token
        if max_keys is not None:
            query_params["max-keys"] = str(max_keys)
        if fetch_owner:
            query_params["fetch-owner"] = "true"
        response = self._execute(
            "GET", bucket_name, query_params=query_params,
        )
        return decode(response.data, ListBucketResult)

    def get_bucket_versioning(
            self,
            bucket_name: str,
    ) -> VersioningConfiguration:
        """
        Get versioning configuration of a bucket. Status is ``None`` when
        versioning was never enabled.

        Example:
            >>> config = client.get_bucket_versioning("my-bucket")
            >>> print(config.status)
        """
        response = self._execute(
            "GET", bucket_name, query_params={"versioning": ""},
        )
        return decode(response.data, VersioningConfiguration)

    def set_bucket_versioning(
            self,
            bucket_name: str,
            config: VersioningConfiguration,
    ):
        """
        Set versioning configuration of a bucket.

        Example:
            >>> client.set_bucket_versioning(
            ...     "my-bucket", VersioningConfiguration(ENABLED),
            ... )
        """
        if not isinstance(config, VersioningConfiguration):
            raise TypeError("config must be VersioningConfiguration type")
        body = encode(config).encode()
        self._execute(
            "PUT",
            bucket_name,
            body=body,
            headers={
                "Content-Type": "application/xml",
                "Content-MD5": md5sum_hash(body),
            },
            query_params={"versioning": ""},
        )

    @staticmethod
    def _gen_write_headers(
            content_type: Optional[str],
            metadata: Optional[DictType],
    ) -> DictType:
        """Generate headers for object creation."""
        headers = normalize_headers(metadata)
        headers["Content-Type"] = content_type or "application/octet-stream"
        return headers

    def _put_object(
            self,
            bucket_name: str,
            object_name: str,
            data: bytes,
            headers: Optional[DictType] = None,
            query_params: Optional[DictType] = None,
    ) -> BaseHTTPResponse:
        """Execute PutObject S3 API."""
        return self._execute(
            "PUT",
            bucket_name,
            object_name,
            body=data,
            headers=headers,
            query_params=query_params,
            no_body_trace=True,
        )

    def put_object(
            self,
            bucket_name: str,
            object_name: str,
            data: bytes,
            content_type: str = "application/octet-stream",
            metadata: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """
        Upload bytes to an object in a bucket in single request.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            data (bytes):
                Object data; at most 5GiB.

            content_type (str, default="application/octet-stream"):
                Content type of the object.

            metadata (Optional[DictType], default=None):
                Headers and user metadata of the object.

        Returns:
            ObjectWriteResult:
                The result of the object upload operation.

        Example:
            >>> result = client.put_object("my-bucket", "my-object", b"hello")
            >>> print(result.etag)
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data must be bytes type")
        if len(data) > MAX_PART_SIZE:
            raise ValueError(
                f"data size {len(data)} is not supported in single upload; "
                "use put_object_stream()"
            )
        response = self._put_object(
            bucket_name,
            object_name,
            bytes(data),
            self._gen_write_headers(content_type, metadata),
        )
        return ObjectWriteResult.new(
            response.headers, bucket_name, object_name,
        )

    def _create_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            headers: DictType,
    ) -> str:
        """Execute CreateMultipartUpload S3 API."""
        response = self._execute(
            "POST",
            bucket_name,
            object_name,
            headers=headers,
            query_params={"uploads": ""},
        )
        result = decode(response.data, InitiateMultipartUploadResult)
        return result.upload_id

    def _upload_part(
            self,
            bucket_name: str,
            object_name: str,
            data: bytes,
            upload_id: str,
            part_number: int,
    ) -> Part:
        """Execute UploadPart S3 API."""
        response = self._put_object(
            bucket_name,
            object_name,
            data,
            query_params={
                "partNumber": str(part_number),
                "uploadId": upload_id,
            },
        )
        etag = response.headers.get("etag")
        if not etag:
            raise ServerError(
                f"UploadPart response of part {part_number} has no ETag",
                response.status,
                response=response,
            )
        _LOGGER.debug(
            "uploaded part %d (%d bytes) of upload %s",
            part_number, len(data), upload_id,
        )
        return Part(part_number, etag, size=len(data))

    def _decode_write_result(
            self,
            response: BaseHTTPResponse,
            bucket_name: str,
            object_name: str,
    ):
        """
        Decode result document of a write which the server may fail after
        sending 200 OK, as CompleteMultipartUpload and CopyObject do.
        """
        result = decode(response.data)
        if isinstance(result, ErrorResponse):
            raise self._s3_error(
                result,
                response,
                f"/{bucket_name}/{object_name}",
                bucket_name,
                object_name,
            )
        return result

    def _complete_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            parts: list[Part],
    ) -> ObjectWriteResult:
        """Execute CompleteMultipartUpload S3 API."""
        manifest = CompleteMultipartUpload([
            Part(part.part_number, part.etag) for part in parts
        ])
        body = encode(manifest).encode()
        response = self._execute(
            "POST",
            bucket_name,
            object_name,
            body=body,
            headers={
                "Content-Type": "application/xml",
                "Content-MD5": md5sum_hash(body),
            },
            query_params={"uploadId": upload_id},
        )
        result = cast(
            CompleteMultipartUploadResult,
            self._decode_write_result(response, bucket_name, object_name),
        )
        return ObjectWriteResult(
            bucket_name,
            object_name,
            response.headers.get("x-amz-version-id"),
            result.etag.replace('"', ""),
            response.headers,
            location=result.location,
            part_count=len(parts),
        )

    def _abort_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
    ):
        """Execute AbortMultipartUpload S3 API."""
        self._execute(
            "DELETE",
            bucket_name,
            object_name,
            query_params={"uploadId": upload_id},
        )

    def _abort_after_failure(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
    ):
        """Abort multipart upload on failure; abort error is logged only."""
        try:
            self._abort_multipart_upload(bucket_name, object_name, upload_id)
        except S3CoreException as exc:
            _LOGGER.warning(
                "failed to abort multipart upload %s of %s/%s; %s",
                upload_id, bucket_name, object_name, exc,
            )

    def put_object_stream(
            self,
            bucket_name: str,
            object_name: str,
            data: BodyType,
            length: Optional[int] = None,
            content_type: str = "application/octet-stream",
            metadata: Optional[DictType] = None,
            part_size: Optional[int] = None,
            num_parallel_uploads: Optional[int] = None,
    ) -> ObjectWriteResult:
        """
        Upload data from a stream of possibly unknown length to an object in
        a bucket. Data of at most multipart threshold bytes is uploaded in
        single PUT; larger data is uploaded by multipart upload, reading one
        part at a time. Failed multipart upload is aborted and the original
        error is raised.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            data (Union[bytes, ReaderType, Iterable[bytes]]):
                An object with a callable ``read()`` method returning bytes,
                or an iterable of byte chunks.

            length (Optional[int], default=None):
                Size of the data in bytes; ``None`` for unknown size.

            content_type (str, default="application/octet-stream"):
                Content type of the object.

            metadata (Optional[DictType], default=None):
                Headers and user metadata of the object.

            part_size (Optional[int], default=None):
                Multipart upload part size; client part size if not given.

            num_parallel_uploads (Optional[int], default=None):
                Number of parallel part uploads; client setting if not
                given.

        Returns:
            ObjectWriteResult:
                The result of the object upload operation; ``part_count``
                is zero for single PUT.

        Example:
            >>> def generate():
            ...     for _ in range(176):
            ...         yield b"x" * 128 * 1024
            >>> result = client.put_object_stream(
            ...     "my-bucket", "my-object", generate(),
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if isinstance(data, (bytes, bytearray)):
            if length is None:
                length = len(data)
            data = io.BytesIO(data)
        if callable(getattr(data, "read", None)):
            stream = cast(ReaderType, data)
        elif isinstance(data, Iterable):
            stream = ChunkReader(data)
        else:
            raise TypeError(
                "data must be bytes, readable stream or iterable of bytes",
            )
        if length is not None and length < 0:
            raise ValueError(f"length {length} must not be negative")
        num_parallel_uploads = (
            num_parallel_uploads or self._config.num_parallel_uploads
        )
        if num_parallel_uploads < 1:
            raise ValueError("number of parallel uploads must be at least 1")
        part_size, part_count = get_part_info(
            length, part_size or self._config.part_size,
        )
        threshold = cast(int, self._config.multipart_threshold)
        headers = self._gen_write_headers(content_type, metadata)

        if length is not None and length <= threshold:
            part_data = read_part_data(stream, length)
            if len(part_data) != length:
                raise IOError(
                    f"stream having not enough data;"
                    f"expected: {length}, got: {len(part_data)} bytes"
                )
            response = self._put_object(
                bucket_name, object_name, part_data, headers,
            )
            return ObjectWriteResult.new(
                response.headers, bucket_name, object_name,
            )

        if length is None:
            head = read_part_data(stream, threshold + 1)
            if len(head) <= threshold:
                response = self._put_object(
                    bucket_name, object_name, head, headers,
                )
                return ObjectWriteResult.new(
                    response.headers, bucket_name, object_name,
                )
            # Replay bytes read while probing for end of stream.
            source = stream
            stream = ChunkReader(itertools.chain(
                [head], iter(lambda: source.read(part_size), b""),
            ))

        return self._upload_multipart(
            bucket_name,
            object_name,
            stream,
            length,
            headers,
            part_size,
            part_count,
            num_parallel_uploads,
        )

    def _upload_multipart(
            self,
            bucket_name: str,
            object_name: str,
            stream: ReaderType,
            object_size: Optional[int],
            headers: DictType,
            part_size: int,
            part_count: int,
            num_parallel_uploads: int,
    ) -> ObjectWriteResult:
        """
        Upload stream by multipart upload. Part count is -1 for unknown
        object size.
        """
        uploaded_size = 0
        part_number = 0
        one_byte = b""
        stop = False
        upload_id = None
        parts: list[Part] = []
        pool: Optional[ThreadPool] = None

        try:
            upload_id = self._create_multipart_upload(
                bucket_name, object_name, headers,
            )
            _LOGGER.debug(
                "initiated multipart upload %s of %s/%s",
                upload_id, bucket_name, object_name,
            )
            if num_parallel_uploads > 1:
                pool = ThreadPool(num_parallel_uploads)
                pool.start_parallel()

            while not stop:
                part_number += 1
                if part_count > 0:
                    if part_number == part_count:
                        part_size = cast(int, object_size) - uploaded_size
                        stop = True
                    part_data = read_part_data(stream, part_size)
                    if len(part_data) != part_size:
                        raise IOError(
                            f"stream having not enough data;"
                            f"expected: {part_size}, "
                            f"got: {len(part_data)} bytes"
                        )
                else:
                    part_data = read_part_data(
                        stream, part_size + 1, part_data=one_byte,
                    )
                    # If part_data_size is less or equal to part_size,
                    # then we have reached last part.
                    if len(part_data) <= part_size:
                        part_count = part_number
                        stop = True
                    else:
                        one_byte = part_data[-1:]
                        part_data = part_data[:-1]

                uploaded_size += len(part_data)

                if pool:
                    pool.add_task(
                        self._upload_part,
                        bucket_name,
                        object_name,
                        part_data,
                        upload_id,
                        part_number,
                    )
                else:
                    parts.append(
                        self._upload_part(
                            bucket_name,
                            object_name,
                            part_data,
                            upload_id,
                            part_number,
                        ),
                    )

            if pool:
                running, pool = pool, None
                result_queue = running.result()
                while not result_queue.empty():
                    parts.append(result_queue.get())

            parts.sort(key=lambda part: part.part_number)
            if [part.part_number for part in parts] != list(
                    range(1, part_count + 1),
            ):
                raise IOError(
                    f"uploaded {len(parts)} parts; expected {part_count}",
                )
            result = self._complete_multipart_upload(
                bucket_name, object_name, upload_id, parts,
            )
            _LOGGER.debug(
                "completed multipart upload %s of %s/%s with %d parts",
                upload_id, bucket_name, object_name, len(parts),
            )
            return result
        except Exception:
            if pool:
                # Let in-flight parts finish before abort.
                try:
                    pool.result()
                except Exception as exc:  # pylint: disable=broad-except
                    _LOGGER.debug("part upload failed during abort; %s", exc)
            if upload_id:
                self._abort_after_failure(bucket_name, object_name, upload_id)
            raise

    def abort_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
    ):
        """
        Abort an incomplete multipart upload.

        Example:
            >>> client.abort_multipart_upload(
            ...     "my-bucket", "my-object", "UPLOAD-ID",
            ... )
        """
        if not upload_id:
            raise ValueError("upload ID must not be empty")
        self._abort_multipart_upload(bucket_name, object_name, upload_id)

    def list_multipart_uploads(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            delimiter: Optional[str] = None,
            key_marker: Optional[str] = None,
            upload_id_marker: Optional[str] = None,
            max_uploads: Optional[int] = None,
    ) -> ListMultipartUploadsResult:
        """
        List incomplete multipart uploads of a bucket; one page per call.

        Example:
            >>> result = client.list_multipart_uploads("my-bucket")
            >>> for upload in result.uploads:
            ...     print(upload.key, upload.upload_id)
        """
        query_params: DictType = {"uploads": ""}
        if prefix is not None:
            query_params["prefix"] = prefix
        if delimiter is not None:
            query_params["delimiter"] = delimiter
        if key_marker:
            query_params["key-marker"] = key_marker
        if upload_id_marker:
            query_params["upload-id-marker"] = upload_id_marker
        if max_uploads is not None:
            query_params["max-uploads"] = str(max_uploads)
        response = self._execute(
            "GET", bucket_name, query_params=query_params,
        )
        return decode(response.data, ListMultipartUploadsResult)

    def get_object(
            self,
            bucket_name: str,
            object_name: str,
            offset: int = 0,
            length: Optional[int] = None,
            version_id: Optional[str] = None,
    ) -> BaseHTTPResponse:
        """
        Get data of an object. Returned response should be closed after use
        to release network resources. To reuse the connection, it's required
        to call `response.release_conn()` explicitly.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            offset (int, default=0):
                Start byte position of object data.

            length (Optional[int], default=None):
                Number of bytes of object data from offset.

            version_id (Optional[str], default=None):
                Version ID of the object.

        Returns:
            BaseHTTPResponse:
                An :class:`urllib3.response.BaseHTTPResponse` object.

        Example:
            >>> response = None
            >>> try:
            ...     response = client.get_object("my-bucket", "my-object")
            ...     data = response.read()
            ... finally:
            ...     if response:
            ...         response.close()
            ...         response.release_conn()
        """
        if offset < 0:
            raise ValueError("offset must not be negative")
        if length is not None and length <= 0:
            raise ValueError("length must be positive")
        headers = {}
        if offset or length:
            end = (offset + length - 1) if length else ""
            headers["Range"] = f"bytes={offset}-{end}"
        query_params = {"versionId": version_id} if version_id else None
        return self._execute(
            "GET",
            bucket_name,
            object_name,
            headers=headers,
            query_params=query_params,
            preload_content=False,
        )

    def stat_object(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ) -> ObjectStat:
        """
        Get object information and metadata of an object.

        Example:
            >>> result = client.stat_object("my-bucket", "my-object")
            >>> print(result.size, result.etag, result.last_modified)
        """
        query_params = {"versionId": version_id} if version_id else None
        response = self._execute(
            "HEAD", bucket_name, object_name, query_params=query_params,
        )
        return ObjectStat.new(response.headers, bucket_name, object_name)

    def remove_object(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ):
        """
        Remove an object.

        Example:
            >>> client.remove_object("my-bucket", "my-object")
        """
        query_params = {"versionId": version_id} if version_id else None
        self._execute(
            "DELETE", bucket_name, object_name, query_params=query_params,
        )

    def copy_object(
            self,
            bucket_name: str,
            object_name: str,
            source_bucket_name: str,
            source_object_name: str,
            source_version_id: Optional[str] = None,
            metadata: Optional[DictType] = None,
            content_type: Optional[str] = None,
    ) -> ObjectWriteResult:
        """
        Create an object by server-side copy of another object. Metadata of
        the source object is kept unless ``metadata`` or ``content_type`` is
        given, which replaces it.

        Example:
            >>> result = client.copy_object(
            ...     "my-bucket", "my-object", "src-bucket", "src-object",
            ... )
            >>> print(result.etag, result.last_modified)
        """
        check_bucket_name(source_bucket_name)
        check_object_name(source_object_name)
        headers: DictType = {}
        if metadata is not None or content_type is not None:
            headers = self._gen_write_headers(content_type, metadata)
            headers["x-amz-metadata-directive"] = "REPLACE"
        copy_source = quote(f"/{source_bucket_name}/{source_object_name}")
        if source_version_id:
            copy_source += "?versionId=" + quote(source_version_id)
        headers["x-amz-copy-source"] = copy_source
        response = self._execute(
            "PUT", bucket_name, object_name, headers=headers,
        )
        result = cast(
            CopyObjectResult,
            self._decode_write_result(response, bucket_name, object_name),
        )
        return ObjectWriteResult(
            bucket_name,
            object_name,
            response.headers.get("x-amz-version-id"),
            result.etag.replace('"', ""),
            response.headers,
            last_modified=result.last_modified,
        )

    @staticmethod
    def _subresource(name: str, version_id: Optional[str]) -> DictType:
        """Query parameters of object sub-resource."""
        query_params: DictType = {name: ""}
        if version_id:
            query_params["versionId"] = version_id
        return query_params

    def _put_subresource(
            self,
            bucket_name: str,
            object_name: str,
            name: str,
            body: bytes,
            version_id: Optional[str],
    ):
        """Execute PUT of XML body on object sub-resource."""
        self._execute(
            "PUT",
            bucket_name,
            object_name,
            body=body,
            headers={
                "Content-Type": "application/xml",
                "Content-MD5": md5sum_hash(body),
            },
            query_params=self._subresource(name, version_id),
        )

    def get_object_tags(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ) -> Optional[dict[str, str]]:
        """
        Get tags configuration of an object.

        Returns:
            Optional[dict[str, str]]:
                Tags of the object, or ``None`` if no tags are set.

        Example:
            >>> tags = client.get_object_tags("my-bucket", "my-object")
        """
        try:
            response = self._execute(
                "GET",
                bucket_name,
                object_name,
                query_params=self._subresource("tagging", version_id),
            )
            return decode(response.data, Tagging).todict()
        except S3Error as exc:
            if exc.code != "NoSuchTagSet":
                raise
        return None

    def set_object_tags(
            self,
            bucket_name: str,
            object_name: str,
            tags: Union[dict[str, str], Tagging],
            version_id: Optional[str] = None,
    ):
        """
        Set tags configuration to an object.

        Example:
            >>> client.set_object_tags(
            ...     "my-bucket", "my-object", {"Project": "Project One"},
            ... )
        """
        if isinstance(tags, dict):
            tags = Tagging.fromdict(tags)
        if not isinstance(tags, Tagging):
            raise TypeError("tags must be dict or Tagging type")
        self._put_subresource(
            bucket_name,
            object_name,
            "tagging",
            encode(tags).encode(),
            version_id,
        )

    def delete_object_tags(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ):
        """
        Delete tags configuration of an object.

        Example:
            >>> client.delete_object_tags("my-bucket", "my-object")
        """
        self._execute(
            "DELETE",
            bucket_name,
            object_name,
            query_params=self._subresource("tagging", version_id),
        )

    def get_object_retention(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ) -> Optional[Retention]:
        """
        Get retention configuration of an object.

        Example:
            >>> config = client.get_object_retention("my-bucket", "my-object")
        """
        try:
            response = self._execute(
                "GET",
                bucket_name,
                object_name,
                query_params=self._subresource("retention", version_id),
            )
            return decode(response.data, Retention)
        except S3Error as exc:
            if exc.code != "NoSuchObjectLockConfiguration":
                raise
        return None

    def set_object_retention(
            self,
            bucket_name: str,
            object_name: str,
            config: Retention,
            version_id: Optional[str] = None,
    ):
        """
        Set retention configuration on an object.

        Example:
            >>> config = Retention(
            ...     GOVERNANCE,
            ...     datetime.now(timezone.utc) + timedelta(days=10),
            ... )
            >>> client.set_object_retention("my-bucket", "my-object", config)
        """
        if not isinstance(config, Retention):
            raise TypeError("config must be Retention type")
        self._put_subresource(
            bucket_name,
            object_name,
            "retention",
            encode(config).encode(),
            version_id,
        )

    def enable_object_legal_hold(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ):
        """
        Enable legal hold on an object.

        Example:
            >>> client.enable_object_legal_hold("my-bucket", "my-object")
        """
        self._put_subresource(
            bucket_name,
            object_name,
            "legal-hold",
            encode(LegalHold(ON)).encode(),
            version_id,
        )

    def disable_object_legal_hold(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ):
        """
        Disable legal hold on an object.

        Example:
            >>> client.disable_object_legal_hold("my-bucket", "my-object")
        """
        self._put_subresource(
            bucket_name,
            object_name,
            "legal-hold",
            encode(LegalHold(OFF)).encode(),
            version_id,
        )

    def is_object_legal_hold_enabled(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
    ) -> bool:
        """
        Returns true if legal hold is enabled on an object.

        Example:
            >>> if client.is_object_legal_hold_enabled(
            ...         "my-bucket", "my-object",
            ... ):
            ...     print("legal hold is enabled on my-object")
        """
        try:
            response = self._execute(
                "GET",
                bucket_name,
                object_name,
                query_params=self._subresource("legal-hold", version_id),
            )
            return decode(response.data, LegalHold).enabled
        except S3Error as exc:
            if exc.code != "NoSuchObjectLockConfiguration":
                raise
        return False
