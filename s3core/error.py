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
s3core.error
~~~~~~~~~~~~

Exception classes raised by the request pipeline.

Invalid caller input raises the builtin :exc:`ValueError` or
:exc:`TypeError` before any network access. Everything else derives from
:exc:`S3CoreException`:

* :exc:`XmlError` - response body is malformed or does not match its schema.
* :exc:`ServerError` - server answered with a non-2xx status;
  :exc:`S3Error` when the body carries an S3 ``<Error>`` document.
* :exc:`TransportError` - the request never got a response.
* :exc:`CredentialError` - no credentials could be supplied.
"""

from __future__ import absolute_import, annotations

from typing import Optional

from urllib3.response import BaseHTTPResponse


class S3CoreException(Exception):
    """Base s3core exception."""


class XmlError(S3CoreException):
    """Raised to indicate malformed or schema mismatched XML."""

    def __init__(self, message: str, element: Optional[str] = None):
        self._element = element
        super().__init__(message)

    @property
    def element(self) -> Optional[str]:
        """Get name of offending XML element if known."""
        return self._element

    def __reduce__(self):
        return type(self), (str(self), self._element)


class CredentialError(S3CoreException):
    """Raised to indicate that credentials could not be provided."""


class TransportError(S3CoreException):
    """
    Raised to indicate connection, timeout or protocol failure; the request
    did not receive an HTTP response.
    """

    def __init__(self, method: str, url: str, reason: str):
        self._method = method
        self._url = url
        self._reason = reason
        super().__init__(f"{method} {url} failed; {reason}")

    @property
    def method(self) -> str:
        """Get HTTP method."""
        return self._method

    @property
    def url(self) -> str:
        """Get request URL."""
        return self._url

    def __reduce__(self):
        return type(self), (self._method, self._url, self._reason)


class ServerError(S3CoreException):
    """Raised to indicate that S3 service returned a non-2xx status."""

    def __init__(
            self,
            message: str,
            status_code: int,
            response: Optional[BaseHTTPResponse] = None,
            body: Optional[str] = None,
    ):
        self._status_code = status_code
        self._response = response
        self._body = body
        super().__init__(message)

    @property
    def status_code(self) -> int:
        """Get HTTP status code."""
        return self._status_code

    @property
    def response(self) -> Optional[BaseHTTPResponse]:
        """Get HTTP response."""
        return self._response

    @property
    def body(self) -> Optional[str]:
        """Get raw response body."""
        return self._body

    def __reduce__(self):
        return type(self), (
            str(self), self._status_code, None, self._body,
        )


class S3Error(ServerError):
    """
    Raised to indicate that error response is received
    when executing S3 operation.
    """

    def __init__(  # pylint: disable=too-many-positional-arguments
        self,
        status_code: int,
        code: Optional[str],
        message: Optional[str],
        resource: Optional[str],
        request_id: Optional[str],
        host_id: Optional[str],
        bucket_name: Optional[str] = None,
        object_name: Optional[str] = None,
        response: Optional[BaseHTTPResponse] = None,
    ):
        self.code = code
        self.message = message
        self.resource = resource
        self.request_id = request_id
        self.host_id = host_id
        self.bucket_name = bucket_name
        self.object_name = object_name

        bucket_message = f", bucket_name: {bucket_name}" if bucket_name else ""
        object_message = f", object_name: {object_name}" if object_name else ""

        super().__init__(
            f"S3 operation failed; code: {code}, message: {message}, "
            f"resource: {resource}, request_id: {request_id}, "
            f"host_id: {host_id}{bucket_message}{object_message}",
            status_code,
            response=response,
        )

    def __reduce__(self):
        return type(self), (
            self.status_code,
            self.code,
            self.message,
            self.resource,
            self.request_id,
            self.host_id,
            self.bucket_name,
            self.object_name,
        )

    def __repr__(self):
        return (
            f"S3Error(status_code={self.status_code!r}, code={self.code!r}, "
            f"message={self.message!r}, resource={self.resource!r}, "
            f"request_id={self.request_id!r}, host_id={self.host_id!r}, "
            f"bucket_name={self.bucket_name!r}, "
            f"object_name={self.object_name!r})"
        )
