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
s3core.signer
~~~~~~~~~~~~~

This module implements AWS Signature Version 4 request signing.

Every request is signed from scratch: canonical request, string-to-sign,
signing key and signature are derived from the request, a credentials
snapshot and the request time, and nothing is cached between requests.
"""

from __future__ import absolute_import, annotations

import hashlib
import hmac
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Mapping, Tuple, Union, cast
from urllib.parse import SplitResult

from . import time
from .credentials import Credentials
from .helpers import sha256_hash

SIGN_V4_ALGORITHM = "AWS4-HMAC-SHA256"
_MULTI_SPACE_REGEX = re.compile(r"( +)")
_UNSIGNED_HEADERS = ("authorization", "user-agent")
_REQUIRED_HEADERS = ("host", "x-amz-date", "x-amz-content-sha256")

HeadersType = Mapping[str, Union[str, List[str], Tuple[str]]]


@dataclass(frozen=True)
class CanonicalRequest:
    """Canonical form of an HTTP request used as signature input."""
    method: str
    canonical_uri: str
    canonical_query_string: str
    canonical_headers: str
    signed_headers: str
    payload_hash: str

    def __str__(self) -> str:
        # CanonicalRequest =
        #   HTTPRequestMethod + '\n' +
        #   CanonicalURI + '\n' +
        #   CanonicalQueryString + '\n' +
        #   CanonicalHeaders + '\n' +
        #   SignedHeaders + '\n' +
        #   HexEncode(Hash(RequestPayload))
        return (
            f"{self.method}\n"
            f"{self.canonical_uri}\n"
            f"{self.canonical_query_string}\n"
            f"{self.canonical_headers}\n"
            f"{self.signed_headers}\n"
            f"{self.payload_hash}"
        )

    def hash(self) -> str:
        """Get hex encoded SHA-256 of canonical request."""
        return sha256_hash(str(self))


def _hmac_hash(
        key: bytes,
        data: bytes,
        hexdigest: bool = False,
) -> bytes | str:
    """Return HMacSHA256 digest of given key and data."""

    hasher = hmac.new(key, data, hashlib.sha256)
    return hasher.hexdigest() if hexdigest else hasher.digest()


def _get_scope(date: datetime, region: str, service_name: str) -> str:
    """Get scope string."""
    return f"{time.to_signer_date(date)}/{region}/{service_name}/aws4_request"


def _get_canonical_uri(path: str) -> str:
    """
    Get canonical URI of already percent-encoded path. Path is used as is;
    S3 does not normalize empty or dot segments.
    """
    return path or "/"


def _get_canonical_headers(headers: HeadersType) -> tuple[str, str]:
    """Get canonical headers and signed headers."""

    ordered_headers: dict[str, list[str]] = {}
    for key, values in headers.items():
        key = key.lower()
        if key in _UNSIGNED_HEADERS:
            continue
        values = values if isinstance(values, (list, tuple)) else [values]
        ordered_headers.setdefault(key, []).extend([
            _MULTI_SPACE_REGEX.sub(" ", str(value).strip())
            for value in values
        ])

    names = sorted(ordered_headers)
    canonical_headers = "".join(
        [f"{name}:{','.join(ordered_headers[name])}\n" for name in names],
    )
    return canonical_headers, ";".join(names)


def _get_canonical_query_string(query: str) -> str:
    """
    Get canonical query string of already percent-encoded query. Parameters
    are sorted by key, then by value; a parameter without value is written
    as ``key=``.
    """
    if not query:
        return ""

    params = []
    for param in query.split("&"):
        if not param:
            continue
        key, _, value = param.partition("=")
        params.append((key, value))
    return "&".join(f"{key}={value}" for key, value in sorted(params))


def get_canonical_request(
        method: str,
        url: SplitResult,
        headers: HeadersType,
        content_sha256: str,
) -> CanonicalRequest:
    """Build canonical request of given request."""
    canonical_headers, signed_headers = _get_canonical_headers(headers)
    return CanonicalRequest(
        method=method.upper(),
        canonical_uri=_get_canonical_uri(url.path),
        canonical_query_string=_get_canonical_query_string(url.query),
        canonical_headers=canonical_headers,
        signed_headers=signed_headers,
        payload_hash=content_sha256,
    )


def _get_string_to_sign(
        date: datetime,
        scope: str,
        canonical_request_hash: str,
) -> str:
    """Get string-to-sign."""
    return (
        f"{SIGN_V4_ALGORITHM}\n{time.to_amz_date(date)}\n{scope}\n"
        f"{canonical_request_hash}"
    )


def _get_signing_key(
        secret_key: str,
        date: datetime,
        region: str,
        service_name: str,
) -> bytes:
    """Get signing key."""

    date_key = cast(
        bytes,
        _hmac_hash(
            ("AWS4" + secret_key).encode(),
            time.to_signer_date(date).encode(),
        ),
    )
    date_region_key = cast(bytes, _hmac_hash(date_key, region.encode()))
    date_region_service_key = cast(
        bytes,
        _hmac_hash(date_region_key, service_name.encode()),
    )
    return cast(
        bytes,
        _hmac_hash(date_region_service_key, b"aws4_request"),
    )


def _get_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Get signature."""

    return cast(
        str,
        _hmac_hash(signing_key, string_to_sign.encode(), hexdigest=True),
    )


def _get_authorization(
        access_key: str,
        scope: str,
        signed_headers: str,
        signature: str,
) -> str:
    """Get authorization."""
    return (
        f"{SIGN_V4_ALGORITHM} Credential={access_key}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )


def _check_signed_headers(signed_headers: str, credentials: Credentials):
    """Check mandatory headers are part of signed headers."""
    names = signed_headers.split(";")
    required = list(_REQUIRED_HEADERS)
    if credentials.session_token:
        required.append("x-amz-security-token")
    missing = [name for name in required if name not in names]
    if missing:
        raise ValueError(
            f"header(s) {', '.join(missing)} must be set for signing",
        )


def _sign_v4(  # pylint: disable=too-many-positional-arguments
        service_name: str,
        method: str,
        url: SplitResult,
        region: str,
        headers: dict,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> dict:
    """Do signature V4 of given request for given service name."""

    canonical_request = get_canonical_request(
        method, url, headers, content_sha256,
    )
    _check_signed_headers(canonical_request.signed_headers, credentials)
    scope = _get_scope(date, region, service_name)
    string_to_sign = _get_string_to_sign(
        date, scope, canonical_request.hash(),
    )
    signing_key = _get_signing_key(
        credentials.secret_key, date, region, service_name,
    )
    signature = _get_signature(signing_key, string_to_sign)
    headers["Authorization"] = _get_authorization(
        credentials.access_key,
        scope,
        canonical_request.signed_headers,
        signature,
    )
    return headers


def sign_v4_s3(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        headers: dict,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> dict:
    """Do signature V4 of given request for S3 service."""
    return _sign_v4(
        "s3",
        method,
        url,
        region,
        headers,
        credentials,
        content_sha256,
        date,
    )


def sign_v4_sts(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        headers: dict,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> dict:
    """Do signature V4 of given request for STS service."""
    return _sign_v4(
        "sts",
        method,
        url,
        region,
        headers,
        credentials,
        content_sha256,
        date,
    )
