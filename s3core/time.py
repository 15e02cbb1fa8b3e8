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

"""Time formatters for signing and for S3 wire formats."""

from __future__ import absolute_import, annotations

from datetime import datetime, timezone

# Fixed English names; strftime %a/%b depend on locale.
_WEEK_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep",
           "Oct", "Nov", "Dec"]


def _to_utc(value: datetime) -> datetime:
    """Return naive UTC time; naive value is taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_utc(value: datetime | None) -> datetime | None:
    """Return timezone-aware UTC time; naive value is taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    """Return current time as timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_amz_date(value: datetime) -> str:
    """Format datetime as X-Amz-Date, e.g. 20130524T000000Z."""
    return f"{_to_utc(value):%Y%m%dT%H%M%SZ}"


def to_signer_date(value: datetime) -> str:
    """Format datetime as date part of signing scope, e.g. 20130524."""
    return f"{_to_utc(value):%Y%m%d}"


def from_iso8601utc(value: str | None) -> datetime | None:
    """
    Parse UTC ISO-8601 time as used in S3 XML documents, with or without
    fractional seconds.
    """
    if value is None:
        return None
    layout = "%Y-%m-%dT%H:%M:%S.%fZ" if "." in value else "%Y-%m-%dT%H:%M:%SZ"
    return datetime.strptime(value, layout).replace(tzinfo=timezone.utc)


def to_iso8601utc(value: datetime | None) -> str | None:
    """
    Format datetime as UTC ISO-8601 with milliseconds, or with microseconds
    when the value is finer than a millisecond.
    """
    if value is None:
        return None
    value = _to_utc(value)
    if value.microsecond % 1000:
        return f"{value:%Y-%m-%dT%H:%M:%S.%f}Z"
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def from_http_header(value: str) -> datetime:
    """Parse IMF-fixdate of HTTP header, e.g. Mon, 22 Jun 2015 23:07:43 GMT."""
    fields = value.split(" ")
    if (
            len(fields) != 6 or
            fields[0][:-1] not in _WEEK_DAYS or
            not fields[0].endswith(",") or
            fields[2] not in _MONTHS or
            fields[5] != "GMT"
    ):
        raise ValueError(
            f"time data {value} does not match HTTP header format")

    month = _MONTHS.index(fields[2]) + 1
    time = datetime.strptime(
        f"{fields[3]}-{month:02d}-{fields[1]} {fields[4]}",
        "%Y-%m-%d %H:%M:%S",
    ).replace(tzinfo=timezone.utc)
    if _WEEK_DAYS[time.weekday()] != fields[0][:-1]:
        raise ValueError(
            f"time data {value} does not match HTTP header format")
    return time
