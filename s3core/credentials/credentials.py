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

"""Credential definitions to access S3 service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..time import to_utc, utcnow


@dataclass(frozen=True)
class Credentials:
    """
    Immutable snapshot of access key, secret key and optional session token.
    """

    access_key: str
    secret_key: str
    session_token: Optional[str] = None
    expiration: Optional[datetime] = None

    def __post_init__(self):
        if not self.access_key:
            raise ValueError("Access key must not be empty")

        if not self.secret_key:
            raise ValueError("Secret key must not be empty")

        object.__setattr__(self, "expiration", to_utc(self.expiration))

    def is_expired(self) -> bool:
        """Check whether this credentials expired or about to expire."""
        return (
            self.expiration < (utcnow() + timedelta(seconds=10))
            if self.expiration else False
        )

    def __repr__(self):
        return (
            f"Credentials(access_key={self.access_key!r}, "
            f"secret_key='*REDACTED*', "
            f"session_token={'*REDACTED*' if self.session_token else None!r}, "
            f"expiration={self.expiration!r})"
        )
