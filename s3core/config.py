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

"""Client configuration."""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from typing import Optional

from .helpers import (_DEFAULT_USER_AGENT, DEFAULT_PART_SIZE, MAX_PART_SIZE,
                      BaseURL, check_part_size, check_region)

DEFAULT_REGION = "us-east-1"
DEFAULT_TIMEOUT = 300  # 5 minutes


@dataclass(frozen=True)
class ClientConfig:  # pylint: disable=too-many-instance-attributes
    """
    Immutable client configuration; all values are validated once at
    construction.

    Args:
        endpoint (str):
            Hostname of S3 service with optional port, or URL with http or
            https scheme. Scheme in URL overrides ``secure``.

        secure (bool, default=True):
            Flag to use HTTPS.

        region (str, default="us-east-1"):
            Region used in request signing.

        user_agent (str):
            User-Agent header value.

        part_size (int, default=8MiB):
            Multipart upload part size in bytes.

        multipart_threshold (Optional[int], default=None):
            Largest body in bytes sent in single PUT. Defaults to
            ``part_size``.

        num_parallel_uploads (int, default=3):
            Number of parts uploaded in parallel.

        cert_check (bool, default=True):
            Flag to enable/disable server certificate validation.

        timeout (float, default=300):
            Connect and read timeout of default HTTP client in seconds.
    """
    endpoint: str
    secure: bool = True
    region: str = DEFAULT_REGION
    user_agent: str = _DEFAULT_USER_AGENT
    part_size: int = DEFAULT_PART_SIZE
    multipart_threshold: Optional[int] = None
    num_parallel_uploads: int = 3
    cert_check: bool = True
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not isinstance(self.endpoint, str) or not self.endpoint:
            raise ValueError("endpoint must be non-empty string")
        # Parse once to fail early on bad endpoint.
        BaseURL(self.url)

        if not self.region:
            raise ValueError("region must not be empty")
        check_region(self.region)

        if not self.user_agent:
            raise ValueError("user agent must not be empty")

        check_part_size(self.part_size)

        if self.multipart_threshold is None:
            object.__setattr__(self, "multipart_threshold", self.part_size)
        elif self.multipart_threshold < 0:
            raise ValueError("multipart threshold must not be negative")
        elif self.multipart_threshold > MAX_PART_SIZE:
            raise ValueError(
                f"multipart threshold {self.multipart_threshold} is not "
                "supported; maximum allowed 5GiB"
            )

        if self.num_parallel_uploads < 1:
            raise ValueError("number of parallel uploads must be at least 1")

        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @property
    def url(self) -> str:
        """Get endpoint URL with scheme."""
        if "://" in self.endpoint:
            return self.endpoint
        return ("https://" if self.secure else "http://") + self.endpoint

    @property
    def base_url(self) -> BaseURL:
        """Get base URL of endpoint."""
        return BaseURL(self.url)
