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
s3core - Signed request pipeline and streaming uploads for S3 compatible
object storage

    >>> from s3core import Client
    >>> client = Client(
    ...     "play.min.io",
    ...     access_key="Q3AM3UQ867SPQQA43P2F",
    ...     secret_key="zuf+tfteSlswRu7BJ86wekitnifILbZam1KYY3TG",
    ... )
    >>> result = client.list_buckets()
    >>> for bucket in result.buckets:
    ...     print(bucket.name, bucket.creation_date)

:copyright: (C) 2024-2025 MinIO, Inc.
:license: Apache 2.0, see LICENSE for more details.
"""

__title__ = "s3core"
__author__ = "MinIO, Inc."
__version__ = "0.3.0"
__license__ = "Apache 2.0"

# pylint: disable=unused-import,useless-import-alias
from .api import Client as Client
from .config import ClientConfig as ClientConfig
from .error import CredentialError as CredentialError
from .error import S3CoreException as S3CoreException
from .error import S3Error as S3Error
from .error import ServerError as ServerError
from .error import TransportError as TransportError
from .error import XmlError as XmlError
