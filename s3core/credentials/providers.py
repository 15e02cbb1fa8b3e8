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

# pylint: disable=too-many-branches

"""Credential providers."""

from __future__ import annotations

import configparser
import logging
import os
import threading
from abc import ABCMeta, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import cast
from urllib.parse import urlencode, urlsplit, urlunsplit
from xml.etree import ElementTree as ET

import certifi
from urllib3.exceptions import HTTPError
from urllib3.poolmanager import PoolManager
from urllib3.util import Retry

from .. import signer
from ..error import CredentialError
from ..helpers import sha256_hash
from ..time import from_iso8601utc, to_amz_date, utcnow
from ..xml import find, findtext
from .credentials import Credentials

_LOGGER = logging.getLogger(__name__)

_DEFAULT_DURATION_SECONDS = int(timedelta(hours=1).total_seconds())


def _user_home_dir() -> str:
    """Return current user home folder."""
    return (
        os.environ.get("HOME") or
        os.environ.get("UserProfile") or
        str(Path.home())
    )


class Provider(metaclass=ABCMeta):  # pylint: disable=too-few-public-methods
    """
    Credential provider. Implementations must be safe to call from many
    threads at once.
    """

    @abstractmethod
    def fetch(self) -> Credentials:
        """
        Fetch current credentials. Raises :exc:`CredentialError` when
        credentials are not available.
        """


class StaticProvider(Provider):
    """Fixed credential provider."""

    def __init__(
            self,
            access_key: str,
            secret_key: str,
            session_token: str | None = None,
    ):
        self._credentials = Credentials(access_key, secret_key, session_token)

    def fetch(self) -> Credentials:
        """Return passed credentials."""
        return self._credentials


class EnvAWSProvider(Provider):
    """Credential provider from AWS environment variables."""

    def fetch(self) -> Credentials:
        """Fetch credentials from environment."""
        access_key = (
            os.environ.get("AWS_ACCESS_KEY_ID") or
            os.environ.get("AWS_ACCESS_KEY")
        )
        secret_key = (
            os.environ.get("AWS_SECRET_ACCESS_KEY") or
            os.environ.get("AWS_SECRET_KEY")
        )
        if not access_key or not secret_key:
            raise CredentialError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY environment "
                "variables must be set",
            )
        return Credentials(
            access_key=access_key,
            secret_key=secret_key,
            session_token=os.environ.get("AWS_SESSION_TOKEN") or None,
        )


class EnvMinioProvider(Provider):
    """Credential provider from MinIO environment variables."""

    def fetch(self) -> Credentials:
        """Fetch credentials from environment."""
        access_key = os.environ.get("MINIO_ACCESS_KEY")
        secret_key = os.environ.get("MINIO_SECRET_KEY")
        if not access_key or not secret_key:
            raise CredentialError(
                "MINIO_ACCESS_KEY and MINIO_SECRET_KEY environment "
                "variables must be set",
            )
        return Credentials(access_key=access_key, secret_key=secret_key)


class AWSConfigProvider(Provider):
    """Credential provider from AWS shared credential file."""

    def __init__(
            self,
            filename: str | None = None,
            profile: str | None = None,
    ):
        self._filename = (
            filename or
            os.environ.get("AWS_SHARED_CREDENTIALS_FILE") or
            os.path.join(_user_home_dir(), ".aws", "credentials")
        )
        self._profile = profile or os.environ.get("AWS_PROFILE") or "default"

    def fetch(self) -> Credentials:
        """Fetch credentials from AWS shared credential file."""
        parser = configparser.ConfigParser()
        try:
            parser.read(self._filename)
        except configparser.Error as exc:
            raise CredentialError(
                f"error in reading file {self._filename}",
            ) from exc
        access_key = parser.get(
            self._profile,
            "aws_access_key_id",
            fallback=None,
        )
        secret_key = parser.get(
            self._profile,
            "aws_secret_access_key",
            fallback=None,
        )
        session_token = parser.get(
            self._profile,
            "aws_session_token",
            fallback=None,
        )

        if not access_key:
            raise CredentialError(
                f"access key does not exist in profile "
                f"{self._profile} in AWS credential file {self._filename}"
            )

        if not secret_key:
            raise CredentialError(
                f"secret key does not exist in profile "
                f"{self._profile} in AWS credential file {self._filename}"
            )

        return Credentials(
            access_key,
            secret_key,
            session_token=session_token,
        )


class ChainedProvider(Provider):
    """
    Chained credential provider; the first provider supplying credentials
    wins.
    """

    def __init__(self, providers: list[Provider]):
        self._providers = list(providers)

    def fetch(self) -> Credentials:
        """Fetch credentials from one of available provider."""
        for provider in self._providers:
            try:
                return provider.fetch()
            except CredentialError as exc:
                _LOGGER.debug(
                    "%s failed to fetch credentials; %s",
                    type(provider).__name__, exc,
                )

        raise CredentialError("All providers fail to fetch credentials")


class RefreshingProvider(Provider):
    """
    Caching provider for expiring credentials with single-flight refresh.

    Cached credentials are returned until they expire. Concurrent callers
    arriving while a refresh is in progress wait for that refresh and share
    its outcome, the new credentials or its error; only one refresh runs at
    a time and a failed refresh is not retried for the waiting callers.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._credentials: Credentials | None = None
        self._error: CredentialError | None = None
        # Incremented when a refresh finishes, successfully or not.
        self._generation = 0

    @abstractmethod
    def _refresh(self) -> Credentials:
        """Obtain new credentials from upstream."""

    def fetch(self) -> Credentials:
        """Return cached credentials or refresh expired ones."""
        generation = self._generation
        credentials = self._credentials
        if credentials and not credentials.is_expired():
            return credentials

        with self._lock:
            if self._generation != generation:
                # A refresh finished while this caller waited.
                if self._error:
                    raise CredentialError(str(self._error)) from self._error
                return cast(Credentials, self._credentials)

            try:
                credentials = self._refresh()
            except CredentialError as exc:
                self._error = exc
                self._generation += 1
                raise
            except Exception as exc:
                self._error = CredentialError(
                    f"{type(self).__name__} failed to refresh credentials; "
                    f"{exc}",
                )
                self._generation += 1
                raise self._error from exc

            self._credentials, self._error = credentials, None
            self._generation += 1
            return credentials


def _parse_credentials(data: str, name: str) -> Credentials:
    """Parse data containing credentials XML."""
    element = ET.fromstring(data)
    element = cast(ET.Element, find(element, name, True))
    element = cast(ET.Element, find(element, "Credentials", True))
    expiration = from_iso8601utc(findtext(element, "Expiration", True))
    return Credentials(
        cast(str, findtext(element, "AccessKeyId", True)),
        cast(str, findtext(element, "SecretAccessKey", True)),
        findtext(element, "SessionToken", True),
        expiration,
    )


class AssumeRoleProvider(RefreshingProvider):
    """Assume-role credential provider using STS AssumeRole API."""

    def __init__(  # pylint: disable=too-many-positional-arguments
            self,
            sts_endpoint: str,
            access_key: str,
            secret_key: str,
            duration_seconds: int = 0,
            policy: str | None = None,
            region: str | None = None,
            role_arn: str | None = None,
            role_session_name: str | None = None,
            external_id: str | None = None,
            http_client: PoolManager | None = None,
    ):
        super().__init__()
        self._sts_endpoint = sts_endpoint
        self._credentials_to_sign = Credentials(access_key, secret_key)
        self._region = region or "us-east-1"
        self._http_client = http_client or PoolManager(
            ca_certs=os.environ.get("SSL_CERT_FILE") or certifi.where(),
            retries=Retry(
                total=5,
                backoff_factor=0.2,
                status_forcelist=[500, 502, 503, 504],
            ),
        )

        query_params = {
            "Action": "AssumeRole",
            "Version": "2011-06-15",
            "DurationSeconds": str(
                duration_seconds
                if duration_seconds > _DEFAULT_DURATION_SECONDS
                else _DEFAULT_DURATION_SECONDS
            ),
        }

        if role_arn:
            query_params["RoleArn"] = role_arn
        if role_session_name:
            query_params["RoleSessionName"] = role_session_name
        if policy:
            query_params["Policy"] = policy
        if external_id:
            query_params["ExternalId"] = external_id

        self._body = urlencode(query_params)
        self._content_sha256 = sha256_hash(self._body)
        url = urlsplit(sts_endpoint)
        if url.scheme not in ["http", "https"] or not url.hostname:
            raise ValueError(f"invalid STS endpoint {sts_endpoint}")
        self._url = url._replace(path=url.path or "/")
        self._host = url.netloc
        if (
                (url.scheme == "http" and url.port == 80) or
                (url.scheme == "https" and url.port == 443)
        ):
            self._host = cast(str, url.hostname)

    def _refresh(self) -> Credentials:
        """Execute AssumeRole API to get new credentials."""
        utctime = utcnow()
        headers = signer.sign_v4_sts(
            "POST",
            self._url,
            self._region,
            {
                "Content-Type": "application/x-www-form-urlencoded",
                "Host": self._host,
                "X-Amz-Date": to_amz_date(utctime),
                "X-Amz-Content-Sha256": self._content_sha256,
            },
            self._credentials_to_sign,
            self._content_sha256,
            utctime,
        )

        try:
            response = self._http_client.urlopen(
                "POST",
                urlunsplit(self._url),
                body=self._body,
                headers=headers,
            )
        except HTTPError as exc:
            raise CredentialError(
                f"{self._sts_endpoint} is not reachable; {exc}",
            ) from exc

        if response.status != 200:
            raise CredentialError(
                f"{self._sts_endpoint} failed with HTTP status code "
                f"{response.status}",
            )

        _LOGGER.debug("assumed role from %s", self._sts_endpoint)
        return _parse_credentials(
            response.data.decode(), "AssumeRoleResult",
        )
