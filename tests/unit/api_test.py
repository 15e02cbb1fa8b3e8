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

import io
import os
from datetime import datetime, timezone
from unittest import TestCase, mock
from urllib.parse import urlsplit

from urllib3.exceptions import ProtocolError

from s3core import Client
from s3core.credentials import EnvMinioProvider
from s3core.datatypes import (ENABLED, GOVERNANCE, Retention,
                              VersioningConfiguration)
from s3core.error import (CredentialError, S3Error, ServerError,
                          TransportError)
from s3core.helpers import _DEFAULT_USER_AGENT, EMPTY_SHA256, sha256_hash
from s3core.signer import sign_v4_s3

from .mocks import MockConnection, MockResponse

_NS = 'xmlns="http://s3.amazonaws.com/doc/2006-03-01/"'
_LIST_BUCKETS = (
    f'<ListAllMyBucketsResult {_NS}>'
    '<Buckets><Bucket><Name>hello</Name>'
    '<CreationDate>2015-06-22T23:07:43.240Z</CreationDate>'
    '</Bucket><Bucket><Name>world</Name>'
    '<CreationDate>2015-06-22T23:07:56.766Z</CreationDate>'
    '</Bucket></Buckets><Owner><ID>minio</ID>'
    '<DisplayName>minio</DisplayName></Owner>'
    '</ListAllMyBucketsResult>'
).encode()


def _error_body(code):
    return (
        f'<Error><Code>{code}</Code><Message>{code} message</Message>'
        '<Resource>/bucket-test1/object</Resource>'
        '<RequestId>REQ</RequestId><HostId>HOST</HostId></Error>'
    ).encode()


class RequestTest(TestCase):
    @mock.patch('urllib3.PoolManager')
    def test_anonymous_request(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET',
                'https://localhost:9000/',
                {
                    'User-Agent': _DEFAULT_USER_AGENT,
                    'Host': 'localhost:9000',
                    'x-amz-content-sha256': EMPTY_SHA256,
                },
                200,
                content=_LIST_BUCKETS,
            ),
        )
        client = Client('localhost:9000')
        result = client.list_buckets()
        self.assertEqual(['hello', 'world'],
                         [bucket.name for bucket in result.buckets])
        self.assertEqual(
            datetime(2015, 6, 22, 23, 7, 43, 240000, timezone.utc),
            result.buckets[0].creation_date,
        )
        self.assertEqual('minio', result.owner.id)
        headers = mock_server.calls[0][2]
        self.assertNotIn('Authorization', headers)
        self.assertRegex(headers['x-amz-date'], r'^\d{8}T\d{6}Z$')

    @mock.patch('urllib3.PoolManager')
    def test_signed_request(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/', {}, 200,
                content=_LIST_BUCKETS,
            ),
        )
        client = Client('localhost:9000', 'minio', 'minio123')
        client.list_buckets()

        method, url, headers, _ = mock_server.calls[0]
        authorization = headers['Authorization']
        self.assertTrue(authorization.startswith(
            'AWS4-HMAC-SHA256 Credential=minio/',
        ))
        self.assertIn('/us-east-1/s3/aws4_request', authorization)
        self.assertIn(
            'SignedHeaders=host;x-amz-content-sha256;x-amz-date,',
            authorization,
        )

        # Sent headers reproduce the same signature.
        date = datetime.strptime(
            headers['x-amz-date'], '%Y%m%dT%H%M%SZ',
        ).replace(tzinfo=timezone.utc)
        unsigned = {
            key: value for key, value in headers.items()
            if key.lower() != 'authorization'
        }
        expected = sign_v4_s3(
            method, urlsplit(url), 'us-east-1', unsigned,
            client._provider.fetch(),  # pylint: disable=protected-access
            EMPTY_SHA256, date,
        )
        self.assertEqual(expected['Authorization'], authorization)

    @mock.patch('urllib3.PoolManager')
    def test_session_token(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'HEAD', 'https://localhost:9000/bucket-test1/',
                {'X-Amz-Security-Token': 'token'}, 200,
            ),
        )
        client = Client(
            'localhost:9000', 'minio', 'minio123', session_token='token',
        )
        self.assertTrue(client.bucket_exists('bucket-test1'))
        self.assertIn(
            'x-amz-date;x-amz-security-token,',
            mock_server.calls[0][2]['Authorization'],
        )

    @mock.patch('urllib3.PoolManager')
    def test_put_object_headers(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'PUT',
                'https://localhost:9000/bucket-test1//test/test.txt',
                {
                    'Content-Length': '5',
                    'Content-Type': 'text/plain',
                    'x-amz-content-sha256': sha256_hash(b'hello'),
                    'X-Amz-Meta-Project': 'one',
                },
                200,
                response_headers={
                    'ETag': '"5d41402abc4b2a76b9719d911017c592"',
                    'x-amz-version-id': 'v1',
                },
            ),
        )
        client = Client('localhost:9000', 'minio', 'minio123')
        result = client.put_object(
            'bucket-test1', '/test/test.txt', b'hello',
            content_type='text/plain', metadata={'Project': 'one'},
        )
        self.assertEqual('5d41402abc4b2a76b9719d911017c592', result.etag)
        self.assertEqual('v1', result.version_id)
        self.assertEqual(0, result.part_count)
        signed = mock_server.calls[0][2]['Authorization']
        self.assertIn('content-length;content-type;host;', signed)

    @mock.patch('urllib3.PoolManager')
    def test_object_name_encoding(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'DELETE',
                'https://localhost:9000/bucket-test1/a%2Bb%20c',
                {}, 204,
            ),
        )
        client = Client('localhost:9000')
        client.remove_object('bucket-test1', 'a+b c')

    @mock.patch('urllib3.PoolManager')
    def test_validation_before_network(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        client = Client('localhost:9000', 'minio', 'minio123')
        self.assertRaises(ValueError, client.put_object, 'ab', 'obj', b'')
        self.assertRaises(
            ValueError, client.stat_object, 'Bucket-Test1', 'obj',
        )
        self.assertRaises(
            ValueError, client.stat_object, '192.168.0.1', 'obj',
        )
        self.assertRaises(ValueError, client.remove_object, 'bucket-test1', '')
        self.assertRaises(TypeError, client.remove_object, 'bucket-test1', 1)
        self.assertEqual([], mock_server.calls)

    @mock.patch.dict(os.environ, {}, clear=True)
    @mock.patch('urllib3.PoolManager')
    def test_credential_error(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        client = Client('localhost:9000', credentials=EnvMinioProvider())
        self.assertRaises(CredentialError, client.list_buckets)
        self.assertEqual([], mock_server.calls)

    @mock.patch('urllib3.PoolManager')
    def test_transport_error(self, mock_connection):
        mock_server = mock.Mock()
        mock_server.urlopen.side_effect = ProtocolError('Connection aborted.')
        mock_connection.return_value = mock_server
        client = Client('localhost:9000')
        with self.assertRaises(TransportError) as ctx:
            client.list_buckets()
        self.assertIsInstance(ctx.exception.__cause__, ProtocolError)
        self.assertEqual('GET', ctx.exception.method)

    @mock.patch('urllib3.PoolManager')
    def test_set_app_info(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/',
                {'User-Agent': _DEFAULT_USER_AGENT + ' my_app/1.0.2'},
                200, content=_LIST_BUCKETS,
            ),
        )
        client = Client('localhost:9000')
        client.set_app_info('my_app', '1.0.2')
        client.list_buckets()
        self.assertRaises(ValueError, client.set_app_info, '', '1.0')

    @mock.patch('urllib3.PoolManager')
    def test_trace(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/', {}, 200,
                content=_LIST_BUCKETS,
            ),
        )
        client = Client('localhost:9000', 'minio', 'minio123')
        stream = io.StringIO()
        client.trace_on(stream)
        client.list_buckets()
        client.trace_off()
        text = stream.getvalue()
        self.assertIn('---------START-HTTP---------', text)
        self.assertIn('GET / HTTP/1.1', text)
        self.assertIn('Credential=*REDACTED*', text)
        self.assertIn('HTTP/1.1 200', text)
        self.assertIn('----------END-HTTP----------', text)
        self.assertNotIn('minio123', text)


class ErrorResponseTest(TestCase):
    @mock.patch('urllib3.PoolManager')
    def test_error_document(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/bucket-test1/object', {},
                403,
                response_headers={'Content-Type': 'application/xml'},
                content=_error_body('AccessDenied'),
            ),
        )
        client = Client('localhost:9000')
        with self.assertRaises(S3Error) as ctx:
            client.get_object('bucket-test1', 'object')
        self.assertEqual(403, ctx.exception.status_code)
        self.assertEqual('AccessDenied', ctx.exception.code)
        self.assertEqual('AccessDenied message', ctx.exception.message)
        self.assertEqual('/bucket-test1/object', ctx.exception.resource)
        self.assertEqual('REQ', ctx.exception.request_id)
        self.assertEqual('bucket-test1', ctx.exception.bucket_name)
        self.assertEqual('object', ctx.exception.object_name)

    @mock.patch('urllib3.PoolManager')
    def test_head_not_found(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'HEAD', 'https://localhost:9000/bucket-test1/object', {},
                404, response_headers={'x-amz-request-id': 'REQ'},
            ),
        )
        client = Client('localhost:9000')
        with self.assertRaises(S3Error) as ctx:
            client.stat_object('bucket-test1', 'object')
        self.assertEqual('NoSuchKey', ctx.exception.code)
        self.assertEqual('REQ', ctx.exception.request_id)
        self.assertEqual('/bucket-test1/object', ctx.exception.resource)

    @mock.patch('urllib3.PoolManager')
    def test_bucket_not_found(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'HEAD', 'https://localhost:9000/bucket-test1/', {}, 404,
            ),
        )
        client = Client('localhost:9000')
        self.assertFalse(client.bucket_exists('bucket-test1'))

    @mock.patch('urllib3.PoolManager')
    def test_unparsable_body(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/', {}, 502,
                response_headers={'Content-Type': 'text/html'},
                content=b'<html>Bad Gateway',
            ),
        )
        client = Client('localhost:9000')
        with self.assertRaises(ServerError) as ctx:
            client.list_buckets()
        self.assertNotIsInstance(ctx.exception, S3Error)
        self.assertEqual(502, ctx.exception.status_code)
        self.assertEqual('<html>Bad Gateway', ctx.exception.body)

    @mock.patch('urllib3.PoolManager')
    def test_non_utf8_body(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/', {}, 502,
                response_headers={'Content-Type': 'text/plain'},
                content=b'\xff\xfe\x00bad gateway',
            ),
        )
        client = Client('localhost:9000')
        with self.assertRaises(ServerError) as ctx:
            client.list_buckets()
        self.assertNotIsInstance(ctx.exception, S3Error)
        self.assertEqual(502, ctx.exception.status_code)
        self.assertIn('bad gateway', ctx.exception.body)

    @mock.patch('urllib3.PoolManager')
    def test_empty_body_unknown_status(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse('GET', 'https://localhost:9000/', {}, 503),
        )
        client = Client('localhost:9000')
        with self.assertRaises(ServerError) as ctx:
            client.list_buckets()
        self.assertNotIsInstance(ctx.exception, S3Error)
        self.assertEqual(503, ctx.exception.status_code)


class ObjectOperationsTest(TestCase):
    @mock.patch('urllib3.PoolManager')
    def test_get_object_tags(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET',
                'https://localhost:9000/bucket-test1/object?tagging=',
                {}, 200,
                content=(
                    f'<Tagging {_NS}><TagSet>'
                    '<Tag><Key>Project</Key><Value>One</Value></Tag>'
                    '</TagSet></Tagging>'
                ).encode(),
            ),
        )
        mock_server.mock_add_request(
            MockResponse(
                'GET',
                'https://localhost:9000/bucket-test1/object'
                '?tagging=&versionId=v1',
                {}, 404, content=_error_body('NoSuchTagSet'),
            ),
        )
        client = Client('localhost:9000')
        self.assertEqual(
            {'Project': 'One'},
            client.get_object_tags('bucket-test1', 'object'),
        )
        self.assertIsNone(
            client.get_object_tags('bucket-test1', 'object', 'v1'),
        )

    @mock.patch('urllib3.PoolManager')
    def test_set_object_tags(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'PUT',
                'https://localhost:9000/bucket-test1/object?tagging=',
                {'Content-Type': 'application/xml'}, 200,
            ),
        )
        client = Client('localhost:9000')
        client.set_object_tags('bucket-test1', 'object', {'Project': 'One'})
        _, _, headers, body = mock_server.calls[0]
        self.assertEqual(
            f'<Tagging {_NS}><TagSet>'
            '<Tag><Key>Project</Key><Value>One</Value></Tag>'
            '</TagSet></Tagging>'.encode(),
            body,
        )
        self.assertIn('Content-MD5', headers)

    @mock.patch('urllib3.PoolManager')
    def test_delete_object_tags(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'DELETE',
                'https://localhost:9000/bucket-test1/object?tagging=',
                {}, 204,
            ),
        )
        client = Client('localhost:9000')
        client.delete_object_tags('bucket-test1', 'object')

    @mock.patch('urllib3.PoolManager')
    def test_object_retention(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        retention = (
            f'<Retention {_NS}><Mode>GOVERNANCE</Mode>'
            '<RetainUntilDate>2030-01-01T00:00:00.000Z</RetainUntilDate>'
            '</Retention>'
        ).encode()
        mock_server.mock_add_request(
            MockResponse(
                'PUT',
                'https://localhost:9000/bucket-test1/object?retention=',
                {}, 200,
            ),
        )
        mock_server.mock_add_request(
            MockResponse(
                'GET',
                'https://localhost:9000/bucket-test1/object?retention=',
                {}, 200, content=retention,
            ),
        )
        config = Retention(
            GOVERNANCE, datetime(2030, 1, 1, tzinfo=timezone.utc),
        )
        client = Client('localhost:9000')
        client.set_object_retention('bucket-test1', 'object', config)
        self.assertEqual(retention, mock_server.calls[0][3])
        self.assertEqual(
            config, client.get_object_retention('bucket-test1', 'object'),
        )

    @mock.patch('urllib3.PoolManager')
    def test_legal_hold(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        url = 'https://localhost:9000/bucket-test1/object?legal-hold='
        mock_server.mock_add_request(MockResponse('PUT', url, {}, 200))
        mock_server.mock_add_request(MockResponse('PUT', url, {}, 200))
        mock_server.mock_add_request(
            MockResponse(
                'GET', url, {}, 200,
                content=b'<LegalHold><Status>ON</Status></LegalHold>',
            ),
        )
        mock_server.mock_add_request(
            MockResponse(
                'GET', url, {}, 404,
                content=_error_body('NoSuchObjectLockConfiguration'),
            ),
        )
        client = Client('localhost:9000')
        client.enable_object_legal_hold('bucket-test1', 'object')
        client.disable_object_legal_hold('bucket-test1', 'object')
        self.assertIn(b'<Status>ON</Status>', mock_server.calls[0][3])
        self.assertIn(b'<Status>OFF</Status>', mock_server.calls[1][3])
        self.assertTrue(
            client.is_object_legal_hold_enabled('bucket-test1', 'object'),
        )
        self.assertFalse(
            client.is_object_legal_hold_enabled('bucket-test1', 'object'),
        )

    @mock.patch('urllib3.PoolManager')
    def test_stat_object(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'HEAD',
                'https://localhost:9000/bucket-test1/object?versionId=v1',
                {}, 200,
                response_headers={
                    'Content-Length': '11',
                    'Content-Type': 'text/plain',
                    'ETag': '"abc"',
                    'Last-Modified': 'Mon, 22 Jun 2015 23:07:43 GMT',
                    'x-amz-version-id': 'v1',
                },
            ),
        )
        client = Client('localhost:9000')
        stat = client.stat_object('bucket-test1', 'object', 'v1')
        self.assertEqual(11, stat.size)
        self.assertEqual('abc', stat.etag)
        self.assertEqual('text/plain', stat.content_type)
        self.assertEqual('v1', stat.version_id)
        self.assertEqual(
            datetime(2015, 6, 22, 23, 7, 43, tzinfo=timezone.utc),
            stat.last_modified,
        )

    @mock.patch('urllib3.PoolManager')
    def test_get_object_range(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET', 'https://localhost:9000/bucket-test1/object',
                {'Range': 'bytes=10-19'}, 206, content=b'0123456789',
            ),
        )
        client = Client('localhost:9000')
        response = client.get_object(
            'bucket-test1', 'object', offset=10, length=10,
        )
        self.assertEqual(b'0123456789', response.read())

    @mock.patch('urllib3.PoolManager')
    def test_copy_object(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'PUT', 'https://localhost:9000/bucket-test1/copy', {}, 200,
                response_headers={'x-amz-version-id': 'v2'},
                content=(
                    f'<CopyObjectResult {_NS}>'
                    '<LastModified>2024-01-01T00:00:00.000Z</LastModified>'
                    '<ETag>"abc"</ETag></CopyObjectResult>'
                ).encode(),
            ),
        )
        client = Client('localhost:9000')
        result = client.copy_object(
            'bucket-test1', 'copy', 'bucket-test2', 'dir/a b', 'v1',
        )
        self.assertEqual('abc', result.etag)
        self.assertEqual('v2', result.version_id)
        self.assertEqual(
            datetime(2024, 1, 1, tzinfo=timezone.utc), result.last_modified,
        )
        _, _, headers, body = mock_server.calls[0]
        self.assertIsNone(body)
        self.assertEqual(
            '/bucket-test2/dir/a%20b?versionId=v1',
            headers['x-amz-copy-source'],
        )
        self.assertNotIn('x-amz-metadata-directive', headers)

    @mock.patch('urllib3.PoolManager')
    def test_copy_object_replace_metadata(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'PUT', 'https://localhost:9000/bucket-test1/copy', {}, 200,
                content=(
                    b'<CopyObjectResult><ETag>"abc"</ETag></CopyObjectResult>'
                ),
            ),
        )
        client = Client('localhost:9000')
        client.copy_object(
            'bucket-test1', 'copy', 'bucket-test2', 'object',
            metadata={'Project': 'One'}, content_type='text/plain',
        )
        headers = mock_server.calls[0][2]
        self.assertEqual('/bucket-test2/object', headers['x-amz-copy-source'])
        self.assertEqual('REPLACE', headers['x-amz-metadata-directive'])
        self.assertEqual('One', headers['x-amz-meta-project'])
        self.assertEqual('text/plain', headers['content-type'])

    @mock.patch('urllib3.PoolManager')
    def test_copy_object_error_in_ok_response(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'PUT', 'https://localhost:9000/bucket-test1/copy', {}, 200,
                content=_error_body('InternalError'),
            ),
        )
        client = Client('localhost:9000')
        with self.assertRaises(S3Error) as ctx:
            client.copy_object(
                'bucket-test1', 'copy', 'bucket-test2', 'object',
            )
        self.assertEqual('InternalError', ctx.exception.code)
        self.assertEqual(200, ctx.exception.status_code)

    @mock.patch('urllib3.PoolManager')
    def test_copy_object_invalid_source(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        client = Client('localhost:9000')
        self.assertRaises(
            ValueError, client.copy_object,
            'bucket-test1', 'copy', 'b', 'object',
        )
        self.assertEqual([], mock_server.calls)


class BucketOperationsTest(TestCase):
    @mock.patch('urllib3.PoolManager')
    def test_make_bucket(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'PUT', 'https://localhost:9000/bucket-test1/', {}, 200,
            ),
        )
        mock_server.mock_add_request(
            MockResponse(
                'PUT', 'https://localhost:9000/bucket-test2/', {}, 200,
            ),
        )
        client = Client('localhost:9000')
        client.make_bucket('bucket-test1')
        client.make_bucket('bucket-test2', 'eu-west-1')
        self.assertIsNone(mock_server.calls[0][3])
        self.assertEqual(
            f'<CreateBucketConfiguration {_NS}>'
            '<LocationConstraint>eu-west-1</LocationConstraint>'
            '</CreateBucketConfiguration>'.encode(),
            mock_server.calls[1][3],
        )

    @mock.patch('urllib3.PoolManager')
    def test_remove_bucket(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'DELETE', 'https://localhost:9000/bucket-test1/', {}, 204,
            ),
        )
        client = Client('localhost:9000')
        client.remove_bucket('bucket-test1')

    @mock.patch('urllib3.PoolManager')
    def test_list_multipart_uploads(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET',
                'https://localhost:9000/bucket-test1/'
                '?max-uploads=10&prefix=dir%2F&uploads=',
                {}, 200,
                content=(
                    f'<ListMultipartUploadsResult {_NS}>'
                    '<Bucket>bucket-test1</Bucket>'
                    '<IsTruncated>false</IsTruncated>'
                    '<Upload><Key>dir/a</Key><UploadId>id1</UploadId>'
                    '<Initiated>2015-06-22T23:07:43.240Z</Initiated>'
                    '</Upload></ListMultipartUploadsResult>'
                ).encode(),
            ),
        )
        mock_server.mock_add_request(
            MockResponse(
                'DELETE',
                'https://localhost:9000/bucket-test1/dir/a?uploadId=id1',
                {}, 204,
            ),
        )
        client = Client('localhost:9000')
        result = client.list_multipart_uploads(
            'bucket-test1', prefix='dir/', max_uploads=10,
        )
        self.assertFalse(result.is_truncated)
        self.assertEqual(
            [('dir/a', 'id1')],
            [(upload.key, upload.upload_id) for upload in result.uploads],
        )
        client.abort_multipart_upload('bucket-test1', 'dir/a', 'id1')

    @mock.patch('urllib3.PoolManager')
    def test_list_objects(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                'GET',
                'https://localhost:9000/bucket-test1/'
                '?continuation-token=token1&delimiter=%2F&list-type=2'
                '&max-keys=2&prefix=dir%2F',
                {}, 200,
                content=(
                    f'<ListBucketResult {_NS}>'
                    '<Name>bucket-test1</Name><Prefix>dir/</Prefix>'
                    '<KeyCount>2</KeyCount><MaxKeys>2</MaxKeys>'
                    '<Delimiter>/</Delimiter><IsTruncated>true</IsTruncated>'
                    '<Contents><Key>dir/a</Key>'
                    '<LastModified>2015-06-22T23:07:43.240Z</LastModified>'
                    '<ETag>"abc"</ETag><Size>11</Size>'
                    '<StorageClass>STANDARD</StorageClass></Contents>'
                    '<CommonPrefixes><Prefix>dir/sub/</Prefix>'
                    '</CommonPrefixes>'
                    '<ContinuationToken>token1</ContinuationToken>'
                    '<NextContinuationToken>token2</NextContinuationToken>'
                    '</ListBucketResult>'
                ).encode(),
            ),
        )
        client = Client('localhost:9000')
        result = client.list_objects(
            'bucket-test1', prefix='dir/', delimiter='/',
            continuation_token='token1', max_keys=2,
        )
        self.assertTrue(result.is_truncated)
        self.assertEqual('token2', result.next_continuation_token)
        self.assertEqual(['dir/a'], [obj.key for obj in result.contents])
        self.assertEqual(11, result.contents[0].size)
        self.assertEqual(
            datetime(2015, 6, 22, 23, 7, 43, 240000, timezone.utc),
            result.contents[0].last_modified,
        )
        self.assertEqual(
            ['dir/sub/'],
            [prefix.prefix for prefix in result.common_prefixes],
        )

    @mock.patch('urllib3.PoolManager')
    def test_list_objects_invalid_max_keys(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        client = Client('localhost:9000')
        self.assertRaises(
            ValueError, client.list_objects, 'bucket-test1', max_keys=0,
        )
        self.assertEqual([], mock_server.calls)

    @mock.patch('urllib3.PoolManager')
    def test_bucket_versioning(self, mock_connection):
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        url = 'https://localhost:9000/bucket-test1/?versioning='
        mock_server.mock_add_request(
            MockResponse(
                'GET', url, {}, 200,
                content=f'<VersioningConfiguration {_NS}/>'.encode(),
            ),
        )
        mock_server.mock_add_request(MockResponse('PUT', url, {}, 200))
        mock_server.mock_add_request(
            MockResponse(
                'GET', url, {}, 200,
                content=(
                    f'<VersioningConfiguration {_NS}>'
                    '<Status>Enabled</Status></VersioningConfiguration>'
                ).encode(),
            ),
        )
        client = Client('localhost:9000')
        self.assertIsNone(client.get_bucket_versioning('bucket-test1').status)
        client.set_bucket_versioning(
            'bucket-test1', VersioningConfiguration(ENABLED),
        )
        _, _, headers, body = mock_server.calls[1]
        self.assertEqual(
            f'<VersioningConfiguration {_NS}>'
            '<Status>Enabled</Status></VersioningConfiguration>'.encode(),
            body,
        )
        self.assertIn('Content-MD5', headers)
        self.assertEqual(
            VersioningConfiguration(ENABLED),
            client.get_bucket_versioning('bucket-test1'),
        )
        self.assertRaises(
            TypeError, client.set_bucket_versioning, 'bucket-test1',
            {'Status': ENABLED},
        )
