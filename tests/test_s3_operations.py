"""
Tests for the boto3 transport, using botocore's Stubber.
"""

import boto3
import pytest
from botocore.stub import ANY, Stubber

from bucketsync.exceptions import StorageError
from bucketsync.models import SyncConfig
from bucketsync.services.storage.operations import S3Operations
from bucketsync.utils.aws import create_storage_client, normalize_endpoint


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(s3_client):
    with Stubber(s3_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_list_objects_first_page(s3_client, stubber):
    stubber.add_response(
        "list_objects_v2",
        {
            "Contents": [{"Key": "site/a.txt", "ETag": '"0CC175B9C0F1B6A831C399E269772661"'}],
            "IsTruncated": True,
            "NextContinuationToken": "token-2",
        },
        {"Bucket": "my-bucket", "Prefix": "site/", "MaxKeys": 1000},
    )

    page = S3Operations(s3_client, "my-bucket").list_objects("site/")

    assert [obj.key for obj in page.objects] == ["site/a.txt"]
    assert page.objects[0].fingerprint() == "0cc175b9c0f1b6a831c399e269772661"
    assert page.next_token == "token-2"


def test_list_objects_passes_token_and_detects_last_page(s3_client, stubber):
    stubber.add_response(
        "list_objects_v2",
        {"IsTruncated": False},
        {"Bucket": "my-bucket", "Prefix": "", "MaxKeys": 10, "ContinuationToken": "token-2"},
    )

    page = S3Operations(s3_client, "my-bucket").list_objects("", "token-2", max_keys=10)

    assert list(page.objects) == []
    assert not page.has_more()


def test_put_object_translates_headers(s3_client, stubber, tmp_path):
    path = tmp_path / "index.html"
    path.write_text("<html></html>")
    stubber.add_response(
        "put_object",
        {"ETag": '"abc"'},
        {
            "Bucket": "my-bucket",
            "Key": "site/index.html",
            "Body": ANY,
            "CacheControl": "no-cache",
            "ContentType": "text/html",
            "Metadata": {"build": "42"},
        },
    )

    S3Operations(s3_client, "my-bucket").put_object(
        "site/index.html",
        str(path),
        {"Cache-Control": "no-cache", "x-amz-meta-Build": "42"},
    )


def test_delete_object(s3_client, stubber):
    stubber.add_response("delete_object", {}, {"Bucket": "my-bucket", "Key": "site/old.txt"})

    S3Operations(s3_client, "my-bucket").delete_object("site/old.txt")


def test_client_error_becomes_storage_error(s3_client, stubber):
    stubber.add_client_error("delete_object", service_error_code="AccessDenied", http_status_code=403)

    with pytest.raises(StorageError, match="AccessDenied"):
        S3Operations(s3_client, "my-bucket").delete_object("site/old.txt")


def test_missing_local_file_becomes_storage_error(s3_client, tmp_path):
    with pytest.raises(StorageError, match="Failed to upload"):
        S3Operations(s3_client, "my-bucket").put_object("k", str(tmp_path / "missing"), {})


def test_normalize_endpoint():
    assert normalize_endpoint("oss-cn-hangzhou.aliyuncs.com") == "https://oss-cn-hangzhou.aliyuncs.com"
    assert normalize_endpoint("http://localhost:9000") == "http://localhost:9000"
    assert normalize_endpoint("  ") is None


def test_create_storage_client_uses_endpoint():
    config = SyncConfig(
        access_key_id="AKID",
        access_key_secret="secret",
        bucket="my-bucket",
        endpoint="oss-cn-hangzhou.aliyuncs.com",
        local_path=".",
        region="oss-cn-hangzhou",
        max_concurrency=32,
    )

    client = create_storage_client(config)

    assert client.meta.endpoint_url == "https://oss-cn-hangzhou.aliyuncs.com"
    assert client.meta.region_name == "oss-cn-hangzhou"
    assert client.meta.config.max_pool_connections == 32


class _RequestCaptured(Exception):
    pass


def _capture_put_headers(client):
    captured = {}

    def on_send(request, **kwargs):
        captured.update(request.headers)
        raise _RequestCaptured()

    client.meta.events.register("before-send.s3.PutObject", on_send)
    return captured


@pytest.mark.parametrize("headers,expected_encoding", [
    ({}, None),
    ({"Content-Encoding": "gzip"}, "gzip"),
])
def test_uploads_are_not_sent_as_chunked_streams(tmp_path, headers, expected_encoding):
    config = SyncConfig(
        access_key_id="AKID",
        access_key_secret="secret",
        bucket="my-bucket",
        endpoint="oss-cn-hangzhou.aliyuncs.com",
        local_path=str(tmp_path),
        region="oss-cn-hangzhou",
    )
    client = create_storage_client(config)
    captured = _capture_put_headers(client)
    path = tmp_path / "app.js"
    path.write_bytes(b"console.log(1);")

    with pytest.raises(_RequestCaptured):
        S3Operations(client, "my-bucket").put_object("site/app.js", str(path), headers)

    sent = {
        name.lower(): value.decode() if isinstance(value, bytes) else value
        for name, value in captured.items()
    }
    assert sent.get("content-encoding") == expected_encoding
    assert "x-amz-trailer" not in sent
    assert "STREAMING" not in sent.get("x-amz-content-sha256", "")
