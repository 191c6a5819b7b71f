import boto3

from files_api.s3.write_objects import upload_s3_object
from tests.consts import TEST_BUCKET_NAME


def test__upload_s3_object(mocked_aws):
    s3_client = boto3.client("s3")
    object_key = "1234-test.txt"
    file_content = b"test content"
    content_type = "text/plain"

    upload_s3_object(
        bucket_name=TEST_BUCKET_NAME,
        object_key=object_key,
        file_content=file_content,
        content_type=content_type,
        s3_client=s3_client,
    )

    response = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=object_key)
    assert response["ContentType"] == content_type
    assert response["Body"].read() == file_content


def test__upload_s3_object__defaults_content_type(mocked_aws):
    s3_client = boto3.client("s3")

    upload_s3_object(TEST_BUCKET_NAME, "1234-blob", b"\x00\x01")

    response = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key="1234-blob")
    assert response["ContentType"] == "application/octet-stream"
