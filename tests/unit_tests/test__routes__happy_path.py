import re

from fastapi import status
from fastapi.testclient import TestClient

from tests.consts import TEST_BUCKET_HOST, TEST_BUCKET_NAME

TEST_FILE_NAME = "a.png"
TEST_FILE_CONTENT = b"\x01\x02"
TEST_FILE_CONTENT_TYPE = "image/png"


def upload(client: TestClient, name: str = TEST_FILE_NAME, content: bytes = TEST_FILE_CONTENT):
    return client.post(
        "/file",
        files={"file": (name, content, TEST_FILE_CONTENT_TYPE)},
    )


def test__upload_file__happy_path(client: TestClient, s3_client):
    response = upload(client)

    assert response.status_code == status.HTTP_201_CREATED
    url = response.json()["url"]
    assert re.fullmatch(rf"https://{re.escape(TEST_BUCKET_HOST)}/[0-9a-f-]{{36}}-a\.png", url)

    key = url.split(f"{TEST_BUCKET_HOST}/", 1)[1]
    stored = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=key)
    assert stored["Body"].read() == TEST_FILE_CONTENT
    assert stored["ContentType"] == TEST_FILE_CONTENT_TYPE


def test__delete_file__happy_path(client: TestClient, s3_client):
    url = upload(client).json()["url"]

    response = client.request("DELETE", "/file/anything", json={"path": url})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "File deleted successfully"}
    assert s3_client.list_objects_v2(Bucket=TEST_BUCKET_NAME)["KeyCount"] == 0


def test__delete_file__twice_succeeds(client: TestClient):
    url = upload(client).json()["url"]

    client.request("DELETE", "/file/1", json={"path": url})
    response = client.request("DELETE", "/file/1", json={"path": url})

    assert response.status_code == status.HTTP_200_OK


def test__update_file__happy_path(client: TestClient, s3_client):
    old_url = upload(client).json()["url"]

    response = client.put(
        "/file/1",
        files={"file": ("b.png", b"\x03\x04", TEST_FILE_CONTENT_TYPE)},
        data={"path": old_url},
    )

    assert response.status_code == status.HTTP_200_OK
    new_url = response.json()["url"]
    assert new_url != old_url
    assert new_url.endswith("-b.png")

    keys = [obj["Key"] for obj in s3_client.list_objects_v2(Bucket=TEST_BUCKET_NAME)["Contents"]]
    assert keys == [new_url.split(f"{TEST_BUCKET_HOST}/", 1)[1]]


def test__upload_delete_update_scenario(client: TestClient):
    first_url = upload(client).json()["url"]
    assert first_url.endswith("-a.png")

    response = client.request("DELETE", "/file/1", json={"path": first_url})
    assert response.json() == {"message": "File deleted successfully"}

    response = client.put(
        "/file/1",
        files={"file": (TEST_FILE_NAME, b"\x05\x06", TEST_FILE_CONTENT_TYPE)},
        data={"path": first_url},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["url"] != first_url


def test__health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "bucket": TEST_BUCKET_NAME}
