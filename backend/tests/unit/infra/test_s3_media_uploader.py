"""S3 uploader with a fake boto3 client."""

from __future__ import annotations

import io
import os

import pytest
from botocore.exceptions import ClientError
from werkzeug.datastructures import FileStorage

from vidtube.core.settings import MediaSettings
from vidtube.infra.storage import S3MediaUploader
from vidtube.services._shared.errors import MediaUploadError


class FakeS3Client:
    """Records calls; ``fail`` makes ``upload_file`` raise like boto3 does."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.uploads: list[tuple[str, str, str, dict]] = []
        self.deleted: list[tuple[str, str]] = []
        self.staged_existed: list[bool] = []

    def upload_file(self, path, bucket, key, ExtraArgs=None):
        self.staged_existed.append(os.path.exists(path))
        if self.fail:
            raise ClientError({"Error": {"Code": "503", "Message": "Slow Down"}}, "PutObject")
        self.uploads.append((path, bucket, key, ExtraArgs or {}))

    def delete_object(self, Bucket, Key):
        if self.fail:
            raise ClientError({"Error": {"Code": "500", "Message": "boom"}}, "DeleteObject")
        self.deleted.append((Bucket, Key))


def _settings(tmp_path, **overrides) -> MediaSettings:
    values = {"backend": "s3", "bucket": "media", "temp_dir": str(tmp_path / "staging")}
    values.update(overrides)
    return MediaSettings(**values)


def _file(name: str = "clip.mp4", data: bytes = b"0123456789") -> FileStorage:
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type="video/mp4")


def test_upload_pushes_file_and_removes_staged_copy(tmp_path):
    client = FakeS3Client()
    uploader = S3MediaUploader(
        _settings(tmp_path, public_base_url="https://cdn.example.com/"),
        client_factory=lambda s: client,
    )

    media = uploader.upload(_file(), folder="videos")

    path, bucket, key, extra = client.uploads[0]
    assert client.staged_existed == [True]
    assert not os.path.exists(path)
    assert bucket == "media"
    assert key.startswith("videos/") and key.endswith(".mp4")
    assert extra == {"ContentType": "video/mp4"}
    assert media.key == key
    assert media.size == 10
    assert media.url == f"https://cdn.example.com/{key}"


def test_failed_upload_raises_and_still_removes_staged_copy(tmp_path):
    client = FakeS3Client(fail=True)
    uploader = S3MediaUploader(_settings(tmp_path), client_factory=lambda s: client)

    with pytest.raises(MediaUploadError):
        uploader.upload(_file(), folder="videos")

    assert client.staged_existed == [True]
    assert os.listdir(tmp_path / "staging") == []


@pytest.mark.parametrize(
    "overrides,expected_prefix",
    [
        ({"endpoint_url": "http://minio:9000"}, "http://minio:9000/media/"),
        ({"region": "eu-west-1"}, "https://media.s3.eu-west-1.amazonaws.com/"),
    ],
)
def test_public_url_variants(tmp_path, overrides, expected_prefix):
    uploader = S3MediaUploader(_settings(tmp_path, **overrides), client_factory=lambda s: None)
    assert uploader.public_url("avatars/a.png") == f"{expected_prefix}avatars/a.png"


def test_delete_is_best_effort(tmp_path):
    client = FakeS3Client(fail=True)
    uploader = S3MediaUploader(_settings(tmp_path), client_factory=lambda s: client)
    uploader.delete("videos/missing.mp4")  # must not raise


def test_client_is_created_lazily_once(tmp_path):
    calls = []

    def factory(settings):
        calls.append(settings)
        return FakeS3Client()

    uploader = S3MediaUploader(_settings(tmp_path), client_factory=factory)
    assert calls == []
    uploader.delete("a")
    uploader.delete("b")
    assert len(calls) == 1
