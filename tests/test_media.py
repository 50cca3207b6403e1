import asyncio
import io
from unittest.mock import patch

import pytest
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import UploadFile

from tienda.config.settings import settings
from tienda.core.exceptions import InvalidType, TooLarge, UploadFailed
from tienda.modules.media.service import CloudinaryBackend, LocalStorageBackend, MediaService

UPLOAD_URL = "/api/v1/admin/uploads"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def local_uploads(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_backend", "local")
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


def make_upload(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers={"content-type": content_type}
    )


# ==================== DISCO LOCAL ====================

def test_local_upload_writes_file(client, local_uploads):
    response = client.post(UPLOAD_URL, files={"file": ("foto.png", PNG_BYTES, "image/png")})

    assert response.status_code == 201
    url = response.json()["url"]
    assert url.startswith("/uploads/")
    assert url.endswith(".png")
    saved = local_uploads / url.rsplit("/", 1)[1]
    assert saved.read_bytes() == PNG_BYTES


def test_local_upload_generates_unique_names(client, local_uploads):
    urls = {
        client.post(UPLOAD_URL, files={"file": ("a.jpg", b"jpeg", "image/jpeg")}).json()["url"]
        for _ in range(3)
    }

    assert len(urls) == 3


def test_local_upload_rejects_video(client, local_uploads):
    response = client.post(UPLOAD_URL, files={"file": ("clip.mp4", b"video", "video/mp4")})

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_type"
    assert list(local_uploads.iterdir()) == []


def test_local_upload_rejects_large_file(client, local_uploads, monkeypatch):
    monkeypatch.setattr(settings, "max_local_image_size", 10)

    response = client.post(UPLOAD_URL, files={"file": ("big.png", PNG_BYTES, "image/png")})

    assert response.status_code == 400
    assert response.json()["code"] == "too_large"
    assert list(local_uploads.iterdir()) == []


def test_local_backend_write_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    backend = LocalStorageBackend(upload_dir=str(blocker / "sub"), url_prefix="/uploads", max_size=1024)

    with pytest.raises(UploadFailed):
        backend.save(b"data", "image/png")


# ==================== CLOUDINARY ====================

@pytest.fixture
def cloudinary_service(monkeypatch):
    monkeypatch.setattr(settings, "cloudinary_cloud_name", "demo")
    monkeypatch.setattr(settings, "cloudinary_api_key", "key")
    monkeypatch.setattr(settings, "cloudinary_api_secret", "secret")
    backend = CloudinaryBackend(folder="daian-store", max_image_size=100, max_video_size=1000)
    return MediaService(backend=backend)


def test_cloudinary_uploads_video(cloudinary_service):
    upload = make_upload(b"v" * 500, "clip.mp4", "video/mp4")
    result_payload = {"secure_url": "https://res.cloudinary.com/demo/video/upload/clip.mp4"}

    with patch("tienda.modules.media.service.cloudinary.uploader.upload", return_value=result_payload) as upload_call:
        result = asyncio.run(cloudinary_service.upload(upload))

    assert result == {"url": "https://res.cloudinary.com/demo/video/upload/clip.mp4"}
    assert upload_call.call_args.kwargs["resource_type"] == "video"
    assert upload_call.call_args.kwargs["folder"] == "daian-store"


def test_cloudinary_image_size_limit(cloudinary_service):
    upload = make_upload(b"i" * 500, "foto.png", "image/png")

    with patch("tienda.modules.media.service.cloudinary.uploader.upload") as upload_call:
        with pytest.raises(TooLarge):
            asyncio.run(cloudinary_service.upload(upload))

    upload_call.assert_not_called()


def test_cloudinary_rejects_unknown_type(cloudinary_service):
    upload = make_upload(b"%PDF", "doc.pdf", "application/pdf")

    with pytest.raises(InvalidType):
        asyncio.run(cloudinary_service.upload(upload))


def test_cloudinary_api_error(cloudinary_service):
    upload = make_upload(b"i" * 10, "foto.png", "image/png")

    with patch(
        "tienda.modules.media.service.cloudinary.uploader.upload",
        side_effect=CloudinaryError("Invalid API key")
    ):
        with pytest.raises(UploadFailed):
            asyncio.run(cloudinary_service.upload(upload))
