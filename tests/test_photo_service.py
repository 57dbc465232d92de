import pytest

from recolour.photos.service import PhotoService, UnsupportedFileTypeError


@pytest.fixture
def photo_service(tmp_path):
    return PhotoService(tmp_path / "uploads", url_prefix="/api/assets/uploads/")


def test_upload_writes_image_and_thumbnail(photo_service, tmp_path):
    photo = photo_service.upload("7", b"image-bytes", b"thumb-bytes", "Final Shot.JPG")

    assert photo.id == "upload-7-1"
    assert photo.label == "Final Shot.JPG"
    assert photo.file_name == "upload-7-1.jpg"
    assert photo.image_url == "/api/assets/uploads/7/upload-7-1.jpg"
    assert photo.thumbnail_url == "/api/assets/uploads/7/thumbnails/upload-7-1.jpg"
    assert (tmp_path / "uploads" / "7" / "upload-7-1.jpg").read_bytes() == b"image-bytes"
    assert (tmp_path / "uploads" / "7" / "thumbnails" / "upload-7-1.jpg").read_bytes() == b"thumb-bytes"


def test_upload_ids_are_unique(photo_service):
    first = photo_service.upload("7", b"a", b"a", "one.png")
    second = photo_service.upload("7", b"b", b"b", "two.webp")

    assert first.id != second.id
    assert second.file_name == "upload-7-2.webp"


@pytest.mark.parametrize("file_name", ["animation.gif", "notes.txt", "no-extension"])
def test_upload_rejects_unsupported_types(photo_service, tmp_path, file_name):
    with pytest.raises(UnsupportedFileTypeError):
        photo_service.upload("7", b"a", b"a", file_name)

    assert not (tmp_path / "uploads").exists()


def test_delete_files_is_idempotent(photo_service, tmp_path):
    photo = photo_service.upload("7", b"a", b"a", "one.jpeg")

    photo_service.delete_files("7", photo.file_name)
    photo_service.delete_files("7", photo.file_name)

    assert not (tmp_path / "uploads" / "7" / photo.file_name).exists()
    assert not (tmp_path / "uploads" / "7" / "thumbnails" / photo.file_name).exists()
