import logging
from io import BytesIO

import pytest
from PIL import Image

from services.image_service import ImageService


class FakeUpload:
    """Mimics streamlit's UploadedFile."""

    def __init__(self, name, content):
        self.name = name
        self.size = len(content)
        self._content = content

    def getvalue(self):
        return self._content


def png_bytes(size=(40, 20), color=(255, 255, 255)):
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_validate_upload_accepts_png():
    assert ImageService.validate_upload(FakeUpload("me.PNG", png_bytes())) == (True, "File is valid.")


@pytest.mark.parametrize("upload, fragment", [
    (None, "No file"),
    (FakeUpload("notes.txt", b"hello"), "Unsupported format"),
    (FakeUpload("broken.jpg", b"not an image"), "Unable to read image"),
])
def test_validate_upload_rejects(upload, fragment):
    success, message = ImageService.validate_upload(upload)
    assert success is False
    assert fragment in message


def test_validate_upload_rejects_large_files():
    upload = FakeUpload("big.jpg", png_bytes())
    upload.size = 11 * 1024 * 1024
    success, message = ImageService.validate_upload(upload)
    assert success is False
    assert "too large" in message


def test_prepare_profile_photo_applies_zoom_offset():
    # Left half black, right half white
    image = Image.new("RGB", (40, 20), (0, 0, 0))
    image.paste((255, 255, 255), (20, 0, 40, 20))
    buffer = BytesIO()
    image.save(buffer, format="PNG")

    box = {"left": 0, "top": 0, "width": 16, "height": 16}
    _, _, plain = ImageService.prepare_profile_photo(buffer.getvalue(), box)
    _, _, shifted = ImageService.prepare_profile_photo(buffer.getvalue(), box, zoom_offset=(22, 2))

    assert (plain.width, plain.height) == (16, 16)
    assert plain.preview().convert("L").getpixel((4, 4)) < 30
    assert shifted.preview().convert("L").getpixel((4, 4)) > 225


def test_prepare_profile_photo_rejects_empty_box():
    success, message, photo = ImageService.prepare_profile_photo(png_bytes(), {"width": 0, "height": 0})
    assert success is False
    assert message.startswith("Failed to crop image")
    assert photo is None


def test_preview_crop_does_not_log_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="services.image_service"):
        success, _, _ = ImageService.prepare_profile_photo(png_bytes(), {"left": 0, "top": 0, "width": 10, "height": 10})

    assert success
    assert [r for r in caplog.records if r.levelno == logging.INFO] == []


def test_confirm_profile_photo_logs_once(caplog):
    _, _, cropped = ImageService.prepare_profile_photo(png_bytes(), {"left": 0, "top": 0, "width": 10, "height": 10})

    with caplog.at_level(logging.INFO, logger="services.image_service"):
        assert ImageService.confirm_profile_photo(cropped) is cropped

    assert caplog.messages == ["Profile photo set to 10x10"]
