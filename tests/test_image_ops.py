from io import BytesIO

import pytest
from PIL import Image

from core.image_ops import CropArea, get_cropped_image, load_image, zoom_view


def png_bytes(size=(100, 80), color=(255, 0, 0), mode="RGB"):
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_crop_area_from_box_variants():
    assert CropArea.from_box({"left": 10.4, "top": 5.6, "width": 50, "height": 50}) == CropArea(10, 6, 50, 50)
    assert CropArea.from_box({"x": 1, "y": 2, "width": 3, "height": 4}) == CropArea(1, 2, 3, 4)
    assert CropArea(1, 2, 3, 4).translate(10, 20) == CropArea(11, 22, 3, 4)


def test_cropped_file_is_jpeg_of_exact_size():
    cropped = get_cropped_image(png_bytes(), CropArea(10, 10, 40, 30))

    assert cropped.name == "profile_cropped.jpg"
    assert cropped.content_type == "image/jpeg"
    assert (cropped.width, cropped.height) == (40, 30)

    preview = cropped.preview()
    assert preview.format == "JPEG"
    assert preview.size == (40, 30)
    r, g, b = preview.convert("RGB").getpixel((20, 15))
    assert r > 200 and g < 60 and b < 60


def test_area_outside_source_stays_black():
    cropped = get_cropped_image(png_bytes(size=(20, 20), color=(255, 255, 255)), CropArea(10, 10, 20, 20))
    preview = cropped.preview().convert("RGB")

    assert preview.size == (20, 20)
    inside = preview.getpixel((2, 2))
    outside = preview.getpixel((17, 17))
    assert min(inside) > 200
    assert max(outside) < 40


def test_transparent_pixels_flatten_to_black():
    cropped = get_cropped_image(png_bytes(size=(10, 10), color=(0, 255, 0, 0), mode="RGBA"), CropArea(0, 0, 10, 10))
    assert max(cropped.preview().convert("RGB").getpixel((5, 5))) < 40


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-5, 5)])
def test_empty_crop_is_rejected(width, height):
    with pytest.raises(ValueError, match="Canvas is empty"):
        get_cropped_image(png_bytes(), CropArea(0, 0, width, height))


def test_unreadable_image_raises_value_error():
    with pytest.raises(ValueError, match="Unable to read image"):
        load_image(b"definitely not an image")


def test_zoom_view_centres_and_reports_offset():
    image = Image.new("RGB", (200, 100))

    view, offset = zoom_view(image, 2.0)
    assert view.size == (100, 50)
    assert offset == (50, 25)

    view, offset = zoom_view(image, 10)
    assert view.size == (67, 33)

    view, offset = zoom_view(image, 0.5)
    assert view.size == (200, 100)
    assert offset == (0, 0)
