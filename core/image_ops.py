from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from .config import CROP_OUTPUT_FILENAME, CROP_JPEG_QUALITY, CROP_MIN_ZOOM, CROP_MAX_ZOOM

ImageSource = Union[bytes, bytearray, str, Path, BytesIO, Image.Image]


@dataclass(frozen=True)
class CropArea:
    """A crop rectangle in source-image pixels."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_box(cls, box: Dict) -> "CropArea":
        """
        Build from the cropper widget's box.

        Supports { left, top, width, height } and { x, y, width, height }.
        """
        x = box.get("left", box.get("x", 0))
        y = box.get("top", box.get("y", 0))
        return cls(
            x=int(round(float(x))),
            y=int(round(float(y))),
            width=int(round(float(box.get("width", 0)))),
            height=int(round(float(box.get("height", 0)))),
        )

    def translate(self, dx: int, dy: int) -> "CropArea":
        return CropArea(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class CroppedFile:
    """An encoded crop, ready to be attached to a multipart upload."""
    name: str
    content: bytes
    width: int
    height: int
    content_type: str = "image/jpeg"

    def preview(self) -> Image.Image:
        return Image.open(BytesIO(self.content))

    def as_upload(self) -> Tuple[str, bytes, str]:
        return self.name, self.content, self.content_type


def load_image(source: ImageSource) -> Image.Image:
    """Open an image from bytes, a file-like object or a path, honouring EXIF orientation."""
    if isinstance(source, Image.Image):
        return source
    try:
        if isinstance(source, (bytes, bytearray)):
            img = Image.open(BytesIO(source))
        else:
            img = Image.open(source)
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Unable to read image: {e}") from e
    return ImageOps.exif_transpose(img)


def zoom_view(image: Image.Image, zoom: float) -> Tuple[Image.Image, Tuple[int, int]]:
    """
    Zoom into the centre of the image.

    Returns the visible region and its (dx, dy) offset, so a crop drawn on the
    view can be mapped back onto the source with CropArea.translate(dx, dy).
    """
    zoom = max(CROP_MIN_ZOOM, min(float(zoom), CROP_MAX_ZOOM))
    img_w, img_h = image.size
    view_w = max(1, int(round(img_w / zoom)))
    view_h = max(1, int(round(img_h / zoom)))
    left = (img_w - view_w) // 2
    top = (img_h - view_h) // 2
    return image.crop((left, top, left + view_w, top + view_h)), (left, top)


def get_cropped_image(
    source: ImageSource,
    pixel_crop: CropArea,
    file_name: str = CROP_OUTPUT_FILENAME,
    quality: int = CROP_JPEG_QUALITY,
) -> CroppedFile:
    """
    Extract pixel_crop from the source and encode it as a JPEG file.

    The output is always exactly pixel_crop.width x pixel_crop.height. Parts of
    the crop lying outside the source image come out black.
    """
    if pixel_crop.width <= 0 or pixel_crop.height <= 0:
        raise ValueError("Canvas is empty")

    image = load_image(source)

    # Flatten onto black: JPEG has no alpha channel
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        flattened = Image.new("RGB", rgba.size, (0, 0, 0))
        flattened.paste(rgba, mask=rgba.split()[3])
        image = flattened
    elif image.mode != "RGB":
        image = image.convert("RGB")

    canvas = Image.new("RGB", (pixel_crop.width, pixel_crop.height), (0, 0, 0))
    region = image.crop((
        pixel_crop.x,
        pixel_crop.y,
        pixel_crop.x + pixel_crop.width,
        pixel_crop.y + pixel_crop.height,
    ))
    canvas.paste(region, (0, 0))

    buffer = BytesIO()
    canvas.save(buffer, format="JPEG", quality=quality)

    return CroppedFile(
        name=file_name,
        content=buffer.getvalue(),
        width=canvas.width,
        height=canvas.height,
    )
