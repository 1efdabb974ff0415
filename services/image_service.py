# services/image_service.py
import logging
import os
from typing import Any, Dict, Optional, Tuple

from core.config import SUPPORTED_IMAGE_FORMATS, MAX_IMAGE_SIZE_MB
from core.image_ops import CropArea, CroppedFile, get_cropped_image, load_image, ImageSource

logger = logging.getLogger(__name__)


class ImageService:
    """Service layer for profile photo uploads and cropping."""

    @staticmethod
    def validate_upload(uploaded_file) -> Tuple[bool, str]:
        """Checks the extension and size of a Streamlit UploadedFile."""
        if uploaded_file is None:
            return False, "No file was provided."

        extension = os.path.splitext(uploaded_file.name)[1].lower().lstrip(".")
        if extension not in SUPPORTED_IMAGE_FORMATS:
            return False, f"Unsupported format. Use {', '.join(SUPPORTED_IMAGE_FORMATS).upper()}."

        size_mb = uploaded_file.size / (1024 * 1024)
        if size_mb > MAX_IMAGE_SIZE_MB:
            return False, f"File is too large ({size_mb:.1f}MB). Maximum is {MAX_IMAGE_SIZE_MB}MB."

        try:
            load_image(uploaded_file.getvalue())
        except ValueError as e:
            return False, str(e)
        return True, "File is valid."

    @staticmethod
    def prepare_profile_photo(
        source: ImageSource,
        box: Dict[str, Any],
        zoom_offset: Optional[Tuple[int, int]] = None,
    ) -> Tuple[bool, str, Optional[CroppedFile]]:
        """
        Crops the selected box out of the source image.

        `box` is in the coordinates of the (possibly zoomed) view shown to the
        user; `zoom_offset` maps it back onto the full image.
        """
        try:
            area = CropArea.from_box(box or {})
            if zoom_offset:
                area = area.translate(*zoom_offset)
            cropped = get_cropped_image(source, area)
            return True, "Photo cropped.", cropped
        except ValueError as e:
            logger.error(f"Error cropping profile photo: {e}")
            return False, f"Failed to crop image: {e}", None

    @staticmethod
    def confirm_profile_photo(cropped: CroppedFile) -> CroppedFile:
        """Called once when the user accepts a crop; the live preview crops on every rerun."""
        logger.info(f"Profile photo set to {cropped.width}x{cropped.height}")
        return cropped
