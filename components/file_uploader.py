# components/file_uploader.py
import streamlit as st
from typing import Optional

from core.config import SUPPORTED_IMAGE_FORMATS, MAX_IMAGE_SIZE_MB
from services.image_service import ImageService


class FileUploaderComponent:
    """
    Reusable UI component for uploading a profile photo with validation.
    This component focuses on rendering widgets and returning the user's input.
    """

    @staticmethod
    def render_photo_uploader(
        key: str,
        label: str = "Profile Photo",
        help_text: str = None
    ) -> Optional[bytes]:
        """
        Renders a single-file image uploader.

        Returns:
            The raw bytes of a valid upload, or None.
        """
        if help_text is None:
            help_text = (f"Supported formats: {', '.join(SUPPORTED_IMAGE_FORMATS).upper()}. "
                         f"Maximum size: {MAX_IMAGE_SIZE_MB}MB.")

        uploaded_file = st.file_uploader(
            label=label,
            type=SUPPORTED_IMAGE_FORMATS,
            accept_multiple_files=False,
            help=help_text,
            key=key
        )
        if uploaded_file is None:
            return None

        is_valid, message = ImageService.validate_upload(uploaded_file)
        if not is_valid:
            st.error(message)
            return None
        return uploaded_file.getvalue()
