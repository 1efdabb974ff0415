# components/image_cropper.py
import streamlit as st
from streamlit_cropper import st_cropper
from typing import Dict, Any, Optional

from core.config import (
    CROP_BOX_COLOR,
    CROP_REALTIME_UPDATE,
    CROP_MIN_ZOOM,
    CROP_MAX_ZOOM,
    CROP_ZOOM_STEP,
)
from core.image_ops import CroppedFile, load_image, zoom_view
from services.image_service import ImageService
from .file_uploader import FileUploaderComponent


class ImageCropperComponent:
    """
    A reusable UI component for cropping a profile photo to a square.
    This component wraps the streamlit_cropper library and manages its state.
    """

    @staticmethod
    def render(image_bytes: bytes, key: str) -> Dict[str, Any]:
        """
        Renders the zoom slider, the cropper and the preview.

        Args:
            image_bytes: The raw bytes of the uploaded photo.
            key: A unique key for the cropper widgets.

        Returns:
            A dictionary with "cropped" (a CroppedFile once the user clicks
            "Set Profile Photo", else None) and "cancelled".
        """
        result = {"cropped": None, "cancelled": False}

        try:
            image = load_image(image_bytes)
        except ValueError as e:
            st.error(str(e))
            result["cancelled"] = True
            return result

        st.markdown("**Crop Profile Photo**")
        st.caption("Drag the box to choose the part of the photo to keep.")

        zoom = st.slider(
            "Zoom",
            min_value=CROP_MIN_ZOOM,
            max_value=CROP_MAX_ZOOM,
            value=CROP_MIN_ZOOM,
            step=CROP_ZOOM_STEP,
            key=f"zoom_{key}"
        )
        view, offset = zoom_view(image, zoom)

        box = st_cropper(
            view,
            realtime_update=CROP_REALTIME_UPDATE,
            box_color=CROP_BOX_COLOR,
            aspect_ratio=(1, 1),
            return_type="box",
            key=f"cropper_{key}_{zoom}"
        )

        success, message, cropped = ImageService.prepare_profile_photo(image, box, offset)
        if success:
            st.markdown("**Preview:**")
            st.image(cropped.preview(), width=160)
            st.caption(f"Crop dimensions: {cropped.width} x {cropped.height} pixels")
        else:
            st.warning(message)

        col1, col2 = st.columns(2)
        with col1:
            if st.button("✅ Set Profile Photo", type="primary", key=f"set_photo_{key}", disabled=not success):
                result["cropped"] = ImageService.confirm_profile_photo(cropped)
        with col2:
            if st.button("Cancel", key=f"cancel_crop_{key}"):
                result["cancelled"] = True

        return result

    @staticmethod
    def render_photo_field(app_state, form_key: str, current_url: Optional[str] = None) -> Optional[CroppedFile]:
        """
        Upload -> crop -> preview flow for a profile photo field.

        The pending upload and the finished crop are kept per form in app_state,
        so the field must be rendered outside any st.form.
        Returns the CroppedFile chosen for this form, if any.
        """
        cropped = app_state.cropped_photo.get(form_key)
        source = app_state.crop_source.get(form_key)

        if source is not None:
            result = ImageCropperComponent.render(source, form_key)
            if result["cropped"] is not None or result["cancelled"]:
                if result["cropped"] is not None:
                    app_state.cropped_photo[form_key] = result["cropped"]
                app_state.crop_source.pop(form_key, None)
                # New uploader key so the consumed file is not picked up again
                app_state.uploader_version[form_key] = app_state.uploader_version.get(form_key, 0) + 1
                st.rerun()
            return cropped

        col1, col2 = st.columns([1, 3])
        with col1:
            if cropped is not None:
                st.image(cropped.preview(), width=96, caption="New photo")
                if st.button("Remove photo", key=f"remove_photo_{form_key}"):
                    app_state.cropped_photo.pop(form_key, None)
                    st.rerun()
            elif current_url:
                st.image(current_url, width=96, caption="Current photo")
        with col2:
            version = app_state.uploader_version.get(form_key, 0)
            image_bytes = FileUploaderComponent.render_photo_uploader(key=f"photo_upload_{form_key}_{version}")
            if image_bytes:
                app_state.crop_source[form_key] = image_bytes
                st.rerun()

        return cropped
