# Components module for the CBMS Marriage Fund app
# Reusable UI components for better modularity

from .image_cropper import ImageCropperComponent
from .file_uploader import FileUploaderComponent

__all__ = [
    'ImageCropperComponent',
    'FileUploaderComponent'
]
