from .base import SlidesBackend
from .google_slides import GoogleSlidesBackend
from .pptx_backend import PptxBackend

__all__ = ["SlidesBackend", "GoogleSlidesBackend", "PptxBackend"]
