"""Storage of partner-uploaded photos."""

from .service import ALLOWED_EXTENSIONS, PhotoService, UnsupportedFileTypeError

__all__ = ["ALLOWED_EXTENSIONS", "PhotoService", "UnsupportedFileTypeError"]
