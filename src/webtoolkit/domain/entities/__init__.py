"""Domain entities for webtoolkit."""

from webtoolkit.domain.entities.uploaded_file import UploadedFile

__all__ = ["UploadedFile"]
