"""Domain services for webtoolkit.

Services contain the framework-independent logic: identifiers, slugs,
content sniffing and local file storage.
"""

from webtoolkit.domain.services.content_sniffer import (
    SNIFF_LENGTH,
    detect_content_type,
)
from webtoolkit.domain.services.file_storage_service import FileStorageService
from webtoolkit.domain.services.random_string_generator import RandomStringGenerator
from webtoolkit.domain.services.slug_generator import SlugGenerator

__all__ = [
    "FileStorageService",
    "RandomStringGenerator",
    "SNIFF_LENGTH",
    "SlugGenerator",
    "detect_content_type",
]
