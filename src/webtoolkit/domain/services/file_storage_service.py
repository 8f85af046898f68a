"""File storage service for the local filesystem."""

from pathlib import Path
from typing import Protocol

from webtoolkit.core.exceptions import FilesystemError
from webtoolkit.core.logging import get_logger
from webtoolkit.domain.services.random_string_generator import RandomStringGenerator

logger = get_logger(__name__)

DIRECTORY_MODE = 0o755
RANDOM_NAME_LENGTH = 25
COPY_CHUNK_SIZE = 64 * 1024


class AsyncReadable(Protocol):
    """Anything with an awaitable ``read(size)``, such as an UploadFile."""

    async def read(self, size: int = -1) -> bytes: ...


class FileStorageService:
    """Service for directory and file operations under caller-chosen paths."""

    def create_dir_if_not_exists(self, path: str | Path) -> Path:
        """Create a directory and any missing parents.

        Calling this again for an existing directory is a no-op.

        Raises:
            FilesystemError: If the directory cannot be created or the path
                exists and is not a directory.
        """
        directory = Path(path)
        try:
            directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"could not create directory '{directory}': {e}") from e
        return directory

    def generate_stored_filename(self, original_filename: str, rename: bool = True) -> str:
        if not rename:
            return original_filename
        suffix = Path(original_filename).suffix
        return f"{RandomStringGenerator.generate(RANDOM_NAME_LENGTH)}{suffix}"

    async def save_stream(self, directory: str | Path, filename: str, source: AsyncReadable) -> int:
        """Copy ``source`` into a new file and return the number of bytes written.

        An existing file with the same name is overwritten.

        Raises:
            FilesystemError: If the destination cannot be created or written.
        """
        file_path = Path(directory) / filename
        written = 0
        try:
            with open(file_path, "wb") as f:
                while True:
                    chunk = await source.read(COPY_CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    written += len(chunk)
        except OSError as e:
            raise FilesystemError(f"could not write file '{filename}': {e}") from e

        logger.debug("File written", path=str(file_path), size=written)
        return written
