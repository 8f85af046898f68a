"""Static file downloads forced to save as attachments."""

from pathlib import Path
from urllib.parse import quote

from fastapi.responses import FileResponse

from webtoolkit.core.exceptions import ErrorKind, FilesystemError
from webtoolkit.core.logging import get_logger

logger = get_logger(__name__)


def content_disposition(display_name: str) -> str:
    """Build an ``attachment`` Content-Disposition header value.

    ASCII names produce ``attachment; filename="<name>"``. Other names get an
    ASCII fallback plus an RFC 5987 ``filename*`` parameter.
    """
    escaped = display_name.replace("\\", "\\\\").replace('"', '\\"')
    if display_name.isascii():
        return f'attachment; filename="{escaped}"'
    fallback = quote(display_name)
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quote(display_name)}"


def download_static_file(directory: str | Path, file_name: str, display_name: str) -> FileResponse:
    """Return a response streaming ``directory/file_name`` as an attachment.

    Args:
        directory: Base directory the file must live in.
        file_name: Name of the file on disk, relative to ``directory``.
        display_name: File name the client is told to save as.

    Raises:
        FilesystemError: If the path escapes ``directory`` or the file does
            not exist.
    """
    base = Path(directory).resolve()
    file_path = (base / file_name).resolve()
    if not file_path.is_relative_to(base):
        logger.warning("Download rejected", reason="path outside directory", file_name=file_name)
        raise FilesystemError("invalid file path")
    if not file_path.is_file():
        logger.warning("Download rejected", reason="not found", file_name=file_name)
        raise FilesystemError(f"file not found: {file_name}", ErrorKind.FILE_NOT_FOUND)

    logger.info("File download", path=str(file_path), display_name=display_name)
    return FileResponse(
        path=file_path,
        headers={"Content-Disposition": content_disposition(display_name)},
    )
