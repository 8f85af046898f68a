"""Multipart file upload handling.

Files are validated by sniffing their leading bytes, then streamed to disk one
at a time in form order. A failure stops the batch; files already written stay
on disk and are reported on the raised UploadError.
"""

from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import Request
from python_multipart.exceptions import FormParserError
from starlette.datastructures import UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser

from webtoolkit.core.config import ToolkitConfig
from webtoolkit.core.exceptions import ErrorKind, FilesystemError, UploadError
from webtoolkit.core.logging import get_logger
from webtoolkit.domain.entities.uploaded_file import UploadedFile
from webtoolkit.domain.services.content_sniffer import SNIFF_LENGTH, detect_content_type
from webtoolkit.domain.services.file_storage_service import FileStorageService
from webtoolkit.infrastructure.api.request_body import BodyLimitExceeded, iter_limited_body

logger = get_logger(__name__)

MULTIPART_CONTENT_TYPE = "multipart/form-data"


class UploadTooLarge(MultiPartException):
    """Body limit overflow raised from inside the multipart parser's stream."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"request body exceeds {limit} bytes")


async def _parser_stream(request: Request, limit: int) -> AsyncIterator[bytes]:
    try:
        async for chunk in iter_limited_body(request, limit):
            yield chunk
    except BodyLimitExceeded as e:
        raise UploadTooLarge(e.limit) from e


class UploadHandler:
    """Validate and store the file parts of multipart requests."""

    def __init__(self, config: ToolkitConfig, storage: FileStorageService | None = None) -> None:
        self.config = config
        self.storage = storage or FileStorageService()

    async def upload_files(
        self,
        request: Request,
        upload_dir: str | Path,
        rename: bool = True,
    ) -> list[UploadedFile]:
        """Store every file part of a multipart request in ``upload_dir``.

        Args:
            request: Incoming multipart/form-data request.
            upload_dir: Destination directory, created if missing.
            rename: Store files under a random name keeping the original
                extension. When False the client's file name is used as-is
                and an existing file with that name is overwritten.

        Returns:
            One record per stored file, in form order.

        Raises:
            FilesystemError: If ``upload_dir`` cannot be created.
            UploadError: If the body is too large or malformed, or a file is
                rejected or cannot be written.
        """
        self.storage.create_dir_if_not_exists(upload_dir)

        content_type = request.headers.get("content-type", "")
        if not content_type.lower().startswith(MULTIPART_CONTENT_TYPE):
            raise UploadError("the request is not multipart/form-data", ErrorKind.MALFORMED_FORM)

        max_size = self.config.max_file_size
        # Plain fields are bounded by the body limit only
        parser = MultiPartParser(
            request.headers,
            _parser_stream(request, max_size),
            max_part_size=max_size,
        )
        try:
            form = await parser.parse()
        except UploadTooLarge as e:
            logger.warning("Upload rejected", reason="body too large", limit=max_size)
            raise UploadError("the uploaded file is too big", ErrorKind.BODY_TOO_LARGE) from e
        except (MultiPartException, FormParserError) as e:
            logger.warning("Upload rejected", reason="malformed form", error=str(e))
            raise UploadError(
                f"the multipart form could not be parsed: {e}",
                ErrorKind.MALFORMED_FORM,
            ) from e

        uploaded_files: list[UploadedFile] = []
        try:
            for _, value in form.multi_items():
                if not isinstance(value, UploadFile):
                    continue
                uploaded_files.append(
                    await self._store_file(value, Path(upload_dir), rename, uploaded_files)
                )
        finally:
            await form.close()

        logger.info(
            "Files uploaded",
            directory=str(upload_dir),
            count=len(uploaded_files),
            size=sum(f.file_size for f in uploaded_files),
        )
        return uploaded_files

    async def upload_one_file(
        self,
        request: Request,
        upload_dir: str | Path,
        rename: bool = True,
    ) -> UploadedFile:
        """Store a single uploaded file and return its record.

        Raises:
            UploadError: As ``upload_files``, or with kind MISSING_FILE when
                the request carries no file part.
        """
        files = await self.upload_files(request, upload_dir, rename=rename)
        if not files:
            raise UploadError("no file was uploaded", ErrorKind.MISSING_FILE)
        return files[0]

    async def _store_file(
        self,
        upload: UploadFile,
        upload_dir: Path,
        rename: bool,
        uploaded_so_far: list[UploadedFile],
    ) -> UploadedFile:
        # Directory components are dropped from client-supplied names
        original_name = Path(upload.filename or "").name

        sample = await upload.read(SNIFF_LENGTH)
        detected_type = detect_content_type(sample)
        if not self.config.is_mime_type_allowed(detected_type):
            logger.warning(
                "Upload rejected",
                reason="file type not permitted",
                filename=original_name,
                detected_type=detected_type,
            )
            raise UploadError(
                "the uploaded file type is not permitted",
                ErrorKind.UNSUPPORTED_FILE_TYPE,
                uploaded_files=uploaded_so_far,
            )
        await upload.seek(0)

        new_name = self.storage.generate_stored_filename(original_name, rename=rename)
        try:
            size = await self.storage.save_stream(upload_dir, new_name, upload)
        except FilesystemError as e:
            logger.warning("Upload rejected", reason="write failed", filename=original_name, error=e.message)
            raise UploadError(
                e.message,
                ErrorKind.FILESYSTEM_FAILURE,
                uploaded_files=uploaded_so_far,
            ) from e

        return UploadedFile(
            new_file_name=new_name,
            original_file_name=original_name,
            file_size=size,
        )
