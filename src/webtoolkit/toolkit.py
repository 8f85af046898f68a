"""Toolkit facade.

A Toolkit holds a caller-owned ToolkitConfig and exposes every helper as a
method that reads that configuration at call time.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

import httpx
from fastapi import Request, Response
from fastapi.responses import FileResponse

from webtoolkit.core.config import ToolkitConfig
from webtoolkit.domain.entities.uploaded_file import UploadedFile
from webtoolkit.domain.services.file_storage_service import FileStorageService
from webtoolkit.domain.services.random_string_generator import RandomStringGenerator
from webtoolkit.domain.services.slug_generator import SlugGenerator
from webtoolkit.infrastructure.api import downloads, json_reader, json_responses
from webtoolkit.infrastructure.api.uploads import UploadHandler
from webtoolkit.infrastructure.services import remote_json_client

T = TypeVar("T")


class Toolkit:
    """Utility operations for web request handlers.

    Example:
        toolkit = Toolkit(ToolkitConfig(allowed_mime_types=["image/png"]))

        @app.post("/upload")
        async def upload(request: Request):
            try:
                files = await toolkit.upload_files(request, "./uploads")
            except ToolkitError as e:
                return toolkit.error_json(e)
            return toolkit.write_json({"files": files}, status_code=201)
    """

    def __init__(self, config: ToolkitConfig | None = None) -> None:
        self.config = config if config is not None else ToolkitConfig()
        self._storage = FileStorageService()

    def random_string(self, length: int) -> str:
        """Return ``length`` random characters from a 64-symbol alphabet."""
        return RandomStringGenerator.generate(length)

    async def upload_files(
        self,
        request: Request,
        upload_dir: str | Path,
        rename: bool = True,
    ) -> list[UploadedFile]:
        """Validate and store every file of a multipart request."""
        handler = UploadHandler(self.config, storage=self._storage)
        return await handler.upload_files(request, upload_dir, rename=rename)

    async def upload_one_file(
        self,
        request: Request,
        upload_dir: str | Path,
        rename: bool = True,
    ) -> UploadedFile:
        """Validate and store the single file of a multipart request."""
        handler = UploadHandler(self.config, storage=self._storage)
        return await handler.upload_one_file(request, upload_dir, rename=rename)

    def create_dir_if_not_exists(self, path: str | Path) -> Path:
        """Create ``path`` and its parents if missing."""
        return self._storage.create_dir_if_not_exists(path)

    def slugify(self, text: str) -> str:
        """Return a lowercase, hyphen-separated slug of ``text``."""
        return SlugGenerator.generate(text)

    def download_static_file(
        self,
        directory: str | Path,
        file_name: str,
        display_name: str,
    ) -> FileResponse:
        """Return a response that downloads a file as an attachment."""
        return downloads.download_static_file(directory, file_name, display_name)

    async def read_json(self, request: Request, target: type[T]) -> T:
        """Decode exactly one JSON value from the request body into ``target``."""
        return await json_reader.read_json(
            request,
            target,
            max_bytes=self.config.max_json_size,
            allow_unknown_fields=self.config.allow_unknown_fields,
        )

    def write_json(
        self,
        data: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Return a JSON response with the given status and extra headers."""
        return json_responses.write_json(data, status_code=status_code, headers=headers)

    def error_json(self, error: BaseException | str, status_code: int = 400) -> Response:
        """Return ``{"error": true, "message": str(error)}`` with ``status_code``."""
        return json_responses.error_json(error, status_code=status_code)

    async def push_json_to_remote(
        self,
        url: str,
        data: Any,
        client: httpx.AsyncClient | None = None,
    ) -> tuple[httpx.Response, int]:
        """POST ``data`` as JSON to ``url`` and return the response and status."""
        return await remote_json_client.push_json_to_remote(url, data, client=client)
