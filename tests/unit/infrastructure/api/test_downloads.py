"""Unit tests for static file downloads."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from webtoolkit.core.exceptions import ErrorKind, FilesystemError
from webtoolkit.infrastructure.api.downloads import content_disposition, download_static_file


@pytest.fixture
def files_dir(tmp_path):
    (tmp_path / "pic.jpg").write_bytes(b"\xff\xd8\xff" + b"\x00" * 98)
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "notes.txt").write_text("notes")
    return tmp_path


@pytest.fixture
def app(files_dir):
    app = FastAPI()

    @app.get("/download/{file_name:path}")
    async def download(file_name: str, display_name: str = "puppy.jpg"):
        return download_static_file(files_dir, file_name, display_name)

    return app


class TestContentDisposition:
    """Tests for content_disposition."""

    def test_ascii_name(self):
        assert content_disposition("puppy.jpg") == 'attachment; filename="puppy.jpg"'

    def test_quotes_escaped(self):
        assert content_disposition('say "hi".txt') == 'attachment; filename="say \\"hi\\".txt"'

    def test_non_ascii_name(self):
        value = content_disposition("café.txt")

        assert value.startswith("attachment; ")
        assert "filename*=utf-8''caf%C3%A9.txt" in value
        assert value.isascii()


class TestDownloadStaticFile:
    """Tests for download_static_file."""

    @pytest.mark.asyncio
    async def test_download(self, app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/download/pic.jpg")

        assert response.status_code == 200
        assert response.headers["content-length"] == "101"
        assert response.headers["content-disposition"] == 'attachment; filename="puppy.jpg"'
        assert response.content.startswith(b"\xff\xd8\xff")

    @pytest.mark.asyncio
    async def test_download_from_subdirectory(self, app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/download/sub/notes.txt", params={"display_name": "n.txt"})

        assert response.status_code == 200
        assert response.text == "notes"
        assert response.headers["content-disposition"] == 'attachment; filename="n.txt"'

    def test_missing_file(self, files_dir):
        with pytest.raises(FilesystemError) as exc_info:
            download_static_file(files_dir, "nope.jpg", "nope.jpg")

        assert exc_info.value.kind is ErrorKind.FILE_NOT_FOUND
        assert str(exc_info.value) == "file not found: nope.jpg"

    def test_directory_is_not_a_file(self, files_dir):
        with pytest.raises(FilesystemError) as exc_info:
            download_static_file(files_dir, "sub", "sub")

        assert exc_info.value.kind is ErrorKind.FILE_NOT_FOUND

    @pytest.mark.parametrize("file_name", ["../secret.txt", "sub/../../secret.txt", "/etc/passwd"])
    def test_path_outside_directory(self, files_dir, file_name):
        (files_dir.parent / "secret.txt").write_text("secret")

        with pytest.raises(FilesystemError) as exc_info:
            download_static_file(files_dir, file_name, "secret.txt")

        assert exc_info.value.kind is ErrorKind.FILESYSTEM_FAILURE
        assert str(exc_info.value) == "invalid file path"
