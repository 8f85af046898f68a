"""Uploaded file entity.

A record of one file part that was validated and completely written to disk.
The file itself outlives the record and is the caller's to manage.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class UploadedFile:
    """Metadata for a stored upload.

    Attributes:
        new_file_name: Name of the file as stored in the upload directory.
        original_file_name: File name declared by the client.
        file_size: Number of bytes written.
    """

    new_file_name: str
    original_file_name: str
    file_size: int

    def to_dict(self) -> dict[str, str | int]:
        return asdict(self)
