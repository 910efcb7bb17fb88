"""Stored file access."""

from typing import Protocol

from seednote_api.domain.files import StoredFile


class StorageDownloadError(RuntimeError):
    """Storage could not return the requested file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Failed to download {path!r} from storage")


class FileStorage(Protocol):
    """Interface for reading memo files from object storage."""

    def download(self, path: str) -> StoredFile:
        """Return the file stored at ``path`` or raise StorageDownloadError."""
