"""Supabase Storage adapter for memo files."""

import mimetypes
from dataclasses import dataclass

from supabase import Client

from seednote_api.domain.files import StoredFile
from seednote_api.services.files import FileStorage, StorageDownloadError

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class SupabaseFileStorage(FileStorage):
    """Download memo files from a Supabase Storage bucket."""

    client: Client
    bucket: str

    def download(self, path: str) -> StoredFile:
        """Download file bytes from the bucket."""
        try:
            content = self.client.storage.from_(self.bucket).download(path)
        except Exception as exc:
            raise StorageDownloadError(path) from exc
        return StoredFile(path=path, content=content, content_type=guess_type(path))


def guess_type(path: str) -> str:
    """Guess a content type from the file name."""
    content_type, _ = mimetypes.guess_type(path)
    return content_type or DEFAULT_CONTENT_TYPE
